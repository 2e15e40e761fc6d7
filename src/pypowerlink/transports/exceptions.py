"""Transport-specific exceptions.

This module provides exception classes for transport operations,
allowing clients to handle errors appropriately.

All transport exceptions inherit from :class:`~pypowerlink.exceptions.PowerlinkError`
so callers can use a single ``except PowerlinkError`` to catch both
validation and Modbus failures.
"""

from __future__ import annotations

from pypowerlink.exceptions import PowerlinkError

# Modbus exception codes (Modbus Application Protocol v1.1b3, section 7)
MODBUS_EXCEPTION_TEXT: dict[int, str] = {
    0x01: "IllegalFunction",
    0x02: "IllegalDataAddress",
    0x03: "IllegalDataValue",
    0x04: "ServerDeviceFailure",
    0x05: "Acknowledge",
    0x06: "ServerDeviceBusy",
    0x08: "MemoryParityError",
    0x0A: "GatewayPathUnavailable",
    0x0B: "GatewayTargetDeviceFailedToRespond",
}


class TransportError(PowerlinkError):
    """Base exception for all transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Failed to connect to the controller."""

    pass


class TransportTimeoutError(TransportError):
    """Operation timed out."""

    pass


class TransportReadError(TransportError):
    """Failed to read data from the controller."""

    pass


class TransportWriteError(TransportError):
    """Failed to write data to the controller."""

    pass


class DeviceExceptionError(TransportError):
    """The controller answered with a Modbus exception response.

    Attributes:
        exception_code: Raw Modbus exception code from the response
        exception_text: Symbolic name of the code (empty if unknown)
        operation: Request that was rejected (e.g. ``"read_file_records"``)
        address: Starting address of the rejected request
    """

    def __init__(self, exception_code: int, operation: str, address: int) -> None:
        """Initialize with the exception code and request details.

        Args:
            exception_code: Modbus exception code returned by the controller
            operation: Name of the transport operation that failed
            address: Starting address of the request
        """
        self.exception_code = exception_code
        self.exception_text = MODBUS_EXCEPTION_TEXT.get(exception_code, "")
        self.operation = operation
        self.address = address
        label = self.exception_text or f"code {exception_code}"
        super().__init__(f"Modbus exception {label} for {operation} at address {address}")


class WriteSessionError(TransportWriteError):
    """A configuration-mode framing command failed.

    Attributes:
        step: Name of the framing step that failed
    """

    def __init__(self, step: str, message: str) -> None:
        """Initialize with the failed framing step.

        Args:
            step: Framing step name (e.g. ``"enable_command"``)
            message: Description of the underlying failure
        """
        self.step = step
        super().__init__(f"Write session step '{step}' failed: {message}")
