"""Transport layer for pypowerlink.

Usage:
    from pypowerlink.transports import create_modbus_transport

    transport = create_modbus_transport(host="192.168.1.50")
    async with transport:
        coils = await transport.read_coils(3063, 4)
"""

from __future__ import annotations

from .config import TransportConfig
from .exceptions import (
    DeviceExceptionError,
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
    WriteSessionError,
)
from .factory import create_modbus_transport, create_transport_from_config
from .modbus import ModbusTransport
from .protocol import PowerlinkTransport

__all__ = [
    # Transports
    "ModbusTransport",
    "PowerlinkTransport",
    # Configuration
    "TransportConfig",
    "create_modbus_transport",
    "create_transport_from_config",
    # Exceptions
    "DeviceExceptionError",
    "TransportConnectionError",
    "TransportError",
    "TransportReadError",
    "TransportTimeoutError",
    "TransportWriteError",
    "WriteSessionError",
]
