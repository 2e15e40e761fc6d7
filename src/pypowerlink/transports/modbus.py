"""Modbus TCP transport implementation.

This module provides the ModbusTransport class, which talks to the panel
controller over Modbus TCP using pymodbus' asyncio client.

IMPORTANT: Sequential Requests Only
------------------------------------
The controller does not reliably handle more than one outstanding Modbus
transaction. Every request is issued under a lock and awaited to completion
before the next one is sent; nothing is pipelined.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from pymodbus.client import AsyncModbusTcpClient
from pymodbus.exceptions import ModbusException, ModbusIOException
from pymodbus.pdu.file_message import FileRecord

from pypowerlink.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
    FILE_RECORDS_PER_REQUEST,
    NAME_TAG_LENGTH,
)

from .exceptions import (
    DeviceExceptionError,
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
)

_LOGGER = logging.getLogger(__name__)

__all__ = ["ModbusTransport"]


class ModbusTransport:
    """Modbus TCP transport for the panel controller.

    Example:
        transport = ModbusTransport(host="192.168.1.50")
        async with transport:
            bits = await transport.read_discrete_inputs(2499, 16)
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        unit_id: int = DEFAULT_UNIT_ID,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        pymodbus_retries: int = 3,
    ) -> None:
        """Initialize Modbus transport.

        Args:
            host: IP address or hostname of the controller
            port: TCP port (default 502 for Modbus)
            unit_id: Modbus unit/device ID (default 1)
            timeout: Per-request timeout in seconds
            connect_timeout: How long ``connect()`` waits for the TCP
                handshake before giving up
            pymodbus_retries: Number of retries passed to pymodbus client
                (default 3)
        """
        self._host = host
        self._port = port
        self._unit_id = unit_id
        self._timeout = timeout
        self._connect_timeout = connect_timeout
        self._pymodbus_retries = pymodbus_retries
        self._client: AsyncModbusTcpClient | None = None
        self._connected = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def host(self) -> str:
        """Get the controller host."""
        return self._host

    @property
    def port(self) -> int:
        """Get the controller port."""
        return self._port

    @property
    def unit_id(self) -> int:
        """Get the Modbus unit/device ID."""
        return self._unit_id

    @property
    def is_connected(self) -> bool:
        """Whether a session is open."""
        return self._connected

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Establish Modbus TCP connection.

        The connection attempt races ``connect_timeout``. If the timer wins,
        the attempt is abandoned and its socket is closed whenever it
        eventually settles.

        Raises:
            TransportTimeoutError: If the controller does not accept the
                connection within ``connect_timeout``
            TransportConnectionError: If the connection is refused
        """
        client = AsyncModbusTcpClient(
            host=self._host,
            port=self._port,
            timeout=self._timeout,
            retries=self._pymodbus_retries,
        )
        attempt = asyncio.ensure_future(client.connect())
        done, _ = await asyncio.wait({attempt}, timeout=self._connect_timeout)

        if attempt not in done:
            attempt.add_done_callback(lambda task: _discard_late_connection(client, task))
            _LOGGER.error(
                "Timed out connecting to %s:%s after %.2fs",
                self._host,
                self._port,
                self._connect_timeout,
            )
            raise TransportTimeoutError(f"Unable to connect to {self._host}:{self._port}")

        try:
            connected = attempt.result()
        except (TimeoutError, OSError, ModbusException) as err:
            client.close()
            _LOGGER.error("Failed to connect to %s:%s: %s", self._host, self._port, err)
            raise TransportConnectionError(
                f"Unable to connect to {self._host}:{self._port}: {err}"
            ) from err

        if not connected:
            client.close()
            raise TransportConnectionError(
                f"Failed to connect to controller at {self._host}:{self._port}"
            )

        self._client = client
        self._connected = True
        _LOGGER.info(
            "Modbus transport connected to %s:%s (unit %s)",
            self._host,
            self._port,
            self._unit_id,
        )

    async def disconnect(self) -> None:
        """Close Modbus TCP connection."""
        if self._client:
            self._client.close()
            self._client = None

        self._connected = False
        _LOGGER.debug("Modbus transport disconnected from %s:%s", self._host, self._port)

    async def __aenter__(self) -> ModbusTransport:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    # ------------------------------------------------------------------
    # Bits
    # ------------------------------------------------------------------

    async def read_coils(self, address: int, count: int) -> list[bool]:
        result = await self._execute(
            "read_coils",
            address,
            lambda client: client.read_coils(address, count=count, device_id=self._unit_id),
        )
        _require_count("read_coils", address, len(result.bits), count)
        return list(result.bits[:count])

    async def write_coils(self, address: int, values: Sequence[bool]) -> None:
        await self._execute(
            "write_coils",
            address,
            lambda client: client.write_coils(
                address, [bool(value) for value in values], device_id=self._unit_id
            ),
            write=True,
        )

    async def read_discrete_inputs(self, address: int, count: int) -> list[bool]:
        result = await self._execute(
            "read_discrete_inputs",
            address,
            lambda client: client.read_discrete_inputs(
                address, count=count, device_id=self._unit_id
            ),
        )
        _require_count("read_discrete_inputs", address, len(result.bits), count)
        return list(result.bits[:count])

    # ------------------------------------------------------------------
    # Registers
    # ------------------------------------------------------------------

    async def read_holding_registers(self, address: int, count: int) -> list[int]:
        result = await self._execute(
            "read_holding_registers",
            address,
            lambda client: client.read_holding_registers(
                address, count=count, device_id=self._unit_id
            ),
        )
        _require_count("read_holding_registers", address, len(result.registers), count)
        return list(result.registers[:count])

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        result = await self._execute(
            "read_input_registers",
            address,
            lambda client: client.read_input_registers(
                address, count=count, device_id=self._unit_id
            ),
        )
        _require_count("read_input_registers", address, len(result.registers), count)
        return list(result.registers[:count])

    async def write_registers(self, address: int, values: Sequence[int]) -> None:
        await self._execute(
            "write_registers",
            address,
            lambda client: client.write_registers(
                address, list(values), device_id=self._unit_id
            ),
            write=True,
        )

    async def write_register(self, address: int, value: int) -> None:
        await self._execute(
            "write_register",
            address,
            lambda client: client.write_register(address, value, device_id=self._unit_id),
            write=True,
        )

    # ------------------------------------------------------------------
    # File records
    # ------------------------------------------------------------------

    async def read_file_records(
        self,
        file_number: int,
        address: int,
        count: int,
        length: int = NAME_TAG_LENGTH,
    ) -> list[bytes]:
        """Read ``count`` consecutive records of ``length`` bytes.

        Requests are split into PDUs of at most eight sub-requests.
        ``FileRecord`` takes the length in bytes and sends it as words.
        """
        records: list[bytes] = []
        for offset in range(0, count, FILE_RECORDS_PER_REQUEST):
            chunk = [
                FileRecord(
                    file_number=file_number,
                    record_number=address + index,
                    record_length=length,
                )
                for index in range(offset, min(offset + FILE_RECORDS_PER_REQUEST, count))
            ]
            result = await self._execute(
                "read_file_records",
                address + offset,
                lambda client, chunk=chunk: client.read_file_record(
                    chunk, device_id=self._unit_id
                ),
            )
            _require_count("read_file_records", address + offset, len(result.records), len(chunk))
            records.extend(bytes(record.record_data) for record in result.records[: len(chunk)])
        return records

    async def write_file_records(
        self,
        file_number: int,
        address: int,
        records: Sequence[bytes],
    ) -> None:
        """Write consecutive records, eight per PDU."""
        for offset in range(0, len(records), FILE_RECORDS_PER_REQUEST):
            chunk = [
                FileRecord(
                    file_number=file_number,
                    record_number=address + offset + index,
                    record_data=data,
                )
                for index, data in enumerate(records[offset : offset + FILE_RECORDS_PER_REQUEST])
            ]
            await self._execute(
                "write_file_records",
                address + offset,
                lambda client, chunk=chunk: client.write_file_record(
                    chunk, device_id=self._unit_id
                ),
                write=True,
            )

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    async def _execute(
        self,
        operation: str,
        address: int,
        request: Callable[[AsyncModbusTcpClient], Awaitable[Any]],
        *,
        write: bool = False,
    ) -> Any:
        """Issue one request and translate failures into transport errors.

        Raises:
            TransportConnectionError: If no session is open
            TransportTimeoutError: If the request times out
            DeviceExceptionError: If the controller returns an exception response
            TransportReadError / TransportWriteError: For other failures
        """
        if self._client is None or not self._connected:
            raise TransportConnectionError("Modbus client not connected")

        error_cls: type[TransportError] = TransportWriteError if write else TransportReadError

        async with self._lock:
            _LOGGER.debug("%s at %d", operation, address)
            try:
                result = await request(self._client)
            except ModbusIOException as err:
                if "timeout" in str(err).lower():
                    raise TransportTimeoutError(f"Timeout during {operation} at {address}") from err
                raise error_cls(f"Failed {operation} at {address}: {err}") from err
            except TimeoutError as err:
                raise TransportTimeoutError(f"Timeout during {operation} at {address}") from err
            except (ModbusException, OSError) as err:
                raise error_cls(f"Failed {operation} at {address}: {err}") from err

        if result.isError():
            exception_code = getattr(result, "exception_code", None)
            if isinstance(exception_code, int):
                raise DeviceExceptionError(exception_code, operation, address)
            raise error_cls(f"Modbus error during {operation} at {address}: {result}")

        return result


def _require_count(operation: str, address: int, received: int, expected: int) -> None:
    """Reject a response that carries fewer values than were requested."""
    if received < expected:
        raise TransportReadError(
            f"Short response to {operation} at {address}: expected {expected}, got {received}"
        )


def _discard_late_connection(client: AsyncModbusTcpClient, attempt: asyncio.Future[Any]) -> None:
    """Close a client whose connect attempt finished after we gave up on it."""
    if not attempt.cancelled() and attempt.exception() is None:
        _LOGGER.debug("Closing connection that completed after timeout")
    client.close()
