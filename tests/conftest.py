"""Pytest configuration and fixtures for pypowerlink tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from pypowerlink.client import PowerlinkClient
from pypowerlink.transports.exceptions import TransportConnectionError


class FakeTransport:
    """In-memory controller that records every request in order.

    Reads return values registered with :meth:`respond`, or a default
    (``False`` bits, ``0`` registers, blank name records) for addresses with
    no canned response. :meth:`fail` makes an operation raise.

    Recorded calls look like ``("read_coils", address, count)``,
    ``("write_coils", address, [values])``, ``("write_register", address, value)``
    and ``("read_file_records", file_number, address, count)``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.connect_count = 0
        self.disconnect_count = 0
        self.connect_error: Exception | None = None
        self._connected = False
        self._responses: dict[tuple[str, int], list[Any]] = {}
        self._failures: dict[tuple[str, int | None], Exception] = {}

    # -- test helpers ------------------------------------------------------

    def respond(self, operation: str, address: int, values: Sequence[Any]) -> None:
        self._responses[(operation, address)] = list(values)

    def fail(self, operation: str, error: Exception, address: int | None = None) -> None:
        """Make ``operation`` raise ``error`` (only at ``address`` if given)."""
        self._failures[(operation, address)] = error

    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]

    def data_writes(self) -> list[tuple[Any, ...]]:
        """Recorded writes other than the write-session framing commands."""
        return [call for call in self.calls if call[0] != "write_register"]

    def _check_failure(self, operation: str, address: int) -> None:
        error = self._failures.get((operation, address)) or self._failures.get((operation, None))
        if error is not None:
            raise error

    def _read(self, operation: str, address: int, count: int, default: Any) -> list[Any]:
        self.calls.append((operation, address, count))
        self._check_failure(operation, address)
        values = self._responses.get((operation, address))
        if values is None:
            return [default] * count
        return values[:count]

    # -- transport protocol ------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self.connect_count += 1
        if self.connect_error is not None:
            raise self.connect_error
        self._connected = True

    async def disconnect(self) -> None:
        self.disconnect_count += 1
        self._connected = False

    async def read_coils(self, address: int, count: int) -> list[bool]:
        return self._read("read_coils", address, count, False)

    async def read_discrete_inputs(self, address: int, count: int) -> list[bool]:
        return self._read("read_discrete_inputs", address, count, False)

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        return self._read("read_input_registers", address, count, 0)

    async def read_holding_registers(self, address: int, count: int) -> list[int]:
        return self._read("read_holding_registers", address, count, 0)

    async def read_file_records(self, file_number: int, address: int, count: int) -> list[bytes]:
        self.calls.append(("read_file_records", file_number, address, count))
        self._check_failure("read_file_records", address)
        values = self._responses.get(("read_file_records", address))
        if values is None:
            return [b" " * 16] * count
        return values[:count]

    async def write_coils(self, address: int, values: Sequence[bool]) -> None:
        self.calls.append(("write_coils", address, list(values)))
        self._check_failure("write_coils", address)

    async def write_registers(self, address: int, values: Sequence[int]) -> None:
        self.calls.append(("write_registers", address, list(values)))
        self._check_failure("write_registers", address)

    async def write_register(self, address: int, value: int) -> None:
        self.calls.append(("write_register", address, value))
        self._check_failure("write_register", address)

    async def write_file_records(
        self, file_number: int, address: int, records: Sequence[bytes]
    ) -> None:
        self.calls.append(("write_file_records", file_number, address, list(records)))
        self._check_failure("write_file_records", address)


@pytest.fixture
def transport() -> FakeTransport:
    """Fresh recording transport."""
    return FakeTransport()


@pytest.fixture
def connected_transport(transport: FakeTransport) -> FakeTransport:
    """Recording transport with a session already open."""
    transport._connected = True
    return transport


@pytest.fixture
def client(connected_transport: FakeTransport) -> PowerlinkClient:
    """Client bound to a connected recording transport."""
    return PowerlinkClient(transport=connected_transport)


@pytest.fixture
def refused_transport(transport: FakeTransport) -> FakeTransport:
    """Recording transport whose connect() is refused."""
    transport.connect_error = TransportConnectionError("Connection refused")
    return transport
