"""Transport protocol consumed by the feature engine and client.

Any object implementing these coroutines can drive a
:class:`~pypowerlink.client.PowerlinkClient`, which is how the tests supply
a fake controller. Each call is a single request/response round trip and
must complete before the next is issued.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class PowerlinkTransport(Protocol):
    """Modbus primitives used by the driver."""

    @property
    def is_connected(self) -> bool:
        """Whether a session is open."""
        ...

    async def connect(self) -> None:
        """Open a session to the controller."""
        ...

    async def disconnect(self) -> None:
        """Close the session, if any."""
        ...

    async def read_coils(self, address: int, count: int) -> list[bool]:
        """FC 01."""
        ...

    async def write_coils(self, address: int, values: Sequence[bool]) -> None:
        """FC 15."""
        ...

    async def read_discrete_inputs(self, address: int, count: int) -> list[bool]:
        """FC 02."""
        ...

    async def read_holding_registers(self, address: int, count: int) -> list[int]:
        """FC 03."""
        ...

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        """FC 04."""
        ...

    async def write_registers(self, address: int, values: Sequence[int]) -> None:
        """FC 16."""
        ...

    async def write_register(self, address: int, value: int) -> None:
        """FC 06."""
        ...

    async def read_file_records(self, file_number: int, address: int, count: int) -> list[bytes]:
        """FC 20: ``count`` consecutive records starting at ``address``."""
        ...

    async def write_file_records(
        self, file_number: int, address: int, records: Sequence[bytes]
    ) -> None:
        """FC 21: consecutive records starting at ``address``."""
        ...
