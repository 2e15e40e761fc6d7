"""Driver client for the panel controller.

Usage:
    from pypowerlink import PowerlinkClient

    async with PowerlinkClient("192.168.1.50") as client:
        panels = await client.get_panel_info(0, 8)
        breakers = await client.get_breaker_info_by_panel(0, 1, 42, ["state", "name_tag"])
        await client.set_breaker_info_by_panel(0, 3, [{"direct_breaker_control": 1}])

Addressing:
    Bus-level calls take a bus index (0-15) and a bus-relative breaker
    position (1-21). Panel-level calls take a panel index (0-7) and a
    panel-relative breaker number (1-42); odd numbers are on the panel's
    left bus, even numbers on its right bus.

One TCP session is expected per top-level operation: open it with ``init()``
or ``async with``, issue the calls, and ``close()`` it.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from pypowerlink._feature_engine import read_features, write_features, writable_features
from pypowerlink.addressing import (
    clamp,
    panel_breaker_to_bus,
    validate_bus,
    validate_bus_breaker,
    validate_panel,
    validate_panel_breaker,
)
from pypowerlink.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
    MAX_BREAKERS_ON_BUS,
    MAX_BREAKERS_ON_PANEL,
    MAX_BUSES,
    MAX_PANELS,
)
from pypowerlink.exceptions import InvalidArgumentError
from pypowerlink.models import BreakerInfo, BusInfo, PanelInfo
from pypowerlink.registers import BREAKER_FEATURES, BUS_FEATURES
from pypowerlink.session import write_session
from pypowerlink.topology import (
    merged_panel_id,
    require_sequence,
    separate,
    shuffle,
    single_breaker_panel_id,
    split_quantity,
)
from pypowerlink.transports.factory import create_modbus_transport
from pypowerlink.transports.protocol import PowerlinkTransport

_LOGGER = logging.getLogger(__name__)


class PowerlinkClient:
    """Reads and writes panels, buses and breakers on one controller.

    Args:
        host: Controller IP address or hostname.  Ignored when ``transport``
            is given.
        port: TCP port (default 502)
        unit_id: Modbus unit ID (default 1)
        timeout: Per-request timeout in seconds
        connect_timeout: Connection attempt timeout in seconds
        transport: Pre-built transport, e.g. a fake for testing
    """

    def __init__(
        self,
        host: str | None = None,
        *,
        port: int = DEFAULT_PORT,
        unit_id: int = DEFAULT_UNIT_ID,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        transport: PowerlinkTransport | None = None,
    ) -> None:
        if transport is None:
            if not host:
                raise InvalidArgumentError("host is required when no transport is given")
            transport = create_modbus_transport(
                host,
                port=port,
                unit_id=unit_id,
                timeout=timeout,
                connect_timeout=connect_timeout,
            )
        self._transport = transport

    @property
    def transport(self) -> PowerlinkTransport:
        return self._transport

    @property
    def is_connected(self) -> bool:
        return self._transport.is_connected

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Open a session to the controller."""
        await self._transport.connect()

    async def close(self) -> None:
        """Close the session if one is open."""
        if self._transport.is_connected:
            await self._transport.disconnect()

    async def __aenter__(self) -> PowerlinkClient:
        await self.init()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[None]:
        """Reuse the open session, or open one for the duration of the block."""
        if self._transport.is_connected:
            yield
            return
        await self.init()
        try:
            yield
        finally:
            await self.close()

    # ------------------------------------------------------------------
    # Bus-level operations
    # ------------------------------------------------------------------

    async def get_breaker_info_by_bus(
        self,
        bus: int,
        breaker: int,
        quantity: int = 1,
        fields: Sequence[str] | None = None,
    ) -> list[BreakerInfo]:
        """Read breakers on one bus.

        Args:
            bus: Bus index (0-15)
            breaker: First bus-relative breaker position (1-21)
            quantity: Number of breakers, clamped to the end of the bus
            fields: Feature names to read (see ``BREAKER_FIELDS``); all if empty

        Returns:
            One dict per breaker

        Raises:
            InvalidArgumentError: If ``bus`` or ``breaker`` is out of range
            TransportError: If any read fails; remaining features are skipped
        """
        validate_bus_breaker(breaker)
        validate_bus(bus)
        quantity = clamp(quantity, 0, MAX_BREAKERS_ON_BUS - breaker + 1)

        _LOGGER.debug("Reading %d breaker(s) from bus %d at %d: %s", quantity, bus, breaker, fields)
        return await read_features(
            self._transport,
            BREAKER_FEATURES,
            bus=bus,
            start=breaker,
            quantity=quantity,
            fields=fields,
        )

    async def set_breaker_info_by_bus(
        self,
        bus: int,
        breaker: int,
        info: Sequence[Mapping[str, Any]],
    ) -> list[str]:
        """Write breakers on one bus inside a single write session.

        Entries beyond the end of the bus are dropped. Features are taken
        from the first entry; ``on_time`` and ``strike_count`` are always
        reset to 0 whatever value is given.

        Args:
            bus: Bus index (0-15)
            breaker: First bus-relative breaker position (1-21)
            info: One dict of feature values per breaker

        Returns:
            Names of the features written successfully

        Raises:
            InvalidArgumentError: For out-of-range indexes or malformed ``info``
            WriteSessionError: If a framing command fails
        """
        validate_bus_breaker(breaker)
        validate_bus(bus)
        require_sequence(info)

        if not info:
            return []

        capacity = MAX_BREAKERS_ON_BUS - breaker + 1
        if len(info) > capacity:
            _LOGGER.debug(
                "Truncating write on bus %d from %d to %d breaker(s)", bus, len(info), capacity
            )
            info = info[:capacity]

        features = writable_features(BREAKER_FEATURES, info)
        async with write_session(self._transport):
            written = await write_features(
                self._transport, features, bus=bus, start=breaker, info=info
            )
        _LOGGER.debug("Wrote %s to bus %d at %d", written, bus, breaker)
        return written

    async def get_bus_info(
        self,
        bus: int,
        quantity: int = 1,
        fields: Sequence[str] | None = None,
    ) -> list[BusInfo]:
        """Read consecutive buses starting at ``bus``.

        Raises:
            InvalidArgumentError: If ``bus`` is out of range
        """
        validate_bus(bus)
        quantity = clamp(quantity, 0, MAX_BUSES - bus)

        return await read_features(
            self._transport,
            BUS_FEATURES,
            bus=bus,
            start=bus,
            quantity=quantity,
            fields=fields,
        )

    # ------------------------------------------------------------------
    # Panel-level operations
    # ------------------------------------------------------------------

    async def get_panel_info(
        self,
        panel: int,
        quantity: int = 1,
        fields: Sequence[str] | None = None,
    ) -> list[PanelInfo]:
        """Read consecutive panels starting at ``panel``.

        ``fields`` selects bus features for each panel's two buses.

        Raises:
            InvalidArgumentError: If ``panel`` is out of range
        """
        validate_panel(panel)
        quantity = clamp(quantity, 0, MAX_PANELS - panel)

        buses = await self.get_bus_info(panel * 2, quantity * 2, fields)
        return [
            PanelInfo(
                id=panel + index,
                name_tag=buses[index * 2].get("name_tag"),
                bus_l=buses[index * 2],
                bus_r=buses[index * 2 + 1],
            )
            for index in range(quantity)
        ]

    async def get_breaker_info_by_panel(
        self,
        panel: int,
        breaker: int,
        quantity: int = 1,
        fields: Sequence[str] | None = None,
    ) -> list[BreakerInfo]:
        """Read breakers by panel-relative number.

        A single breaker is read from its bus directly. Several breakers are
        split across both buses (the starting side gets the odd one out) and
        interleaved back into panel order.

        Args:
            panel: Panel index (0-7)
            breaker: First panel-relative breaker number (1-42)
            quantity: Number of breakers
            fields: Feature names to read; all if empty

        Raises:
            InvalidArgumentError: If ``panel`` or ``breaker`` is out of range
        """
        validate_panel(panel)
        validate_panel_breaker(breaker)
        bus, position, is_left = panel_breaker_to_bus(panel, breaker)

        if quantity <= 1:
            entries = await self.get_breaker_info_by_bus(bus, position, quantity, fields)
            for index, entry in enumerate(entries):
                if "id" in entry:
                    entry["id"] = single_breaker_panel_id(position, index, is_left)
            return entries

        other_bus = bus + 1 if is_left else bus - 1
        first_quantity, second_quantity = split_quantity(quantity)
        first = await self.get_breaker_info_by_bus(bus, position, first_quantity, fields)
        second = await self.get_breaker_info_by_bus(other_bus, position, second_quantity, fields)

        merged = shuffle(first, second, quantity)
        for index, entry in enumerate(merged):
            if "id" in entry:
                entry["id"] = merged_panel_id(position, index, is_left)
        return merged

    async def set_breaker_info_by_panel(
        self,
        panel: int,
        breaker: int,
        info: Sequence[Mapping[str, Any]],
    ) -> list[str]:
        """Write breakers by panel-relative number.

        Several entries are split across both buses; each bus is written in
        its own write session, so the panel write is not atomic.

        Returns:
            For one entry, the bus-level result.  Otherwise the two bus-level
            results interleaved, starting with the starting side's.

        Raises:
            InvalidArgumentError: For out-of-range indexes or malformed ``info``
        """
        validate_panel(panel)
        validate_panel_breaker(breaker)
        require_sequence(info)
        bus, position, is_left = panel_breaker_to_bus(panel, breaker)

        if len(info) <= 1:
            return await self.set_breaker_info_by_bus(bus, position, info)

        other_bus = bus + 1 if is_left else bus - 1
        first_half, second_half = separate(info)
        first = await self.set_breaker_info_by_bus(bus, position, first_half)
        second = await self.set_breaker_info_by_bus(other_bus, position, second_half)
        return shuffle(first, second, len(first) + len(second))

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    async def control_breakers(
        self,
        panel: int,
        breaker: int,
        on: bool,
        quantity: int = 1,
    ) -> list[str]:
        """Switch ``quantity`` consecutive panel breakers on or off.

        Opens (and closes) a session if none is open. ``quantity`` is
        clamped to the breakers left on the panel.
        """
        validate_panel(panel)
        validate_panel_breaker(breaker)
        quantity = clamp(quantity, 1, MAX_BREAKERS_ON_PANEL - breaker + 1)
        values = [{"direct_breaker_control": bool(on)} for _ in range(quantity)]

        async with self._session():
            return await self.set_breaker_info_by_panel(panel, breaker, values)
