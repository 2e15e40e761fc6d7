"""Address arithmetic for breakers, zones, buses and panels."""

from __future__ import annotations

import math

from pypowerlink.constants import (
    BREAKER_ADDRESS_CORRECTION,
    BUS_ADDRESS_CORRECTION,
    MAX_BREAKERS_ON_BUS,
    MAX_BREAKERS_ON_PANEL,
    MAX_BUSES,
    MAX_PANELS,
)
from pypowerlink.exceptions import InvalidArgumentError


def breaker_address(base: int, bus: int, position: int, stride: int) -> int:
    """Absolute Modbus address of a breaker attribute.

    Args:
        base: Documented base address of the attribute area
        bus: Bus index (0-15)
        position: 1-based breaker position on the bus (1-21)
        stride: Addresses reserved per bus in this area

    Returns:
        ``base + bus * stride - 2 + position``
    """
    return base + bus * stride - BREAKER_ADDRESS_CORRECTION + position


def zone_address(base: int, zone: int) -> int:
    """Absolute Modbus address of a 1-based zone attribute."""
    return base - BREAKER_ADDRESS_CORRECTION + zone


def bus_address(base: int, bus: int) -> int:
    """Absolute Modbus address of a bus attribute."""
    return base - BUS_ADDRESS_CORRECTION + bus


def bus_label(bus: int) -> str:
    """Human-readable bus number, e.g. bus 2 -> ``"1L"``, bus 11 -> ``"5R"``."""
    if bus % 2 == 0:
        return f"{math.ceil(bus / 2)}L"
    return f"{math.ceil(bus / 2) - 1}R"


def clamp(value: int, minimum: int, maximum: int) -> int:
    return min(max(value, minimum), maximum)


def validate_bus(bus: int) -> None:
    if not 0 <= bus < MAX_BUSES:
        raise InvalidArgumentError(f"Invalid bus number {bus}: must be 0-{MAX_BUSES - 1}")


def validate_bus_breaker(breaker: int) -> None:
    if not 1 <= breaker <= MAX_BREAKERS_ON_BUS:
        raise InvalidArgumentError(
            f"Invalid breaker number {breaker}: must be 1-{MAX_BREAKERS_ON_BUS}"
        )


def validate_panel(panel: int) -> None:
    if not 0 <= panel < MAX_PANELS:
        raise InvalidArgumentError(f"Invalid panel number {panel}: must be 0-{MAX_PANELS - 1}")


def validate_panel_breaker(breaker: int) -> None:
    if not 1 <= breaker <= MAX_BREAKERS_ON_PANEL:
        raise InvalidArgumentError(
            f"Invalid breaker number {breaker}: must be 1-{MAX_BREAKERS_ON_PANEL}"
        )


def panel_breaker_to_bus(panel: int, breaker: int) -> tuple[int, int, bool]:
    """Map a panel-relative breaker number onto its bus.

    Odd breaker numbers sit on the panel's left (even-indexed) bus, even
    numbers on the right (odd-indexed) bus.

    Args:
        panel: Panel index (0-7)
        breaker: Panel-relative breaker number (1-42)

    Returns:
        Tuple of (bus index, bus-relative position, is_left)
    """
    is_left = breaker % 2 == 1
    bus = panel * 2 + (0 if is_left else 1)
    return bus, math.ceil(breaker / 2), is_left
