"""Python driver for Modbus TCP lighting/breaker panel controllers.

Usage:
    Basic client usage:
        from pypowerlink import PowerlinkClient

        async with PowerlinkClient("192.168.1.50") as client:
            panels = await client.get_panel_info(0, 8)
            breakers = await client.get_breaker_info_by_panel(0, 1, 42, ["state"])

    Switching breakers (opens its own session):
        client = PowerlinkClient("192.168.1.50")
        await client.control_breakers(panel=0, breaker=3, on=False)

    Whole-controller snapshot:
        from pypowerlink.discovery import load_snapshot

        async with PowerlinkClient("192.168.1.50") as client:
            snapshot = await load_snapshot(client)
"""

from __future__ import annotations

from .client import PowerlinkClient
from .discovery import PanelBreakers, PanelSnapshot, load_snapshot
from .exceptions import InvalidArgumentError, PowerlinkError
from .models import PanelInfo
from .topology import separate, shuffle
from .transports.exceptions import (
    DeviceExceptionError,
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
    WriteSessionError,
)

__version__ = "0.1.0"
__all__ = [
    "PowerlinkClient",
    # Models
    "PanelInfo",
    "PanelBreakers",
    "PanelSnapshot",
    "load_snapshot",
    # Topology helpers
    "separate",
    "shuffle",
    # Exceptions
    "PowerlinkError",
    "InvalidArgumentError",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "TransportReadError",
    "TransportWriteError",
    "DeviceExceptionError",
    "WriteSessionError",
]
