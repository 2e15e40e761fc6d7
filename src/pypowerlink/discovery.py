"""Whole-controller snapshot.

Reads every panel and then the breakers of each panel, which is what a host
integration needs to build its panel/breaker pickers.

Example:
    async with PowerlinkClient("192.168.1.50") as client:
        snapshot = await load_snapshot(client)
        for panel in snapshot.panels_with_breakers:
            print(panel.id, [b["name_tag"] for b in panel.breakers])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pypowerlink.constants import MAX_BREAKERS_ON_PANEL, MAX_PANELS

if TYPE_CHECKING:
    from pypowerlink.client import PowerlinkClient
    from pypowerlink.models import BreakerInfo, PanelInfo

_LOGGER = logging.getLogger(__name__)

SNAPSHOT_BREAKER_FIELDS: tuple[str, ...] = ("id", "bus_number", "state", "name_tag", "present")


@dataclass
class PanelBreakers:
    """Breakers read for one panel."""

    id: int
    breakers: list[BreakerInfo] = field(default_factory=list)

    @property
    def present_breakers(self) -> list[BreakerInfo]:
        return [breaker for breaker in self.breakers if breaker.get("present")]


@dataclass
class PanelSnapshot:
    """All panels plus the breakers of the panels that were scanned."""

    panels: list[PanelInfo] = field(default_factory=list)
    panels_with_breakers: list[PanelBreakers] = field(default_factory=list)

    def breakers_for(self, panel: int) -> list[BreakerInfo]:
        """Breakers of ``panel``, or an empty list if it was not scanned."""
        for entry in self.panels_with_breakers:
            if entry.id == panel:
                return entry.breakers
        return []


async def load_snapshot(
    client: PowerlinkClient,
    *,
    filter_absent: bool = True,
    breaker_fields: tuple[str, ...] = SNAPSHOT_BREAKER_FIELDS,
) -> PanelSnapshot:
    """Read all panels and the breakers on them.

    Args:
        client: Client with an open session
        filter_absent: Skip breaker reads for panels with neither bus present
        breaker_fields: Breaker features to read for each panel

    Returns:
        PanelSnapshot with every panel and the scanned panels' breakers

    Raises:
        TransportError: If any read fails
    """
    panels = await client.get_panel_info(0, MAX_PANELS)

    scanned = [panel for panel in panels if panel.is_present] if filter_absent else panels
    _LOGGER.debug("Scanning breakers on panels %s", [panel.id for panel in scanned])

    panels_with_breakers = []
    for panel in scanned:
        breakers = await client.get_breaker_info_by_panel(
            panel.id, 1, MAX_BREAKERS_ON_PANEL, list(breaker_fields)
        )
        panels_with_breakers.append(PanelBreakers(id=panel.id, breakers=breakers))

    return PanelSnapshot(panels=panels, panels_with_breakers=panels_with_breakers)
