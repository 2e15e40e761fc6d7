"""Result models returned by the driver.

Breaker and bus results are plain dicts holding only the requested features
(see :mod:`pypowerlink.registers`). Panels get a small dataclass because
they always carry the same four members.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

BreakerInfo = dict[str, Any]
BusInfo = dict[str, Any]


@dataclass
class PanelInfo:
    """A panel and its two buses.

    Attributes:
        id: Panel index (0-7)
        name_tag: Name of the left bus, which names the panel.  None when
            ``name_tag`` was not requested.
        bus_l: Left (even-indexed) bus
        bus_r: Right (odd-indexed) bus
    """

    id: int
    name_tag: str | None = None
    bus_l: BusInfo = field(default_factory=dict)
    bus_r: BusInfo = field(default_factory=dict)

    @property
    def is_present(self) -> bool:
        """True when either bus reports itself present."""
        return bool(self.bus_l.get("present") or self.bus_r.get("present"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name_tag": self.name_tag,
            "bus_l": self.bus_l,
            "bus_r": self.bus_r,
        }
