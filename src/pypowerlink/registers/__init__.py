"""Feature catalogues for the panel controller.

- breaker: per-breaker attributes (coils, discrete inputs, registers, file 5)
- bus: per-bus attributes (discrete inputs, holding registers, file 6)
"""

from pypowerlink.registers.breaker import (
    BREAKER_FEATURES,
    BREAKER_FIELDS,
    WRITABLE_BREAKER_FIELDS,
)
from pypowerlink.registers.breaker import (
    BY_NAME as BREAKER_BY_NAME,
)
from pypowerlink.registers.bus import (
    BUS_FEATURES,
    BUS_FIELDS,
)
from pypowerlink.registers.bus import (
    BY_NAME as BUS_BY_NAME,
)
from pypowerlink.registers.features import (
    FeatureDefinition,
    FeatureScope,
    Primitive,
    select_features,
)

__all__ = [
    "BREAKER_BY_NAME",
    "BREAKER_FEATURES",
    "BREAKER_FIELDS",
    "BUS_BY_NAME",
    "BUS_FEATURES",
    "BUS_FIELDS",
    "FeatureDefinition",
    "FeatureScope",
    "Primitive",
    "WRITABLE_BREAKER_FIELDS",
    "select_features",
]
