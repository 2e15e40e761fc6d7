"""Bus feature catalogue.

Bus attributes are addressed with ``base - 1 + bus``. Unlike breakers they
do not get the extra hardware offset; this asymmetry has not been verified
against a controller.
"""

from __future__ import annotations

from typing import Any

from pypowerlink.addressing import bus_label
from pypowerlink.constants import BUS_NAME_FILE
from pypowerlink.registers.features import (
    FeatureDefinition,
    FeatureScope,
    Primitive,
    decode_name_tags,
    decode_numbering_sequence,
    flag_decoder,
    index_by_name,
)


def _bus_numbers(bus: int, start: int, quantity: int) -> list[Any]:
    return [bus_label(bus + index) for index in range(quantity)]


def _bus_ids(bus: int, start: int, quantity: int) -> list[Any]:
    return [bus + index for index in range(quantity)]


BUS_FEATURES: tuple[FeatureDefinition, ...] = (
    FeatureDefinition(
        name="bus_number",
        primitive=Primitive.COMPUTED,
        scope=FeatureScope.BUS,
        compute=_bus_numbers,
        description="Bus label such as '0L' or '3R'.",
    ),
    FeatureDefinition(
        name="id",
        primitive=Primitive.COMPUTED,
        scope=FeatureScope.BUS,
        compute=_bus_ids,
        description="Bus index (0-15).",
    ),
    FeatureDefinition(
        name="present",
        primitive=Primitive.DISCRETE_INPUTS,
        scope=FeatureScope.BUS,
        base_address=2500,
        decode=flag_decoder("Present", "Absent"),
        description="Bus detected by the controller.",
    ),
    FeatureDefinition(
        name="has_not_responding_breaker",
        primitive=Primitive.DISCRETE_INPUTS,
        scope=FeatureScope.BUS,
        base_address=9964,
        decode=flag_decoder("Not Responding", "Normal"),
        description="At least one breaker on the bus failed to answer.",
    ),
    FeatureDefinition(
        name="numbering_sequence",
        primitive=Primitive.HOLDING_REGISTERS,
        scope=FeatureScope.BUS,
        base_address=3001,
        decode=decode_numbering_sequence,
        description="Breaker numbering scheme (high byte) and first number (low byte).",
    ),
    FeatureDefinition(
        name="name_tag",
        primitive=Primitive.FILE_RECORDS,
        scope=FeatureScope.BUS,
        base_address=2,
        file_number=BUS_NAME_FILE,
        decode=decode_name_tags,
        description="16-character ASCII label.",
    ),
)

BY_NAME: dict[str, FeatureDefinition] = index_by_name(BUS_FEATURES)

BUS_FIELDS: tuple[str, ...] = tuple(f.name for f in BUS_FEATURES)
