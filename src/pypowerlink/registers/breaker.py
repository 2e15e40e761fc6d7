"""Breaker feature catalogue.

Single source of truth for every per-breaker attribute the driver reads or
writes. Entries are listed in the order the driver queries them; a bus-level
read issues one request per selected entry, in this order.

Addresses are ``base + bus * stride - 2 + position`` (see
:func:`pypowerlink.addressing.breaker_address`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pypowerlink.addressing import bus_label
from pypowerlink.codecs import coerce_blink_type, encode_name_tag
from pypowerlink.constants import (
    BREAKER_NAME_FILE,
    CONFIGURATION_REGISTER_STRIDE,
    DISCRETE_INPUT_STRIDE,
    FILE_RECORD_STRIDE,
    INPUT_REGISTER_STRIDE,
)
from pypowerlink.registers.features import (
    FeatureDefinition,
    Primitive,
    decode_blink_timer,
    decode_blink_type,
    decode_breaker_type,
    decode_counter,
    decode_name_tags,
    decode_on_time,
    flag_decoder,
    index_by_name,
)


def _breaker_ids(bus: int, start: int, quantity: int) -> list[Any]:
    return [start + index for index in range(quantity)]


def _bus_numbers(bus: int, start: int, quantity: int) -> list[Any]:
    return [bus_label(bus)] * quantity


def _encode_coils(values: Sequence[Any]) -> list[Any]:
    return [bool(value) for value in values]


def _encode_counter_reset(values: Sequence[Any]) -> list[Any]:
    # Counters can only be cleared; the requested value is ignored.
    return [0, 0] * len(values)


def _encode_blink_types(values: Sequence[Any]) -> list[Any]:
    return [coerce_blink_type(value) for value in values]


def _encode_name_tags(values: Sequence[Any]) -> list[Any]:
    return [encode_name_tag(str(value)) for value in values]


BREAKER_FEATURES: tuple[FeatureDefinition, ...] = (
    FeatureDefinition(
        name="id",
        primitive=Primitive.COMPUTED,
        compute=_breaker_ids,
        description="Breaker position (bus-relative unless renumbered by a panel call).",
    ),
    FeatureDefinition(
        name="bus_number",
        primitive=Primitive.COMPUTED,
        compute=_bus_numbers,
        description="Bus label such as '1L' or '5R'.",
    ),
    FeatureDefinition(
        name="direct_breaker_control",
        primitive=Primitive.COILS,
        base_address=3000,
        stride=DISCRETE_INPUT_STRIDE,
        decode=flag_decoder(),
        encode=_encode_coils,
        description="Commanded on/off state.",
    ),
    # =========================================================================
    # STATE (three discrete-input areas merged under "state")
    # =========================================================================
    FeatureDefinition(
        name="actual",
        primitive=Primitive.DISCRETE_INPUTS,
        base_address=3000,
        stride=DISCRETE_INPUT_STRIDE,
        group="state",
        decode=flag_decoder(),
        description="Sensed breaker state.",
    ),
    FeatureDefinition(
        name="control",
        primitive=Primitive.DISCRETE_INPUTS,
        base_address=3512,
        stride=DISCRETE_INPUT_STRIDE,
        group="state",
        decode=flag_decoder(),
        description="State requested by the control logic.",
    ),
    FeatureDefinition(
        name="desired",
        primitive=Primitive.DISCRETE_INPUTS,
        base_address=5048,
        stride=DISCRETE_INPUT_STRIDE,
        group="state",
        decode=flag_decoder(),
        description="Desired state after overrides.",
    ),
    FeatureDefinition(
        name="present",
        primitive=Primitive.DISCRETE_INPUTS,
        base_address=5560,
        stride=DISCRETE_INPUT_STRIDE,
        decode=flag_decoder("Present", "Absent"),
        description="Breaker installed.",
    ),
    FeatureDefinition(
        name="not_responding",
        primitive=Primitive.DISCRETE_INPUTS,
        base_address=6072,
        stride=DISCRETE_INPUT_STRIDE,
        decode=flag_decoder("Not Responding", "Normal"),
        description="Breaker failed to answer the controller.",
    ),
    # =========================================================================
    # INPUT REGISTERS
    # =========================================================================
    FeatureDefinition(
        name="blink_timer_value",
        primitive=Primitive.INPUT_REGISTERS,
        base_address=2000,
        stride=INPUT_REGISTER_STRIDE,
        decode=decode_blink_timer,
        description="Remaining blink-warning time in seconds.",
    ),
    FeatureDefinition(
        name="type",
        primitive=Primitive.INPUT_REGISTERS,
        base_address=2384,
        stride=INPUT_REGISTER_STRIDE,
        decode=decode_breaker_type,
        description="Pole count, 0 when no breaker is installed.",
    ),
    # =========================================================================
    # CONFIGURATION HOLDING REGISTERS
    # =========================================================================
    FeatureDefinition(
        name="on_time",
        primitive=Primitive.HOLDING_REGISTERS,
        base_address=2001,
        stride=CONFIGURATION_REGISTER_STRIDE,
        words_per_item=2,
        decode=decode_on_time,
        encode=_encode_counter_reset,
        description="Accumulated on time. Writes reset it to 0.",
    ),
    FeatureDefinition(
        name="blink_type",
        primitive=Primitive.HOLDING_REGISTERS,
        base_address=3101,
        stride=INPUT_REGISTER_STRIDE,
        decode=decode_blink_type,
        encode=_encode_blink_types,
        verified=False,
        description="Blink warning mode before switching off.",
    ),
    FeatureDefinition(
        name="strike_count",
        primitive=Primitive.HOLDING_REGISTERS,
        base_address=7001,
        stride=CONFIGURATION_REGISTER_STRIDE,
        words_per_item=2,
        decode=decode_counter,
        encode=_encode_counter_reset,
        description="Number of operations. Writes reset it to 0.",
    ),
    # =========================================================================
    # FILE RECORDS
    # =========================================================================
    FeatureDefinition(
        name="name_tag",
        primitive=Primitive.FILE_RECORDS,
        base_address=1,
        stride=FILE_RECORD_STRIDE,
        position_offset=1,
        file_number=BREAKER_NAME_FILE,
        decode=decode_name_tags,
        encode=_encode_name_tags,
        description="16-character ASCII label.",
    ),
)

BY_NAME: dict[str, FeatureDefinition] = index_by_name(BREAKER_FEATURES)

# Names callers may request (state sub-features are requested as "state")
BREAKER_FIELDS: tuple[str, ...] = tuple(dict.fromkeys(f.selector for f in BREAKER_FEATURES))

WRITABLE_BREAKER_FIELDS: tuple[str, ...] = tuple(f.name for f in BREAKER_FEATURES if f.writable)
