"""Shared types for the breaker and bus feature catalogues.

A feature is one named attribute of a breaker or bus. Its definition is
plain data: which Modbus primitive carries it, how its address is derived
from (bus, position), and a pure decode/encode pair translating between
raw transport values and the dicts returned to callers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pypowerlink.addressing import breaker_address, bus_address
from pypowerlink.codecs import (
    blink_type_text,
    breaker_type_text,
    decode_name_tag,
    decode_u32_registers,
    minutes_seconds_text,
    numbering_sequence_text,
    on_off_text,
    split_numbering_register,
)

Decoder = Callable[[str, Sequence[Any]], list[dict[str, Any]]]
Encoder = Callable[[Sequence[Any]], list[Any]]
Computer = Callable[[int, int, int], list[Any]]


class Primitive(StrEnum):
    """Transport primitive that carries a feature."""

    COMPUTED = "computed"
    COILS = "coils"
    DISCRETE_INPUTS = "discrete_inputs"
    INPUT_REGISTERS = "input_registers"
    HOLDING_REGISTERS = "holding_registers"
    FILE_RECORDS = "file_records"


class FeatureScope(StrEnum):
    """Whether a feature is addressed per breaker or per bus."""

    BREAKER = "breaker"
    BUS = "bus"


@dataclass(frozen=True)
class FeatureDefinition:
    """Single feature definition.

    Attributes:
        name: Key in the returned dicts and in write requests.
        primitive: Transport primitive used to read (and write) the feature.
        scope: Breaker features use ``breaker_address``, bus features
            ``bus_address``.
        base_address: Documented base address of the feature's area.
        stride: Addresses reserved per bus (breaker scope only).
        position_offset: Added to the breaker position before addressing.
        words_per_item: Registers occupied per breaker (2 for 32-bit counters).
        file_number: File number for ``FILE_RECORDS`` features.
        group: Nested key the decoded values are stored under (``"state"``).
            Selecting the group name selects every feature in it.
        decode: Raw values -> one dict per item.
        encode: Requested values -> raw values to write.  None if read-only.
        compute: (bus, start, quantity) -> values, for ``COMPUTED`` features.
        verified: False where the address has not been checked on hardware.
        description: Human-readable description.
    """

    name: str
    primitive: Primitive
    scope: FeatureScope = FeatureScope.BREAKER
    base_address: int = 0
    stride: int = 0
    position_offset: int = 0
    words_per_item: int = 1
    file_number: int | None = None
    group: str | None = None
    decode: Decoder | None = None
    encode: Encoder | None = None
    compute: Computer | None = None
    verified: bool = True
    description: str = ""

    @property
    def selector(self) -> str:
        """Name a caller uses to request this feature."""
        return self.group or self.name

    @property
    def writable(self) -> bool:
        return self.encode is not None

    def address(self, bus: int, position: int = 0) -> int:
        """Absolute Modbus address of the first item."""
        if self.scope is FeatureScope.BUS:
            return bus_address(self.base_address, bus)
        return breaker_address(self.base_address, bus, position + self.position_offset, self.stride)


def select_features(
    features: Sequence[FeatureDefinition],
    fields: Sequence[str] | None,
) -> list[FeatureDefinition]:
    """Features matching ``fields`` in catalogue order (all if empty)."""
    if not fields:
        return list(features)
    requested = set(fields)
    return [feature for feature in features if feature.selector in requested]


def index_by_name(features: Sequence[FeatureDefinition]) -> dict[str, FeatureDefinition]:
    return {feature.name: feature for feature in features}


# =============================================================================
# DECODERS
# =============================================================================


def flag_decoder(true_text: str = "ON", false_text: str = "OFF") -> Decoder:
    """Decoder for single-bit features with an ON/OFF-style label."""

    def decode(name: str, bits: Sequence[Any]) -> list[dict[str, Any]]:
        return [
            {name: bool(bit), f"{name}_text": on_off_text(bool(bit), true_text, false_text)}
            for bit in bits
        ]

    return decode


def decode_blink_timer(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    return [{name: value, f"{name}_ms": minutes_seconds_text(value)} for value in registers]


def decode_breaker_type(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    return [{name: value, f"{name}_text": breaker_type_text(value)} for value in registers]


def decode_blink_type(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    return [{name: value, f"{name}_text": blink_type_text(value)} for value in registers]


def decode_on_time(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    return [
        {name: value, f"{name}_hm": minutes_seconds_text(value)}
        for value in decode_u32_registers(registers)
    ]


def decode_counter(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    return [{name: value} for value in decode_u32_registers(registers)]


def decode_name_tags(name: str, records: Sequence[Any]) -> list[dict[str, Any]]:
    return [{name: decode_name_tag(record)} for record in records]


def decode_numbering_sequence(name: str, registers: Sequence[Any]) -> list[dict[str, Any]]:
    items = []
    for register in registers:
        sequence, first_breaker = split_numbering_register(register)
        items.append(
            {
                name: {
                    "sequence": sequence,
                    "sequence_text": numbering_sequence_text(sequence),
                    "first_breaker_number": first_breaker,
                }
            }
        )
    return items
