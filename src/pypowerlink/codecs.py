"""Value codecs for the controller's register encodings.

Pure functions only: each takes raw values as returned by the transport
(bits, 16-bit register words, file-record bytes) and produces domain values,
or the reverse for writes.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence

from pypowerlink.constants import NAME_TAG_LENGTH

BREAKER_TYPE_TEXT: dict[int, str] = {
    0: "No Breaker Installed",
    1: "1 pole",
    2: "2 pole",
    3: "3 pole",
}

# Blink addressing has not been verified against hardware.
BLINK_TYPE_TEXT: dict[int, str] = {
    0: "No Blink",
    1: "Single Blink",
    2: "Double Blink (Single with additional 1 minute warning blink)",
    3: "Delay with No Blink (Use with HID lights)",
    4: "Pulse OFF (Use with sweep switches)",
    5: "Pulse OFF w/ Repeat",
}

NUMBERING_SEQUENCE_TEXT: dict[int, str] = {
    0: "Increment by 2's",
    1: "Increment by 1's",
    2: "Decrement by 2's",
    3: "Decrement by 1's",
}


# =============================================================================
# 32-BIT COUNTERS
# =============================================================================


def registers_to_bytes(registers: Sequence[int]) -> bytes:
    """Pack 16-bit register words into big-endian bytes."""
    return struct.pack(f">{len(registers)}H", *registers)


def swap_words(data: bytes) -> bytes:
    """Undo the controller's word order for 32-bit counters.

    Swaps the two bytes of every 16-bit half, then reverses every 32-bit
    group. ``F0 FA 00 FC`` becomes ``00 FC F0 FA``.

    Raises:
        ValueError: If ``data`` is not a whole number of 32-bit groups
    """
    if len(data) % 4:
        raise ValueError(f"Expected a multiple of 4 bytes, got {len(data)}")
    halves = b"".join(data[i : i + 2][::-1] for i in range(0, len(data), 2))
    return b"".join(halves[i : i + 4][::-1] for i in range(0, len(halves), 4))


def decode_u32_registers(registers: Sequence[int]) -> list[int]:
    """Decode register pairs (two words per value) into unsigned 32-bit ints."""
    data = swap_words(registers_to_bytes(registers))
    return list(struct.unpack(f">{len(data) // 4}I", data))


# =============================================================================
# LABELS
# =============================================================================


def on_off_text(value: bool, true_text: str = "ON", false_text: str = "OFF") -> str:
    return true_text if value else false_text


def minutes_seconds_text(value: int) -> str:
    """Format a count of seconds (or minutes) as ``"<major>:<minor>"``.

    Matches the controller's front panel, which does not zero-pad.
    """
    return f"{value // 60}:{value % 60}"


def breaker_type_text(value: int) -> str:
    return BREAKER_TYPE_TEXT.get(value, "")


def blink_type_text(value: int) -> str:
    return BLINK_TYPE_TEXT.get(value, "")


def numbering_sequence_text(value: int) -> str:
    return NUMBERING_SEQUENCE_TEXT.get(value, "")


def coerce_blink_type(value: object) -> int:
    """Return ``value`` if it is a known blink type, otherwise 0."""
    if isinstance(value, int) and not isinstance(value, bool) and value in BLINK_TYPE_TEXT:
        return value
    return 0


def split_numbering_register(register: int) -> tuple[int, int]:
    """Split a numbering register into (sequence, first breaker number)."""
    return (register >> 8) & 0xFF, register & 0xFF


# =============================================================================
# NAME TAGS (file records)
# =============================================================================


def decode_name_tag(record: bytes) -> str:
    """Decode a file-record name tag, dropping trailing padding."""
    return record.decode("ascii", errors="replace").rstrip(" \x00")


def encode_name_tag(text: str, length: int = NAME_TAG_LENGTH) -> bytes:
    """Truncate or space-pad ``text`` to ``length`` ASCII bytes."""
    return text[:length].ljust(length).encode("ascii", errors="replace")


# =============================================================================
# BIT HELPERS
# =============================================================================


def byte_to_bits(byte: int) -> list[int]:
    """Bits of a byte, most significant first."""
    return [(byte >> index) & 1 for index in range(7, -1, -1)]


def bit_extracted(number: int, number_of_bits: int, position_from_right: int) -> int:
    """Extract ``number_of_bits`` bits starting ``position_from_right`` bits in."""
    return ((1 << number_of_bits) - 1) & (number >> position_from_right)


def describe_address(address: int) -> str:
    """Describe a status address from the controller's address bands.

    Returns an empty string for addresses outside the known bands.
    """
    band = address // 100
    if band == 100:
        return f"Input {address - 10000}"
    if band == 120:
        return f"Zone {address - 12000 + 1}"
    if band == 40:
        return f"Remote {address - 4000 + 1}"
    if band == 105:
        return f"Schedule {address - 10500 + 1}"
    if band == 130:
        return f"Breaker {address - 13000 + 1}"
    return ""
