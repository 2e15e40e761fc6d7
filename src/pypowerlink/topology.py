"""Panel <-> bus interleaving.

A panel is two buses side by side: odd panel breaker numbers are on the
left bus, even numbers on the right bus. Multi-breaker panel requests are
split across the two buses with :func:`separate` and the per-bus results
recombined with :func:`shuffle`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from pypowerlink.exceptions import InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")


def require_sequence(*values: object) -> None:
    for value in values:
        if not isinstance(value, (list, tuple)):
            raise InvalidArgumentError("Invalid input: list input is required")


def separate(items: Sequence[T]) -> list[list[T]]:
    """Split ``items`` into even-indexed and odd-indexed halves.

    >>> separate(["a", "b", "c", "d"])
    [['a', 'c'], ['b', 'd']]
    """
    require_sequence(items)
    return [list(items[0::2]), list(items[1::2])]


def shuffle(first: Sequence[T], second: Sequence[U], length: int) -> list[T | U]:
    """Interleave ``first`` and ``second``, starting with ``first``.

    Produces at most ``length`` items and stops at the first position whose
    source list is exhausted, so unequal inputs yield
    ``2 * min(len(first), len(second))`` items plus one leftover from
    ``first`` when it is the longer list.

    >>> shuffle([1, 2, 3], ["a", "b"], 5)
    [1, 'a', 2, 'b', 3]
    """
    require_sequence(first, second)
    merged: list[T | U] = []
    for index in range(length):
        source: Sequence[Any] = first if index % 2 == 0 else second
        position = index // 2
        if position >= len(source):
            break
        merged.append(source[position])
    return merged


def split_quantity(quantity: int) -> tuple[int, int]:
    """Items for (starting side, other side) of a multi-breaker panel read."""
    return (quantity + 1) // 2, quantity // 2


def single_breaker_panel_id(position: int, index: int, is_left: bool) -> int:
    """Panel-relative number of the ``index``-th breaker read from one bus."""
    return (position + index) * 2 + (-1 if is_left else 0)


def merged_panel_id(position: int, index: int, is_left: bool) -> int:
    """Panel-relative number assigned to the ``index``-th interleaved breaker.

    Numbering restarts from the bus-relative position of the first breaker
    (plus one when the request started on the right bus).
    """
    return position + index + (0 if is_left else 1)
