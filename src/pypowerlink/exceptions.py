"""Base exceptions for pypowerlink.

Transport failures live in :mod:`pypowerlink.transports.exceptions` and
inherit from :class:`PowerlinkError`, so callers can use a single
``except PowerlinkError`` to catch both argument and I/O problems.
"""

from __future__ import annotations


class PowerlinkError(Exception):
    """Base exception for all pypowerlink errors."""

    pass


class InvalidArgumentError(PowerlinkError, ValueError):
    """An argument was out of range or of the wrong shape.

    Raised before any Modbus request is issued.
    """

    pass
