"""Configuration write session.

The controller only persists configuration writes made between these
framing commands::

    0x2222 -> 8200   enable command interface
    0xEA60 -> 8020   enable configuration mode
    ... writes ...
    0xEAC4 -> 8020   verify and save
    0x0000 -> 8200   disable command interface

Each bus-level write opens its own session, so a panel write spanning both
buses is saved in two independent sessions.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pypowerlink.constants import (
    COMMAND_DISABLE,
    COMMAND_ENABLE,
    COMMAND_ENABLE_REGISTER,
    CONFIG_ENABLE,
    CONFIG_MODE_REGISTER,
    CONFIG_VERIFY_SAVE,
)
from pypowerlink.transports.exceptions import TransportError, WriteSessionError
from pypowerlink.transports.protocol import PowerlinkTransport

_LOGGER = logging.getLogger(__name__)

# (step name, register, value)
OPEN_STEPS: tuple[tuple[str, int, int], ...] = (
    ("enable_command", COMMAND_ENABLE_REGISTER, COMMAND_ENABLE),
    ("enable_config", CONFIG_MODE_REGISTER, CONFIG_ENABLE),
)
CLOSE_STEPS: tuple[tuple[str, int, int], ...] = (
    ("verify_save", CONFIG_MODE_REGISTER, CONFIG_VERIFY_SAVE),
    ("disable_command", COMMAND_ENABLE_REGISTER, COMMAND_DISABLE),
)


async def _run_steps(
    transport: PowerlinkTransport,
    steps: tuple[tuple[str, int, int], ...],
) -> None:
    for step, register, value in steps:
        try:
            await transport.write_register(register, value)
        except TransportError as err:
            _LOGGER.error(
                "Write session step %s (0x%04X -> %d) failed: %s", step, value, register, err
            )
            raise WriteSessionError(step, str(err)) from err


async def start_write(transport: PowerlinkTransport) -> None:
    """Enable the command interface and configuration mode."""
    await _run_steps(transport, OPEN_STEPS)


async def end_write(transport: PowerlinkTransport) -> None:
    """Verify/save the configuration and disable the command interface."""
    await _run_steps(transport, CLOSE_STEPS)


@asynccontextmanager
async def write_session(transport: PowerlinkTransport) -> AsyncIterator[None]:
    """Bracket configuration writes with the vendor framing commands.

    The closing commands are sent even if the body raises.

    Raises:
        WriteSessionError: If any framing command fails.  When opening
            fails, the body is not run.
    """
    await start_write(transport)
    try:
        yield
    finally:
        await end_write(transport)
