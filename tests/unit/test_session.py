"""Tests for the configuration write session."""

from __future__ import annotations

import pytest

from pypowerlink.session import end_write, start_write, write_session
from pypowerlink.transports.exceptions import TransportWriteError, WriteSessionError

OPEN_SESSION = [("write_register", 8200, 0x2222), ("write_register", 8020, 0xEA60)]
CLOSE_SESSION = [("write_register", 8020, 0xEAC4), ("write_register", 8200, 0x0000)]


class TestWriteSession:
    """Test write session framing."""

    @pytest.mark.asyncio
    async def test_start_and_end(self, connected_transport) -> None:
        await start_write(connected_transport)
        assert connected_transport.calls == OPEN_SESSION

        await end_write(connected_transport)
        assert connected_transport.calls == OPEN_SESSION + CLOSE_SESSION

    @pytest.mark.asyncio
    async def test_brackets_body(self, connected_transport) -> None:
        async with write_session(connected_transport):
            await connected_transport.write_coils(2999, [True])

        assert connected_transport.calls == [
            *OPEN_SESSION,
            ("write_coils", 2999, [True]),
            *CLOSE_SESSION,
        ]

    @pytest.mark.asyncio
    async def test_closes_when_body_raises(self, connected_transport) -> None:
        with pytest.raises(RuntimeError):
            async with write_session(connected_transport):
                raise RuntimeError("boom")

        assert connected_transport.calls == OPEN_SESSION + CLOSE_SESSION

    @pytest.mark.asyncio
    async def test_open_failure_skips_body(self, connected_transport) -> None:
        connected_transport.fail("write_register", TransportWriteError("refused"), address=8020)
        body_ran = False

        with pytest.raises(WriteSessionError) as exc_info:
            async with write_session(connected_transport):
                body_ran = True

        assert exc_info.value.step == "enable_config"
        assert not body_ran
        assert connected_transport.calls == OPEN_SESSION

    @pytest.mark.asyncio
    async def test_close_failure_raises(self, connected_transport) -> None:
        await start_write(connected_transport)
        connected_transport.fail("write_register", TransportWriteError("refused"))

        with pytest.raises(WriteSessionError) as exc_info:
            await end_write(connected_transport)

        assert exc_info.value.step == "verify_save"
        assert isinstance(exc_info.value.__cause__, TransportWriteError)
