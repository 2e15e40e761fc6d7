"""Tests for the panel diagnostic CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pypowerlink.cli.panel_diag import create_parser, run, run_command
from pypowerlink.client import PowerlinkClient

CLIENT_CLASS = "pypowerlink.cli.panel_diag.PowerlinkClient"
MODBUS_CLIENT_CLASS = "pypowerlink.transports.modbus.AsyncModbusTcpClient"


class TestCreateParser:
    """Test argument parsing."""

    def test_connection_defaults(self) -> None:
        args = create_parser().parse_args(["--host", "192.168.1.50", "panels"])

        assert args.host == "192.168.1.50"
        assert args.port == 502
        assert args.unit_id == 1
        assert args.command == "panels"
        assert args.panel == 0
        assert args.quantity == 8
        assert args.fields is None

    def test_fields_split(self) -> None:
        args = create_parser().parse_args(
            ["-H", "panel.local", "breakers", "--bus", "5", "--fields", "state, name_tag"]
        )
        assert args.bus == 5
        assert args.panel is None
        assert args.fields == ["state", "name_tag"]

    def test_breakers_needs_panel_or_bus(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["-H", "panel.local", "breakers"])

    def test_set_on_off(self) -> None:
        parser = create_parser()
        on = parser.parse_args(["-H", "x", "set", "--panel", "0", "--breaker", "3", "--on"])
        off = parser.parse_args(["-H", "x", "set", "--panel", "0", "--breaker", "3", "--off"])
        assert on.on is True
        assert off.on is False

    def test_host_required(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["panels"])


class TestRunCommand:
    """Test sub-command dispatch."""

    @pytest.mark.asyncio
    async def test_breakers_by_bus(self, client) -> None:
        args = create_parser().parse_args(
            ["-H", "x", "breakers", "--bus", "2", "--quantity", "2", "--fields", "id,bus_number"]
        )
        result = await run_command(args, client)
        assert result == [{"id": 1, "bus_number": "1L"}, {"id": 2, "bus_number": "1L"}]

    @pytest.mark.asyncio
    async def test_breakers_by_panel(self, client) -> None:
        args = create_parser().parse_args(
            ["-H", "x", "breakers", "--panel", "1", "--quantity", "2", "--fields", "id"]
        )
        assert await run_command(args, client) == [{"id": 1}, {"id": 2}]

    @pytest.mark.asyncio
    async def test_panels(self, client) -> None:
        args = create_parser().parse_args(
            ["-H", "x", "panels", "--quantity", "1", "--fields", "id"]
        )
        result = await run_command(args, client)
        assert result == [{"id": 0, "name_tag": None, "bus_l": {"id": 0}, "bus_r": {"id": 1}}]

    @pytest.mark.asyncio
    async def test_set(self, client, transport) -> None:
        args = create_parser().parse_args(
            ["-H", "x", "set", "--panel", "0", "--breaker", "1", "--off"]
        )
        assert await run_command(args, client) == {"written": ["direct_breaker_control"]}
        assert transport.data_writes() == [("write_coils", 2999, [False])]


class TestRun:
    """Test the top-level runner."""

    @pytest.mark.asyncio
    async def test_prints_json(self, transport, capsys) -> None:
        args = create_parser().parse_args(["-H", "x", "buses", "--bus", "3", "--fields", "id"])

        with patch(CLIENT_CLASS, return_value=PowerlinkClient(transport=transport)):
            exit_code = await run(args)

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == [{"id": 3}]
        assert transport.connect_count == 1
        assert transport.disconnect_count == 1

    @pytest.mark.asyncio
    async def test_reports_errors(self, refused_transport, capsys) -> None:
        args = create_parser().parse_args(["-H", "x", "panels"])

        with patch(CLIENT_CLASS, return_value=PowerlinkClient(transport=refused_transport)):
            exit_code = await run(args)

        assert exit_code == 1
        assert "Connection refused" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_reports_invalid_arguments(self, transport, capsys) -> None:
        args = create_parser().parse_args(["-H", "x", "buses", "--bus", "16"])

        with patch(CLIENT_CLASS, return_value=PowerlinkClient(transport=transport)):
            exit_code = await run(args)

        assert exit_code == 1
        assert "Invalid bus number" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_reports_short_device_response(self, capsys) -> None:
        """A truncated counter read is reported, not raised."""
        args = create_parser().parse_args(
            ["-H", "x", "breakers", "--bus", "0", "--quantity", "1", "--fields", "strike_count"]
        )
        mock_client = MagicMock()
        mock_client.connect = AsyncMock(return_value=True)
        mock_client.read_holding_registers = AsyncMock(
            return_value=MagicMock(isError=MagicMock(return_value=False), registers=[5])
        )

        with patch(MODBUS_CLIENT_CLASS, return_value=mock_client):
            exit_code = await run(args)

        assert exit_code == 1
        err = capsys.readouterr().err
        assert err.startswith("✗ Short response to read_holding_registers")
        mock_client.close.assert_called_once()
