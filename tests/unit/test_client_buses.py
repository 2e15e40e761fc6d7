"""Tests for bus and panel information reads."""

from __future__ import annotations

import pytest

from pypowerlink.exceptions import InvalidArgumentError
from pypowerlink.models import PanelInfo


class TestGetBusInfo:
    """Test get_bus_info."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bus", [-1, 16])
    async def test_invalid_bus(self, client, transport, bus: int) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid bus number"):
            await client.get_bus_info(bus)
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_labels_and_ids(self, client, transport) -> None:
        result = await client.get_bus_info(2, 3, ["bus_number", "id"])

        assert result == [
            {"bus_number": "1L", "id": 2},
            {"bus_number": "1R", "id": 3},
            {"bus_number": "2L", "id": 4},
        ]
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_quantity_clamped(self, client) -> None:
        result = await client.get_bus_info(14, 5, ["id"])
        assert result == [{"id": 14}, {"id": 15}]

    @pytest.mark.asyncio
    async def test_status_bits(self, client, transport) -> None:
        transport.respond("read_discrete_inputs", 2501, [True, False])
        transport.respond("read_discrete_inputs", 9965, [False, True])

        result = await client.get_bus_info(2, 2, ["present", "has_not_responding_breaker"])

        assert transport.calls == [
            ("read_discrete_inputs", 2501, 2),
            ("read_discrete_inputs", 9965, 2),
        ]
        assert result[0]["present"] is True
        assert result[0]["present_text"] == "Present"
        assert result[1]["has_not_responding_breaker"] is True
        assert result[1]["has_not_responding_breaker_text"] == "Not Responding"

    @pytest.mark.asyncio
    async def test_numbering_sequence(self, client, transport) -> None:
        transport.respond("read_holding_registers", 3002, [0x0115, 0x0901])

        result = await client.get_bus_info(2, 2, ["numbering_sequence"])

        assert transport.calls == [("read_holding_registers", 3002, 2)]
        assert result == [
            {
                "numbering_sequence": {
                    "sequence": 1,
                    "sequence_text": "Increment by 1's",
                    "first_breaker_number": 21,
                }
            },
            {
                "numbering_sequence": {
                    "sequence": 9,
                    "sequence_text": "",
                    "first_breaker_number": 1,
                }
            },
        ]

    @pytest.mark.asyncio
    async def test_name_tag(self, client, transport) -> None:
        transport.respond("read_file_records", 3, [b"Main Panel".ljust(16)])

        result = await client.get_bus_info(2, 1, ["name_tag"])

        assert transport.calls == [("read_file_records", 6, 3, 1)]
        assert result == [{"name_tag": "Main Panel"}]


class TestGetPanelInfo:
    """Test get_panel_info."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("panel", [-1, 8])
    async def test_invalid_panel(self, client, transport, panel: int) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid panel number"):
            await client.get_panel_info(panel)
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_reads_both_buses(self, client, transport) -> None:
        transport.respond("read_discrete_inputs", 2501, [True, False])
        transport.respond("read_file_records", 3, [b"Main".ljust(16), b"Aux".ljust(16)])

        result = await client.get_panel_info(1, 1, ["present", "name_tag"])

        assert transport.calls == [
            ("read_discrete_inputs", 2501, 2),
            ("read_file_records", 6, 3, 2),
        ]
        assert result == [
            PanelInfo(
                id=1,
                name_tag="Main",
                bus_l={"present": True, "present_text": "Present", "name_tag": "Main"},
                bus_r={"present": False, "present_text": "Absent", "name_tag": "Aux"},
            )
        ]
        assert result[0].is_present

    @pytest.mark.asyncio
    async def test_multiple_panels(self, client) -> None:
        result = await client.get_panel_info(0, 2, ["id"])

        assert [panel.id for panel in result] == [0, 1]
        assert [(panel.bus_l["id"], panel.bus_r["id"]) for panel in result] == [(0, 1), (2, 3)]
        assert all(panel.name_tag is None for panel in result)

    @pytest.mark.asyncio
    async def test_quantity_clamped(self, client) -> None:
        result = await client.get_panel_info(6, 5, ["id"])
        assert [panel.id for panel in result] == [6, 7]

    @pytest.mark.asyncio
    async def test_absent_panel(self, client) -> None:
        result = await client.get_panel_info(0, 1, ["present"])
        assert not result[0].is_present

    def test_to_dict(self) -> None:
        panel = PanelInfo(id=3, name_tag="East", bus_l={"id": 6}, bus_r={"id": 7})
        assert panel.to_dict() == {
            "id": 3,
            "name_tag": "East",
            "bus_l": {"id": 6},
            "bus_r": {"id": 7},
        }
