#!/usr/bin/env python3
"""Panel Diagnostic Tool for pypowerlink.

This CLI tool reads panels, buses and breakers from a panel controller over
Modbus TCP and prints them as JSON, and can switch breakers on or off.

Usage:
    pypowerlink-diag --host 192.168.1.50 panels
    pypowerlink-diag --host 192.168.1.50 breakers --panel 0 --breaker 1 --quantity 42
    pypowerlink-diag --host 192.168.1.50 set --panel 0 --breaker 3 --off
    pypowerlink-diag --help
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from pypowerlink import __version__
from pypowerlink.client import PowerlinkClient
from pypowerlink.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
    MAX_PANELS,
)
from pypowerlink.discovery import load_snapshot
from pypowerlink.exceptions import PowerlinkError
from pypowerlink.registers import BREAKER_FIELDS, BUS_FIELDS


def _field_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pypowerlink-diag",
        description="Read and control panels, buses and breakers on a panel controller.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Breaker fields: {", ".join(BREAKER_FIELDS)}
Bus fields:     {", ".join(BUS_FIELDS)}

Examples:
  pypowerlink-diag --host 192.168.1.50 panels
      Show all panels with their buses

  pypowerlink-diag --host 192.168.1.50 breakers --panel 2 --breaker 1 --quantity 42 \\
      --fields state,name_tag
      Show state and name of every breaker on panel 3

  pypowerlink-diag --host 192.168.1.50 breakers --bus 5 --breaker 1 --quantity 21
      Show every breaker on bus 5 (2R)

  pypowerlink-diag --host 192.168.1.50 set --panel 0 --breaker 1 --quantity 4 --on
      Switch breakers 1-4 of panel 1 on
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # Connection options
    conn_group = parser.add_argument_group("Connection Options")
    conn_group.add_argument("--host", "-H", required=True, help="Controller IP address")
    conn_group.add_argument(
        "--port", "-p", type=int, default=DEFAULT_PORT, help="Port number (default: %(default)s)"
    )
    conn_group.add_argument(
        "--unit-id", type=int, default=DEFAULT_UNIT_ID, help="Modbus unit ID (default: %(default)s)"
    )
    conn_group.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Request timeout in seconds (default: %(default)s)",
    )
    conn_group.add_argument(
        "--connect-timeout",
        type=float,
        default=DEFAULT_CONNECT_TIMEOUT,
        help="Connection timeout in seconds (default: %(default)s)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    panels = commands.add_parser("panels", help="Show panels and their buses")
    panels.add_argument("--panel", type=int, default=0, help="First panel (default: 0)")
    panels.add_argument("--quantity", type=int, default=MAX_PANELS, help="Number of panels")
    panels.add_argument(
        "--fields", type=_field_list, default=None, help="Comma-separated bus fields"
    )

    buses = commands.add_parser("buses", help="Show buses")
    buses.add_argument("--bus", type=int, default=0, help="First bus (default: 0)")
    buses.add_argument("--quantity", type=int, default=1, help="Number of buses")
    buses.add_argument(
        "--fields", type=_field_list, default=None, help="Comma-separated bus fields"
    )

    breakers = commands.add_parser("breakers", help="Show breakers by panel or by bus")
    target = breakers.add_mutually_exclusive_group(required=True)
    target.add_argument("--panel", type=int, help="Panel index (breaker numbers 1-42)")
    target.add_argument("--bus", type=int, help="Bus index (breaker positions 1-21)")
    breakers.add_argument("--breaker", type=int, default=1, help="First breaker (default: 1)")
    breakers.add_argument("--quantity", type=int, default=1, help="Number of breakers")
    breakers.add_argument(
        "--fields", type=_field_list, default=None, help="Comma-separated breaker fields"
    )

    snapshot = commands.add_parser("snapshot", help="Show all panels with their breakers")
    snapshot.add_argument(
        "--all", action="store_true", help="Include panels with no bus present"
    )

    set_cmd = commands.add_parser("set", help="Switch panel breakers on or off")
    set_cmd.add_argument("--panel", type=int, required=True, help="Panel index")
    set_cmd.add_argument("--breaker", type=int, required=True, help="First breaker (1-42)")
    set_cmd.add_argument("--quantity", type=int, default=1, help="Number of breakers")
    state = set_cmd.add_mutually_exclusive_group(required=True)
    state.add_argument("--on", dest="on", action="store_true", help="Switch on")
    state.add_argument("--off", dest="on", action="store_false", help="Switch off")

    return parser


async def run_command(args: argparse.Namespace, client: PowerlinkClient) -> Any:
    """Run the selected sub-command and return a JSON-serializable result."""
    if args.command == "panels":
        panels = await client.get_panel_info(args.panel, args.quantity, args.fields)
        return [panel.to_dict() for panel in panels]
    if args.command == "buses":
        return await client.get_bus_info(args.bus, args.quantity, args.fields)
    if args.command == "breakers":
        if args.panel is not None:
            return await client.get_breaker_info_by_panel(
                args.panel, args.breaker, args.quantity, args.fields
            )
        return await client.get_breaker_info_by_bus(
            args.bus, args.breaker, args.quantity, args.fields
        )
    if args.command == "snapshot":
        snapshot = await load_snapshot(client, filter_absent=not args.all)
        return asdict(snapshot)
    if args.command == "set":
        written = await client.control_breakers(args.panel, args.breaker, args.on, args.quantity)
        return {"written": written}
    raise ValueError(f"Unknown command {args.command}")


async def run(args: argparse.Namespace) -> int:
    client = PowerlinkClient(
        args.host,
        port=args.port,
        unit_id=args.unit_id,
        timeout=args.timeout,
        connect_timeout=args.connect_timeout,
    )
    try:
        async with client:
            result = await run_command(args, client)
    except PowerlinkError as err:
        print(f"✗ {err}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
