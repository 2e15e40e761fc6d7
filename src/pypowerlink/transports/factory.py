"""Factory functions for creating transport instances.

Example:
    transport = create_modbus_transport("192.168.1.50")
    async with transport:
        bits = await transport.read_discrete_inputs(2499, 16)

    # From stored settings
    transport = create_transport_from_config(TransportConfig.from_dict(data))
"""

from __future__ import annotations

from pypowerlink.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
)

from .config import TransportConfig
from .modbus import ModbusTransport


def create_modbus_transport(
    host: str,
    *,
    port: int = DEFAULT_PORT,
    unit_id: int = DEFAULT_UNIT_ID,
    timeout: float = DEFAULT_TIMEOUT,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
) -> ModbusTransport:
    """Create a Modbus TCP transport for the panel controller.

    Args:
        host: IP address or hostname of the controller
        port: TCP port (default 502)
        unit_id: Modbus unit ID (default 1)
        timeout: Per-request timeout in seconds
        connect_timeout: Connection attempt timeout in seconds

    Returns:
        ModbusTransport instance (not yet connected)
    """
    return ModbusTransport(
        host=host,
        port=port,
        unit_id=unit_id,
        timeout=timeout,
        connect_timeout=connect_timeout,
    )


def create_transport_from_config(config: TransportConfig) -> ModbusTransport:
    """Create a transport from a validated :class:`TransportConfig`.

    Raises:
        ValueError: If the configuration is invalid
    """
    config.validate()
    return create_modbus_transport(
        config.host,
        port=config.port,
        unit_id=config.unit_id,
        timeout=config.timeout,
        connect_timeout=config.connect_timeout,
    )


__all__ = [
    "create_modbus_transport",
    "create_transport_from_config",
]
