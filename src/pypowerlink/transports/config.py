"""Transport configuration.

This module provides the TransportConfig dataclass for configuring
transport instances in a uniform way, supporting serialization to/from
dictionaries for host integrations that persist their settings.

Example:
    config = TransportConfig(host="192.168.1.50")
    config.validate()

    # Serialize to dict for storage
    data = config.to_dict()

    # Restore from dict
    restored = TransportConfig.from_dict(data)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pypowerlink.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
)


@dataclass
class TransportConfig:
    """Configuration for a controller connection.

    Attributes:
        host: IP address or hostname of the controller
        port: TCP port (default 502)
        unit_id: Modbus unit ID (default 1)
        timeout: Per-request timeout in seconds (default 3.0)
        connect_timeout: Connection attempt timeout in seconds (default 0.5)
    """

    host: str
    port: int = DEFAULT_PORT
    unit_id: int = DEFAULT_UNIT_ID
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.host:
            raise ValueError("host is required")
        if not 1 <= self.port <= 65535:
            raise ValueError("port must be 1-65535")
        if not 0 <= self.unit_id <= 247:
            raise ValueError("unit_id must be 0-247")
        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("timeouts must be positive")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "host": self.host,
            "port": self.port,
            "unit_id": self.unit_id,
            "timeout": self.timeout,
            "connect_timeout": self.connect_timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransportConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values (from to_dict() or a
                stored host configuration)

        Returns:
            TransportConfig instance with values from dictionary
        """
        return cls(
            host=data.get("host", ""),
            port=data.get("port", DEFAULT_PORT),
            unit_id=data.get("unit_id", DEFAULT_UNIT_ID),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            connect_timeout=data.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT),
        )


__all__ = [
    "TransportConfig",
]
