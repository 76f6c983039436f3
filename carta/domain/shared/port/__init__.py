"""Base type for outbound ports (repositories, gateways)."""

from typing import Protocol


class Port(Protocol):
    """Marker protocol for all outbound ports."""
