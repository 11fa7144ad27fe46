"""Capability surface the timeline compiler needs from a tween engine."""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from ..errors import EngineUnavailableError


class Container(ABC):
    """Engine-level timeline holding positioned tweens."""

    id: str

    @abstractmethod
    def add_tween(
        self,
        target: object,
        vars: Mapping[str, Any],
        start_offset: float,
        *,
        duration: float,
    ) -> Any:
        """
        Append a tween to the container.

        Args:
            target: Object the tween animates
            vars: Property values plus tween options such as ``ease``
            start_offset: Position of the tween on the container
            duration: Tween length in the container's time unit

        Returns:
            The engine's child handle
        """
        raise NotImplementedError

    @abstractmethod
    def duration(self) -> float:
        """Total length of the container."""
        raise NotImplementedError


class EngineAdapter(ABC):
    """Abstract base class for tween engine adapters."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the engine is provisioned and containers can be created."""
        raise NotImplementedError

    @abstractmethod
    def create_container(self, vars: Mapping[str, Any]) -> Container:
        """Create an empty container configured with ``vars``."""
        raise NotImplementedError

    def supports_ease(self, ease: str) -> bool:
        """Whether tweens may name ``ease``; engines without an ease table accept any."""
        return True

    def provision(self) -> None:
        """Make the engine available; engines that cannot self-provision refuse."""
        raise EngineUnavailableError(f"{type(self).__name__} cannot be provisioned automatically")
