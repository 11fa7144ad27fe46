"""Tween engine adapters."""

from ..config import EngineConfig
from .adapter import Container, EngineAdapter
from .frame_engine import EASES, FrameTweenEngine, Tween, TweenContainer
from .provisioning import ensure_engine

ENGINE_TYPES: dict[str, type[EngineAdapter]] = {
    "frame": FrameTweenEngine,
}


def supported_engine_names() -> tuple[str, ...]:
    """Return supported engine names in deterministic order."""
    return tuple(ENGINE_TYPES.keys())


def create_engine(config: EngineConfig | None = None, name: str | None = None) -> EngineAdapter:
    """Create an engine adapter by name (defaults to ``config.engine``)."""
    engine_config = config or EngineConfig()
    engine_name = name or engine_config.engine
    engine_class = ENGINE_TYPES.get(engine_name)
    if engine_class is None:
        available = ", ".join(supported_engine_names())
        raise ValueError(f"Unknown engine '{engine_name}'. Available: {available}")
    return engine_class(engine_config)


__all__ = [
    "Container",
    "EngineAdapter",
    "EASES",
    "FrameTweenEngine",
    "Tween",
    "TweenContainer",
    "ENGINE_TYPES",
    "create_engine",
    "ensure_engine",
    "supported_engine_names",
]
