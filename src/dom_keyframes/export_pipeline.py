"""Shared compile/export orchestration used by CLI and web app entry points."""

import xml.etree.ElementTree as ET

from .animation import CompiledAnimation
from .compiler import compile_segments
from .config import EngineConfig
from .constants import DEFAULT_FPS
from .engine import create_engine, ensure_engine
from .engine.frame_engine import TweenContainer
from .errors import InvalidInputError
from .output import resolve_output_provider
from .output.base import OutputProvider
from .timeline import KeyframeTimeline


def compile_animation(
    timeline: KeyframeTimeline,
    document: ET.ElementTree,
    config: EngineConfig | None = None,
    *,
    fps: int = DEFAULT_FPS,
) -> CompiledAnimation:
    """
    Resolve the timeline's path in ``document`` and compile it.

    Raises:
        InvalidInputError: If the path no longer addresses an element
    """
    engine_config = config or EngineConfig()
    if fps <= 0:
        raise ValueError(f"FPS must be positive (got {fps})")
    if timeline.resolve_target(document) is None:
        raise InvalidInputError(f"Element path {timeline.path!r} not found in document")

    engine = ensure_engine(create_engine(engine_config), engine_config)
    container, segments = compile_segments(timeline, engine, engine_config)
    if not isinstance(container, TweenContainer):
        raise TypeError(f"Export needs a sampling container (got {type(container).__name__})")
    return CompiledAnimation(
        timeline=timeline,
        container=container,
        segments=tuple(segments),
        document=document,
        fps=fps,
    )


def encode_animation(
    animation: CompiledAnimation,
    output_path: str,
    *,
    max_frames: int | None = None,
    provider: OutputProvider | None = None,
    loop: bool = True,
) -> bytes:
    """Encode a compiled animation for the format implied by ``output_path``.

    ``loop`` configures the provider resolved from the path; an explicit
    ``provider`` keeps its own setting.
    """
    target_provider = provider or resolve_output_provider(output_path, loop=loop)
    return target_provider.encode(animation, max_frames=max_frames)
