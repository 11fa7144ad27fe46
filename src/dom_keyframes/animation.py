"""Compiled animation bundle consumed by output providers."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .compiler import Segment
from .constants import DEFAULT_FPS
from .engine.frame_engine import TweenContainer
from .timeline import KeyframeTimeline


@dataclass(frozen=True)
class CompiledAnimation:
    """A compiled timeline bundled with the document its target lives in."""

    timeline: KeyframeTimeline
    container: TweenContainer
    segments: tuple[Segment, ...]
    document: ET.ElementTree
    fps: int = DEFAULT_FPS

    @property
    def target(self) -> ET.Element:
        return self.timeline.target

    @property
    def frame_count(self) -> int:
        """Number of whole frames from 0 to the container's end, inclusive."""
        return int(self.container.duration()) + 1

    @property
    def frame_duration_ms(self) -> int:
        return max(1, 1000 // self.fps)
