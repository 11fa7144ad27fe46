"""Compile keyframe timelines into tween engine containers."""

from dataclasses import dataclass, replace
from typing import Any

from .config import EngineConfig
from .engine.adapter import Container, EngineAdapter
from .errors import EngineUnavailableError, InvalidInputError, UnsupportedTargetError
from .timeline import KeyframeTimeline, TargetKind, get_previous_frame


@dataclass(frozen=True)
class Segment:
    """A compiled change of one property between two frames.

    Segments are ephemeral: they describe the tweens pushed into a container
    and refer back to it through ``container_id``/``index`` once added.
    """

    property: str
    from_frame: int
    to_frame: int
    value: float
    is_initial_set: bool = False
    container_id: str | None = None
    index: int | None = None

    @property
    def duration(self) -> int:
        return self.to_frame - self.from_frame

    @property
    def start_offset(self) -> int:
        return self.from_frame

    def tween_vars(self, config: EngineConfig) -> dict[str, Any]:
        """Engine vars for this segment."""
        tween_vars: dict[str, Any] = {self.property: self.value, "ease": config.ease}
        if self.is_initial_set and config.suppress_initial_render:
            tween_vars["immediateRender"] = False
        return tween_vars

    def to_dict(self) -> dict[str, Any]:
        return {
            "property": self.property,
            "fromFrame": self.from_frame,
            "toFrame": self.to_frame,
            "duration": self.duration,
            "value": self.value,
            "isInitialSet": self.is_initial_set,
            "startOffset": self.start_offset,
        }


def build_segments(timeline: KeyframeTimeline) -> list[Segment]:
    """
    Derive the ordered segment list of a timeline.

    Frame 0 contributes zero-length initial sets; every later frame
    contributes one transition per property, starting at the nearest earlier
    frame that set the property (frame 0 when none did). Order is frame
    ascending, then property insertion order within each frame.
    """
    segments: list[Segment] = []
    for frame in timeline.frames:
        for prop, value in frame.params:
            if frame.frame_number == 0:
                segments.append(Segment(prop, 0, 0, value, is_initial_set=True))
                continue
            previous = get_previous_frame(timeline, frame, prop=prop)
            segments.append(Segment(prop, previous, frame.frame_number, value))
    return segments


def compile_segments(
    timeline: KeyframeTimeline,
    adapter: EngineAdapter,
    config: EngineConfig | None = None,
) -> tuple[Container, list[Segment]]:
    """
    Compile a timeline and return the container with its stamped segments.

    Raises:
        InvalidInputError: Not a timeline, no frames, unresolved target, a
            late-origin property under the ``strict`` origin policy, or an
            ease the adapter does not know
        EngineUnavailableError: The adapter is not provisioned
        UnsupportedTargetError: The timeline does not target a dom element
    """
    engine_config = config or EngineConfig()
    _validate(timeline, adapter, engine_config)

    container = adapter.create_container(engine_config.container_vars())
    stamped: list[Segment] = []
    for index, segment in enumerate(build_segments(timeline)):
        container.add_tween(
            timeline.target,
            segment.tween_vars(engine_config),
            segment.start_offset,
            duration=segment.duration,
        )
        stamped.append(replace(segment, container_id=container.id, index=index))
    return container, stamped


def compile_timeline(
    timeline: KeyframeTimeline,
    adapter: EngineAdapter,
    config: EngineConfig | None = None,
) -> Container:
    """Compile a dom timeline into a paused, frame-unit engine container."""
    container, _segments = compile_segments(timeline, adapter, config)
    return container


def _validate(timeline: object, adapter: EngineAdapter, config: EngineConfig) -> None:
    # Runs before any container exists so failures leave no engine state behind.
    if not isinstance(timeline, KeyframeTimeline) or len(timeline) == 0:
        raise InvalidInputError("Need valid timeline data with at least one frame")
    if not adapter.is_available():
        raise EngineUnavailableError("Tween engine not set. Provision the engine before compiling")
    if timeline.target_kind is not TargetKind.DOM:
        raise UnsupportedTargetError("Timeline invalid. Needs a timeline with type of dom")
    if timeline.target is None:
        raise InvalidInputError(
            f"Timeline target is not resolved (path {timeline.path!r} no longer addressable)"
        )
    if config.origin_policy == "strict":
        late = timeline.late_origin_properties()
        if late:
            raise InvalidInputError(
                "Properties without a frame 0 value: " + ", ".join(late)
            )
    if not adapter.supports_ease(config.ease):
        raise InvalidInputError(f"Unknown ease '{config.ease}' for {type(adapter).__name__}")
