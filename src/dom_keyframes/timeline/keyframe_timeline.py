"""Keyframe timeline model with a derived frame-number index."""

import json
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from ..element_path import Root, get_element, get_expression
from ..errors import InvalidInputError
from ..events import EventEmitter, create_change_event
from .frame import Frame
from .previous_frame import get_previous_frame

FrameInput = Frame | Mapping[str, Any]


class TargetKind(str, Enum):
    """What a timeline animates."""

    DOM = "dom"
    OBJECT = "object"


class KeyframeTimeline:
    """Ordered keyframes for a single animation target.

    ``path`` is the durable identity of a dom target: it survives
    serialization while ``target`` does not, and is re-resolved with
    ``resolve_target`` against a (possibly different) document.
    """

    def __init__(
        self,
        target_kind: TargetKind | str,
        target: object = None,
        frames: Iterable[FrameInput] = (),
        path: str | None = None,
    ):
        """
        Initialize a timeline.

        Args:
            target_kind: ``dom`` or ``object``
            target: Live target handle, or None while unresolved
            frames: Frame objects or ``{"frame": n, "params": {...}}`` mappings
            path: Element path of a dom target
        """
        self.target_kind = _coerce_target_kind(target_kind)
        _validate_path(self.target_kind, path)
        self.target = target
        self.path = path
        self.events = EventEmitter()
        self._frames: tuple[Frame, ...] = ()
        self._frame_index: dict[int, Frame] = {}
        self._assign_frames(_coerce_frames(frames))

    @classmethod
    def capture(
        cls,
        element: object,
        frames: Iterable[FrameInput],
        root: Root,
    ) -> "KeyframeTimeline":
        """Create a dom timeline whose path is computed from ``element`` under ``root``."""
        path = get_expression(element, root)
        if path is None:
            raise InvalidInputError("Target element is not addressable from the given root")
        return cls(TargetKind.DOM, element, frames, path)

    @property
    def frames(self) -> tuple[Frame, ...]:
        return self._frames

    @property
    def frame_index(self) -> Mapping[int, Frame]:
        return MappingProxyType(self._frame_index)

    @property
    def frame_numbers(self) -> tuple[int, ...]:
        return tuple(frame.frame_number for frame in self._frames)

    @property
    def max_frame_number(self) -> int:
        return self._frames[-1].frame_number if self._frames else 0

    def get_frame(self, frame_number: int) -> Frame | None:
        return self._frame_index.get(frame_number)

    def previous_frame_number(self, frame: Frame | int, prop: str) -> int:
        return get_previous_frame(self, frame, prop=prop)

    def property_names(self) -> tuple[str, ...]:
        """Every property used by the timeline, in first-seen order."""
        names: dict[str, None] = {}
        for frame in self._frames:
            for name in frame.property_names():
                names.setdefault(name, None)
        return tuple(names)

    def late_origin_properties(self) -> tuple[str, ...]:
        """Properties whose first keyframe comes after frame 0.

        Their first transition starts from the implicit frame-0 origin with
        no authored start value.
        """
        origin = self._frame_index.get(0)
        return tuple(
            name for name in self.property_names() if origin is None or not origin.has(name)
        )

    def set_frame(self, frame_number: int, params: Mapping[str, float]) -> Frame:
        """Insert or replace the frame at ``frame_number``."""
        frame = Frame.from_mapping(frame_number, params)
        old = self._frame_index.get(frame_number)
        if old == frame:
            return frame

        previous = self.to_dict()
        frames = [f for f in self._frames if f.frame_number != frame_number]
        frames.append(frame)
        self._assign_frames(frames)
        self._publish(
            "frames",
            old.to_dict() if old is not None else None,
            frame.to_dict(),
            previous,
        )
        return frame

    def remove_frame(self, frame_number: int) -> Frame:
        old = self._frame_index.get(frame_number)
        if old is None:
            raise InvalidInputError(f"No frame {frame_number} in timeline")

        previous = self.to_dict()
        self._assign_frames(f for f in self._frames if f.frame_number != frame_number)
        self._publish("frames", old.to_dict(), None, previous)
        return old

    def set_path(self, path: str | None) -> None:
        _validate_path(self.target_kind, path)
        if path == self.path:
            return
        previous = self.to_dict()
        old, self.path = self.path, path
        self._publish("path", old, path, previous)

    def set_target(self, target: object) -> None:
        if target is self.target:
            return
        previous = self.to_dict()
        old, self.target = self.target, target
        self._publish("target", old, target, previous)

    def resolve_target(self, root: Root) -> object:
        """Re-locate a dom target from its path; None when no longer addressable."""
        if self.target_kind is not TargetKind.DOM or self.path is None:
            return self.target
        self.set_target(get_element(self.path, root))
        return self.target

    def to_dict(self) -> dict[str, Any]:
        return {
            "targetKind": self.target_kind.value,
            "frames": [frame.to_dict() for frame in self._frames],
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KeyframeTimeline":
        """Rehydrate a timeline; the target stays unresolved until ``resolve_target``."""
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"Timeline payload must be an object (got {type(data).__name__})")
        if "targetKind" not in data:
            raise InvalidInputError("Timeline payload is missing 'targetKind'")
        frames = data.get("frames", [])
        if not isinstance(frames, list):
            raise InvalidInputError("Timeline 'frames' must be a list")
        return cls(data["targetKind"], None, frames, data.get("path"))

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "KeyframeTimeline":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Invalid timeline JSON: {e}")
        return cls.from_dict(data)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return (
            f"KeyframeTimeline({self.target_kind.value}, frames={len(self._frames)}, "
            f"path={self.path!r})"
        )

    def _assign_frames(self, frames: Iterable[Frame]) -> None:
        ordered = sorted(frames, key=lambda frame: frame.frame_number)
        index: dict[int, Frame] = {}
        for frame in ordered:
            if frame.frame_number in index:
                raise InvalidInputError(f"Duplicate frame number {frame.frame_number}")
            index[frame.frame_number] = frame
        self._frames = tuple(ordered)
        self._frame_index = index

    def _publish(
        self, change_type: str, from_value: Any, to_value: Any, previous: dict[str, Any]
    ) -> None:
        event = create_change_event(previous, self.to_dict(), change_type, from_value, to_value)
        self.events.emit("change", event)
        self.events.emit(f"change:{change_type}", event)


def _coerce_target_kind(value: TargetKind | str) -> TargetKind:
    try:
        return TargetKind(value)
    except ValueError:
        supported = ", ".join(kind.value for kind in TargetKind)
        raise InvalidInputError(f"Unknown target kind {value!r}. Available: {supported}")


def _coerce_frames(frames: Iterable[FrameInput]) -> list[Frame]:
    if isinstance(frames, (str, bytes, Mapping)):
        raise InvalidInputError("Frames must be a sequence of frames")
    coerced: list[Frame] = []
    for frame in frames:
        coerced.append(frame if isinstance(frame, Frame) else Frame.from_dict(frame))
    return coerced


def _validate_path(kind: TargetKind, path: str | None) -> None:
    if path is None:
        return
    if not isinstance(path, str):
        raise InvalidInputError(f"Path must be a string (got {type(path).__name__})")
    if kind is not TargetKind.DOM:
        raise InvalidInputError("Only dom timelines carry an element path")
