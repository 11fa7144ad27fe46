"""Keyframe payloads: a frame number plus an ordered set of property values."""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

from ..convert import mapping_to_pairs, pairs_to_mapping
from ..errors import InvalidInputError

Params = tuple[tuple[str, float], ...]


@dataclass(frozen=True)
class Frame:
    """A point in frame-unit time carrying a sparse set of property values.

    ``params`` keeps first-insertion order; compilation emits tweens in this
    order, so child ordering stays reproducible across runs.

    A frame must set at least one property; empty ``params`` raise
    ``InvalidInputError``, so a container always ends on a keyframe.
    """

    frame_number: int
    params: Params

    def __post_init__(self) -> None:
        if isinstance(self.frame_number, bool) or not isinstance(self.frame_number, int):
            raise InvalidInputError(
                f"Frame number must be an integer (got {type(self.frame_number).__name__})"
            )
        if self.frame_number < 0:
            raise InvalidInputError(f"Frame number must be >= 0 (got {self.frame_number})")
        if not self.params:
            raise InvalidInputError(f"Frame {self.frame_number} sets no properties")

        seen: set[str] = set()
        for name, value in self.params:
            if not isinstance(name, str) or not name:
                raise InvalidInputError(f"Property names must be non-empty strings (got {name!r})")
            if name in seen:
                raise InvalidInputError(
                    f"Property '{name}' set twice in frame {self.frame_number}"
                )
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidInputError(
                    f"Property '{name}' in frame {self.frame_number} must be numeric "
                    f"(got {value!r})"
                )
            seen.add(name)

    @classmethod
    def from_mapping(cls, frame_number: int, params: Mapping[str, float]) -> "Frame":
        if not isinstance(params, Mapping):
            raise InvalidInputError(
                f"Frame params must be a mapping (got {type(params).__name__})"
            )
        return cls(frame_number, mapping_to_pairs(params))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Frame":
        """Build a frame from ``{"frame": n, "params": {...}}``."""
        if not isinstance(data, Mapping) or "frame" not in data:
            raise InvalidInputError(f"Invalid frame payload: {data!r}")
        return cls.from_mapping(data["frame"], data.get("params", {}))

    def to_dict(self) -> dict[str, Any]:
        return {"frame": self.frame_number, "params": self.params_dict()}

    def params_dict(self) -> dict[str, float]:
        return pairs_to_mapping(self.params)

    def property_names(self) -> tuple[str, ...]:
        return tuple(name for name, _value in self.params)

    def has(self, prop: str) -> bool:
        return any(name == prop for name, _value in self.params)

    def value(self, prop: str) -> float:
        for name, value in self.params:
            if name == prop:
                return value
        raise KeyError(prop)
