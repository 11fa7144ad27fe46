"""Built-in frame-based tween engine."""

import itertools
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping

from ..config import EngineConfig
from ..errors import EngineUnavailableError
from .adapter import Container, EngineAdapter

# Tween vars that configure the tween instead of naming an animated property
RESERVED_VARS = frozenset({"ease", "immediateRender", "delay", "overwrite"})

EASES: dict[str, Callable[[float], float]] = {
    "Linear.easeNone": lambda t: t,
    "linear": lambda t: t,
    "none": lambda t: t,
    "Power1.easeIn": lambda t: t * t,
    "Power1.easeOut": lambda t: 1 - (1 - t) * (1 - t),
    "Power1.easeInOut": lambda t: 2 * t * t if t < 0.5 else 1 - 2 * (1 - t) * (1 - t),
    "Sine.easeInOut": lambda t: -(math.cos(math.pi * t) - 1) / 2,
}

_container_ids = itertools.count(1)


@dataclass
class Tween:
    """A positioned tween; refers to its container by id only."""

    target: object
    vars: dict[str, Any]
    start: float
    length: float
    container_id: str
    index: int

    @property
    def ease(self) -> str:
        return self.vars.get("ease", "Linear.easeNone")

    @property
    def immediate_render(self) -> bool:
        return bool(self.vars.get("immediateRender", True))

    def properties(self) -> dict[str, float]:
        return {k: v for k, v in self.vars.items() if k not in RESERVED_VARS}

    def start_time(self) -> float:
        return self.start

    def end_time(self) -> float:
        return self.start + self.length

    def duration(self) -> float:
        return self.length


@dataclass
class TweenContainer(Container):
    """Frame-unit timeline of tweens with sampling support."""

    vars: dict[str, Any]
    default_ease: str = "Linear.easeNone"
    id: str = field(default_factory=lambda: f"tl{next(_container_ids)}")
    _children: list[Tween] = field(default_factory=list, init=False, repr=False)

    def add_tween(
        self,
        target: object,
        vars: Mapping[str, Any],
        start_offset: float,
        *,
        duration: float,
    ) -> Tween:
        if duration < 0:
            raise ValueError(f"Tween duration must be >= 0 (got {duration})")
        if start_offset < 0:
            raise ValueError(f"Tween start offset must be >= 0 (got {start_offset})")
        tween_vars = dict(vars)
        ease = tween_vars.get("ease", self.default_ease)
        if ease not in EASES:
            supported = ", ".join(EASES)
            raise ValueError(f"Unknown ease '{ease}'. Available: {supported}")

        tween = Tween(
            target=target,
            vars=tween_vars,
            start=start_offset,
            length=duration,
            container_id=self.id,
            index=len(self._children),
        )
        self._children.append(tween)
        return tween

    def children(self) -> list[Tween]:
        return list(self._children)

    def uses_frames(self) -> bool:
        return bool(self.vars.get("useFrames", False))

    def paused(self) -> bool:
        return bool(self.vars.get("paused", False))

    def duration(self) -> float:
        return max((child.end_time() for child in self._children), default=0)

    def targets(self) -> list[object]:
        """Distinct targets in first-tween order."""
        seen: list[object] = []
        for child in self._children:
            if not any(child.target is target for target in seen):
                seen.append(child.target)
        return seen

    def value_at(self, prop: str, time: float, target: object = None) -> float | None:
        """
        Sample one property at ``time``.

        Tweens start from the value left by earlier tweens on the same
        property; a tween with no known start value holds its end value.

        Args:
            prop: Property name
            time: Position on the container
            target: Restrict sampling to one target (default: any)

        Returns:
            Property value, or None before the first tween touching it
        """
        current: float | None = None
        for tween in self._tweens_for(prop, target):
            if time < tween.start:
                break
            end_value = tween.properties()[prop]
            start_value = end_value if current is None else current
            if tween.length <= 0 or time >= tween.end_time():
                current = end_value
                continue
            progress = EASES[tween.vars.get("ease", self.default_ease)](
                (time - tween.start) / tween.length
            )
            current = start_value + (end_value - start_value) * progress
        return current

    def values_at(self, time: float, target: object = None) -> dict[str, float]:
        """Sample every property touched at or before ``time``."""
        values: dict[str, float] = {}
        for prop in self.property_names(target):
            value = self.value_at(prop, time, target)
            if value is not None:
                values[prop] = value
        return values

    def property_names(self, target: object = None) -> tuple[str, ...]:
        names: dict[str, None] = {}
        for child in self._children:
            if target is not None and child.target is not target:
                continue
            for name in child.properties():
                names.setdefault(name, None)
        return tuple(names)

    def boundaries(self, prop: str | None = None) -> list[float]:
        """Sorted distinct tween start/end times (optionally for one property)."""
        times = {0.0}
        for child in self._children:
            if prop is not None and prop not in child.properties():
                continue
            times.add(float(child.start))
            times.add(float(child.end_time()))
        return sorted(times)

    def progress(self, ratio: float, target: object = None) -> dict[str, float]:
        """Sample at a fraction of the total duration."""
        ratio = min(1.0, max(0.0, ratio))
        return self.values_at(self.duration() * ratio, target)

    def _tweens_for(self, prop: str, target: object) -> Iterator[Tween]:
        matching = [
            child
            for child in self._children
            if prop in child.vars
            and prop not in RESERVED_VARS
            and (target is None or child.target is target)
        ]
        # Stable: insertion order breaks ties between tweens starting together.
        yield from sorted(matching, key=lambda child: child.start)


class FrameTweenEngine(EngineAdapter):
    """In-process engine adapter producing ``TweenContainer`` instances."""

    def __init__(self, config: EngineConfig | None = None, available: bool = True):
        self.config = config or EngineConfig()
        self._available = available

    def is_available(self) -> bool:
        return self._available

    def supports_ease(self, ease: str) -> bool:
        return ease in EASES

    def provision(self) -> None:
        self._available = True

    def create_container(self, vars: Mapping[str, Any]) -> TweenContainer:
        if not self._available:
            raise EngineUnavailableError("Frame tween engine is not provisioned")
        return TweenContainer(vars=dict(vars), default_ease=self.config.ease)
