"""Engine configuration threaded explicitly into compilation and engine factories."""

import os
from dataclasses import dataclass, replace
from typing import Mapping

from .constants import DEFAULT_EASE, DEFAULT_ENGINE, ENV_PREFIX

ORIGIN_POLICIES = ("carry", "strict")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineConfig:
    """Settings for the tween engine and the timeline compiler.

    Attributes:
        use_frames: Containers measure time in frames instead of seconds
        paused: Containers are created paused
        ease: Interpolation curve name attached to every tween
        suppress_initial_render: Initial-set tweens carry ``immediateRender: False``
        origin_policy: ``carry`` keeps frame 0 as the implicit origin of late
            properties, ``strict`` rejects timelines containing them
        auto_provision: Allow ``ensure_engine`` to provision a missing engine
        engine: Engine adapter name resolved by ``create_engine``
    """

    use_frames: bool = True
    paused: bool = True
    ease: str = DEFAULT_EASE
    suppress_initial_render: bool = True
    origin_policy: str = "carry"
    auto_provision: bool = True
    engine: str = DEFAULT_ENGINE

    def __post_init__(self) -> None:
        if self.origin_policy not in ORIGIN_POLICIES:
            supported = ", ".join(ORIGIN_POLICIES)
            raise ValueError(
                f"Unknown origin policy '{self.origin_policy}'. Available: {supported}"
            )

    def container_vars(self) -> dict[str, object]:
        """Vars passed to ``create_container``."""
        return {"useFrames": self.use_frames, "paused": self.paused}

    def with_overrides(self, **changes: object) -> "EngineConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """
        Build a config from ``DOM_KEYFRAMES_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            EngineConfig with unset variables left at their defaults
        """
        env = os.environ if environ is None else environ
        default = cls()
        return cls(
            use_frames=_env_bool(env, "USE_FRAMES", default.use_frames),
            paused=_env_bool(env, "PAUSED", default.paused),
            ease=env.get(f"{ENV_PREFIX}EASE", default.ease),
            suppress_initial_render=_env_bool(
                env, "SUPPRESS_INITIAL_RENDER", default.suppress_initial_render
            ),
            origin_policy=env.get(f"{ENV_PREFIX}ORIGIN_POLICY", default.origin_policy).lower(),
            auto_provision=_env_bool(env, "AUTO_PROVISION", default.auto_provision),
            engine=env.get(f"{ENV_PREFIX}ENGINE", default.engine),
        )


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {ENV_PREFIX}{name}: {raw!r}")
