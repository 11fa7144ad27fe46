"""Error taxonomy for timeline compilation."""


class KeyframeError(Exception):
    """Base exception for keyframe timeline failures."""
    pass


class InvalidInputError(KeyframeError, ValueError):
    """Timeline missing, malformed, empty, or its target is no longer addressable."""
    pass


class EngineUnavailableError(KeyframeError):
    """The tween engine adapter has not been provisioned yet.

    Callers may retry compilation once provisioning has completed.
    """
    pass


class UnsupportedTargetError(KeyframeError):
    """The timeline's target kind cannot be compiled through the engine."""
    pass
