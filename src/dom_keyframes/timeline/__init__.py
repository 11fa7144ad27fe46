"""Keyframe timeline model."""

from .frame import Frame, Params
from .keyframe_timeline import KeyframeTimeline, TargetKind
from .previous_frame import get_previous_frame

__all__ = [
    "Frame",
    "Params",
    "KeyframeTimeline",
    "TargetKind",
    "get_previous_frame",
]
