"""Keyframe timelines for document elements, compiled into tween engine containers."""

from .animation import CompiledAnimation
from .compiler import Segment, build_segments, compile_segments, compile_timeline
from .config import EngineConfig
from .element_path import PathStep, get_element, get_expression, parse_expression
from .engine import EngineAdapter, FrameTweenEngine, TweenContainer, create_engine, ensure_engine
from .errors import (
    EngineUnavailableError,
    InvalidInputError,
    KeyframeError,
    UnsupportedTargetError,
)
from .events import ChangeEvent, EventEmitter, bubble_event
from .timeline import Frame, KeyframeTimeline, TargetKind, get_previous_frame

__all__ = [
    "CompiledAnimation",
    "Segment",
    "build_segments",
    "compile_segments",
    "compile_timeline",
    "EngineConfig",
    "PathStep",
    "get_element",
    "get_expression",
    "parse_expression",
    "EngineAdapter",
    "FrameTweenEngine",
    "TweenContainer",
    "create_engine",
    "ensure_engine",
    "EngineUnavailableError",
    "InvalidInputError",
    "KeyframeError",
    "UnsupportedTargetError",
    "ChangeEvent",
    "EventEmitter",
    "bubble_event",
    "Frame",
    "KeyframeTimeline",
    "TargetKind",
    "get_previous_frame",
]
