"""SMIL output provider: animation elements injected into the target's document."""

import copy
import xml.etree.ElementTree as ET
from typing import Callable

from ..animation import CompiledAnimation
from ..constants import SVG_NAMESPACE, XHTML_NAMESPACE, XLINK_NAMESPACE
from ..element_path import get_element
from ..engine.frame_engine import TweenContainer
from ._svg_tracks import (
    _tl_compress_track,
    _tl_key_times,
    _tl_needs_key_times,
    _tl_num,
)
from .base import OutputProvider

ET.register_namespace("svg", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)
ET.register_namespace("html", XHTML_NAMESPACE)

_AnimationElement = tuple[str, dict[str, str]]

_ROTATION_PROPERTIES = ("rotation", "rotationZ")
_SCALE_PROPERTIES = ("scale", "scaleX", "scaleY")


class SvgOutputProvider(OutputProvider):
    """Output provider for documents animated with SMIL elements."""

    def __init__(self, path: str = "", loop: bool = True):
        super().__init__(path)
        self.loop = loop

    def encode(self, animation: CompiledAnimation, max_frames: int | None = None) -> bytes:
        del max_frames
        if not isinstance(animation, CompiledAnimation):
            raise TypeError(
                f"SVG output only supports compiled animations (got {type(animation).__name__})"
            )
        return encode_svg_animation(animation, loop=self.loop)


def encode_svg_animation(animation: CompiledAnimation, loop: bool = True) -> bytes:
    """Copy the document and append SMIL animations for every animated property.

    Pipeline:
    1. Re-locate the target in a copy of the document through its path.
    2. Sample each property at its tween boundaries (exact for linear tweens).
    3. Drop collinear samples and emit one animation element per track.
    """
    document = copy.deepcopy(animation.document)
    target = get_element(animation.timeline.path, document)
    if target is None:
        raise ValueError("Animation target not found in exported document")

    container = animation.container
    total_frames = container.duration()
    duration_ms = max(1, round(total_frames * 1000 / animation.fps))
    timing = {"dur": f"{duration_ms}ms"}
    if loop:
        timing["repeatCount"] = "indefinite"
    else:
        timing["fill"] = "freeze"

    for tag, attrib in _tl_animation_elements(container, animation.target, total_frames):
        ET.SubElement(target, f"{{{SVG_NAMESPACE}}}{tag}", {**attrib, **timing})

    return ET.tostring(document.getroot(), encoding="utf-8")


def _tl_animation_elements(
    container: TweenContainer, target: object, total_frames: float
) -> list[_AnimationElement]:
    props = container.property_names(target)
    elements: list[_AnimationElement] = []

    def sample(prop: str, time: float, default: float) -> float:
        value = container.value_at(prop, time, target)
        return default if value is None else value

    if "x" in props or "y" in props:
        track = _tl_track(
            container, ("x", "y"), lambda t: (sample("x", t, 0.0), sample("y", t, 0.0))
        )
        elements.append(_tl_transform_element("translate", *track, total_frames))

    rotation = next((prop for prop in _ROTATION_PROPERTIES if prop in props), None)
    if rotation is not None:
        track = _tl_track(container, (rotation,), lambda t: (sample(rotation, t, 0.0),))
        elements.append(_tl_transform_element("rotate", *track, total_frames))

    if any(prop in props for prop in _SCALE_PROPERTIES):

        def scale_pair(time: float) -> tuple[float, float]:
            uniform = sample("scale", time, 1.0)
            return sample("scaleX", time, uniform), sample("scaleY", time, uniform)

        track = _tl_track(container, _SCALE_PROPERTIES, scale_pair)
        elements.append(_tl_transform_element("scale", *track, total_frames))

    consumed = {"x", "y", *_ROTATION_PROPERTIES, *_SCALE_PROPERTIES}
    for prop in props:
        if prop in consumed:
            continue
        # Before its first tween a property shows the first value it reaches
        first_known = next(
            (
                value
                for value in (container.value_at(prop, t, target) for t in container.boundaries(prop))
                if value is not None
            ),
            0.0,
        )
        times, values = _tl_track(
            container, (prop,), lambda t, p=prop, d=first_known: (sample(p, t, d),)
        )
        attrib = {"attributeName": prop, "values": values}
        attrib.update(_tl_key_times_attrib(times, total_frames))
        elements.append(("animate", attrib))

    return elements


def _tl_transform_element(
    transform_type: str, times: list[float], values: str, total_frames: float
) -> _AnimationElement:
    attrib = {
        "attributeName": "transform",
        "type": transform_type,
        "additive": "sum",
        "values": values,
    }
    attrib.update(_tl_key_times_attrib(times, total_frames))
    return "animateTransform", attrib


def _tl_track(
    container: TweenContainer,
    props: tuple[str, ...],
    sampler: Callable[[float], tuple[float, ...]],
) -> tuple[list[float], str]:
    """Sample ``props`` at their tween boundaries and format a SMIL ``values`` list."""
    times = _tl_sample_times(container, props)
    times, samples = _tl_compress_track(times, [sampler(time) for time in times])
    values = ";".join(" ".join(_tl_num(component) for component in s) for s in samples)
    return times, values


def _tl_sample_times(container: TweenContainer, props: tuple[str, ...]) -> list[float]:
    times = {0.0, float(container.duration())}
    for prop in props:
        times.update(container.boundaries(prop))
    return sorted(times)


def _tl_key_times_attrib(times: list[float], total_frames: float) -> dict[str, str]:
    if len(times) < 2 or not _tl_needs_key_times(times, total_frames):
        return {}
    return {"keyTimes": _tl_key_times(times, total_frames)}
