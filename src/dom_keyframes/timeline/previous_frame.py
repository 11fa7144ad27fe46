"""Lookup of the keyframe a property transitions from."""

from bisect import bisect_left
from typing import TYPE_CHECKING

from .frame import Frame

if TYPE_CHECKING:
    from .keyframe_timeline import KeyframeTimeline


def get_previous_frame(timeline: "KeyframeTimeline", frame: Frame | int, *, prop: str) -> int:
    """
    Find the nearest earlier frame that sets ``prop``.

    Frame 0 is the implicit origin of every property, so 0 is returned when
    no earlier frame sets it, even if frame 0 does not set it either.

    Args:
        timeline: Timeline whose frame index is searched
        frame: Frame (or frame number) the transition ends at
        prop: Property name

    Returns:
        Frame number the transition starts from
    """
    frame_number = frame.frame_number if isinstance(frame, Frame) else frame
    frame_numbers = timeline.frame_numbers
    index = timeline.frame_index
    for position in range(bisect_left(frame_numbers, frame_number) - 1, -1, -1):
        candidate = frame_numbers[position]
        if index[candidate].has(prop):
            return candidate
    return 0
