"""Raster previews of compiled animations using Pillow."""

import math
from typing import Iterator, Mapping

from PIL import Image, ImageDraw, ImageFont

from ..animation import CompiledAnimation
from ..constants import (
    PREVIEW_BACKGROUND_COLOR,
    PREVIEW_BOX_COLOR,
    PREVIEW_BOX_SIZE,
    PREVIEW_HEIGHT,
    PREVIEW_WIDTH,
)


class PreviewRenderer:
    """Draws the animated target as a box moving inside a fitted viewport."""

    def __init__(
        self,
        samples: list[Mapping[str, float]],
        width: int = PREVIEW_WIDTH,
        height: int = PREVIEW_HEIGHT,
        box_size: int = PREVIEW_BOX_SIZE,
    ):
        """
        Initialize renderer.

        Args:
            samples: Every sampled property map, used to fit x/y into the canvas
            width: Canvas width in pixels
            height: Canvas height in pixels
            box_size: Edge length of the unscaled box
        """
        self.width = width
        self.height = height
        self.box_size = box_size
        self._x_range = _value_range(samples, "x")
        self._y_range = _value_range(samples, "y")

    def render_frame(self, values: Mapping[str, float], frame_number: int) -> Image.Image:
        """
        Render one sampled frame.

        Returns:
            Paletted PIL Image of the frame
        """
        img = Image.new("RGB", (self.width, self.height), PREVIEW_BACKGROUND_COLOR)

        box = self._box_image(values)
        cx = self._project(values.get("x", 0.0), self._x_range, self.width)
        cy = self._project(values.get("y", 0.0), self._y_range, self.height)
        # paste clips boxes that extend past the canvas
        img.paste(box, (int(cx - box.width / 2), int(cy - box.height / 2)), box)

        draw = ImageDraw.Draw(img, "RGBA")
        self._draw_frame_number(draw, frame_number)

        return img.convert("P", palette=Image.Palette.ADAPTIVE)

    def _box_image(self, values: Mapping[str, float]) -> Image.Image:
        scale = values.get("scale", 1.0)
        box_width = self.box_size * abs(values.get("scaleX", scale))
        box_height = self.box_size * abs(values.get("scaleY", scale))
        # 3D rotations are shown as foreshortening around the matching axis
        box_height *= abs(math.cos(math.radians(values.get("rotationX", 0.0))))
        box_width *= abs(math.cos(math.radians(values.get("rotationY", 0.0))))

        opacity = min(1.0, max(0.0, values.get("opacity", values.get("autoAlpha", 1.0))))
        size = (max(1, round(box_width)), max(1, round(box_height)))
        box = Image.new("RGBA", size, (*PREVIEW_BOX_COLOR, round(255 * opacity)))

        rotation = values.get("rotation", values.get("rotationZ", 0.0))
        if rotation:
            # PIL rotates counter-clockwise, CSS rotation is clockwise
            box = box.rotate(-rotation, expand=True, resample=Image.Resampling.BICUBIC)
        return box

    def _project(self, value: float, value_range: tuple[float, float], extent: int) -> float:
        low, high = value_range
        margin = self.box_size
        if high - low < 1e-9:
            return extent / 2
        return margin + (value - low) / (high - low) * (extent - 2 * margin)

    def _draw_frame_number(self, draw: ImageDraw.ImageDraw, frame_number: int) -> None:
        """Draw the current frame number in the top-left corner."""
        font = ImageFont.load_default()
        margin = 5
        draw.text((margin, margin), f"Frame: {frame_number}", font=font, fill=(255, 255, 255))


def generate_preview_frames(
    animation: CompiledAnimation, max_frames: int
) -> Iterator[Image.Image]:
    """Render evenly spaced preview frames covering the whole container."""
    if max_frames <= 0:
        return
    frame_numbers = preview_frame_numbers(animation.frame_count, max_frames)
    samples = [
        animation.container.values_at(frame_number, animation.target)
        for frame_number in frame_numbers
    ]
    renderer = PreviewRenderer(samples)
    for frame_number, values in zip(frame_numbers, samples):
        yield renderer.render_frame(values, frame_number)


def preview_frame_numbers(frame_count: int, max_frames: int) -> list[int]:
    """Frame numbers to sample; always includes the first and last frame."""
    if frame_count <= max_frames:
        return list(range(frame_count))
    if max_frames == 1:
        return [0]
    last = frame_count - 1
    return sorted({round(index * last / (max_frames - 1)) for index in range(max_frames)})


def _value_range(samples: list[Mapping[str, float]], prop: str) -> tuple[float, float]:
    values = [sample[prop] for sample in samples if prop in sample]
    if not values:
        return 0.0, 0.0
    return min(values), max(values)
