"""Animated raster previews (GIF, WebP) encoded with Pillow."""

from io import BytesIO

from ..animation import CompiledAnimation
from ..constants import PREVIEW_MAX_FRAMES
from .base import OutputProvider
from .preview import generate_preview_frames


class RasterPreviewProvider(OutputProvider):
    """Renders evenly spaced preview frames and saves them as one animated image.

    Subclasses name the Pillow format and translate ``loop`` into that
    format's loop-count convention.
    """

    pillow_format = ""
    save_options: dict[str, object] = {}

    def __init__(self, path: str = "", loop: bool = True):
        super().__init__(path)
        self.loop = loop

    def loop_options(self) -> dict[str, object]:
        return {"loop": 0} if self.loop else {}

    def encode(self, animation: CompiledAnimation, max_frames: int | None = None) -> bytes:
        limit = PREVIEW_MAX_FRAMES if max_frames is None else max_frames
        frames = list(generate_preview_frames(animation, limit))
        if not frames:
            return b""

        buffer = BytesIO()
        frames[0].save(
            buffer,
            format=self.pillow_format,
            save_all=True,
            append_images=frames[1:],
            duration=animation.frame_duration_ms,
            **self.loop_options(),
            **self.save_options,
        )
        return buffer.getvalue()


class GifOutputProvider(RasterPreviewProvider):
    """GIF preview; without a loop count the animation plays once."""

    pillow_format = "gif"
    save_options = {"optimize": False}


class WebPOutputProvider(RasterPreviewProvider):
    """Lossless WebP preview; WebP counts plays, with 0 meaning forever."""

    pillow_format = "webp"
    save_options = {"lossless": True, "method": 4}

    def loop_options(self) -> dict[str, object]:
        return {"loop": 0 if self.loop else 1}
