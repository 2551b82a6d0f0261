"""Raster output providers backed by Pillow."""

from io import BytesIO
from typing import Any, ClassVar, Iterator

from PIL import Image

from .base import OutputProvider


def _save_image(image: Image.Image, **options: Any) -> bytes:
    buffer = BytesIO()
    image.save(buffer, **options)
    return buffer.getvalue()


class AnimatedPillowOutputProvider(OutputProvider[Image.Image]):
    """Saves every rendered frame as one looping Pillow animation."""

    pillow_format: ClassVar[str]
    options: ClassVar[dict[str, Any]] = {}

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""
        first, *rest = frame_list
        return _save_image(
            first,
            format=self.pillow_format,
            save_all=True,
            append_images=rest,
            duration=frame_duration,
            loop=0,
            **self.options,
        )


class GifOutputProvider(AnimatedPillowOutputProvider):
    pillow_format = "gif"
    options = {"optimize": False}


class WebPOutputProvider(AnimatedPillowOutputProvider):
    """Lossless animated WebP."""

    pillow_format = "webp"
    options = {"lossless": True, "quality": 100, "method": 4}


class PngOutputProvider(OutputProvider[Image.Image]):
    """Still PNG of the last frame, the trace as it stands when the run ends."""

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        last_frame: Image.Image | None = None
        for last_frame in frames:
            pass
        if last_frame is None:
            return b""
        return _save_image(last_frame, format="png")
