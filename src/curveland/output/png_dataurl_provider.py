"""PNG data URL output, for embedding the final trace in Markdown or HTML."""

import base64
from pathlib import Path
from typing import Iterator

from PIL import Image

from .base import OutputProvider
from .pillow_providers import PngOutputProvider

# Line to replace when the target file already holds one
MARKER = "<!-- curveland -->"


def png_data_url(png_bytes: bytes) -> str:
    """Wrap encoded PNG bytes in a ``data:`` URL; empty input gives an empty URL."""
    if not png_bytes:
        return ""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


def inject_img_tag(content: str, img_tag: str) -> str:
    """Replace the first marker line of ``content`` with ``img_tag``, or append the tag."""
    lines = content.splitlines(keepends=True)
    for index, line in enumerate(lines):
        if MARKER in line:
            lines[index] = img_tag + "\n"
            return "".join(lines)
    if content and not content.endswith("\n"):
        content += "\n"
    return content + img_tag + "\n"


class PngDataUrlOutputProvider(OutputProvider[Image.Image]):
    """Writes the last frame as an ``<img>`` tag holding a PNG data URL."""

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        png_bytes = PngOutputProvider().encode(frames, frame_duration)
        return png_data_url(png_bytes).encode("ascii")

    def write(self, data: bytes) -> None:
        img_tag = f'<img src="{data.decode("ascii")}" />'
        target = Path(self.path)
        # Create exclusively; an existing file gets the tag injected instead
        try:
            with target.open("x") as f:
                f.write(img_tag + "\n")
            return
        except FileExistsError:
            content = target.read_text()
        target.write_text(inject_img_tag(content, img_tag))
