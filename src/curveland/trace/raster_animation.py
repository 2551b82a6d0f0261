"""Raster (Pillow) animation frame generators built on top of driver timelines."""

from typing import Iterator

from PIL import Image

from .driver import FrameDriver
from .render_context import RenderContext
from .renderer import Renderer


def generate_raster_frames(
    driver: FrameDriver,
    frames: int,
    render_context: RenderContext | None = None,
) -> Iterator[Image.Image]:
    """Render one image per state of the driver timeline."""
    renderer = Renderer(render_context or RenderContext.default())
    for state, _elapsed_ms in driver.iter_state_timeline(frames):
        yield renderer.render_frame(state)
