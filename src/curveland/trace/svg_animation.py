"""SVG-specific animation frame generators built on top of driver timelines."""

from typing import Iterator

from .driver import FrameDriver
from .render_context import RenderContext
from .svg_timeline import TraceFrame


def generate_svg_timeline_frames(
    driver: FrameDriver,
    frames: int,
    render_context: RenderContext | None = None,
) -> Iterator[TraceFrame]:
    """Build trace snapshots from a driver timeline."""
    context = render_context or RenderContext.default()
    for state, elapsed_ms in driver.iter_state_timeline(frames):
        yield TraceFrame(time_ms=elapsed_ms, state=state, context=context)
