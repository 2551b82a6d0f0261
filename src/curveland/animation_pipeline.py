"""Shared trace orchestration used by CLI and web app entry points."""

from pathlib import Path
from typing import Any, Iterable, Iterator

from .output import resolve_output_provider
from .output.base import OutputProvider
from .trace.driver import FrameDriver
from .trace.raster_animation import generate_raster_frames
from .trace.render_context import RenderContext
from .trace.session import Session, Submission
from .trace.svg_animation import generate_svg_timeline_frames


def read_script(text: str) -> list[str]:
    """Split a script into command lines, skipping blanks and ``#`` comments."""
    lines = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


def submit_lines(session: Session, lines: Iterable[str]) -> list[Submission]:
    """Submit every line in order, as if typed before the first frame."""
    return [session.submit(line) for line in lines]


def build_frame_stream(
    driver: FrameDriver,
    file_extension: str,
    frames: int,
    render_context: RenderContext,
) -> Iterator[Any]:
    """Build the frame stream matching the target output extension."""
    if file_extension == ".svg":
        return generate_svg_timeline_frames(driver, frames, render_context)
    return generate_raster_frames(driver, frames, render_context)


def encode_animation(
    session: Session,
    output_path: str,
    *,
    fps: int,
    frames: int,
    render_context: RenderContext | None = None,
    provider: OutputProvider[Any] | None = None,
) -> bytes:
    """Run ``frames`` ticks of ``session`` and encode them for the given output path."""
    file_extension = Path(output_path).suffix.lower()
    target_provider = provider or resolve_output_provider(output_path)
    driver = FrameDriver(session, fps=fps)
    frame_stream = build_frame_stream(
        driver, file_extension, frames, render_context or RenderContext.default()
    )
    return target_provider.encode(frame_stream, frame_duration=driver.frame_duration)
