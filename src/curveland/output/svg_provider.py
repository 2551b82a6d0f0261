"""SVG output provider."""

from typing import Iterator

from ..trace.svg_timeline import TraceFrame
from ._svg_trace_encoder import encode_svg_trace_sequence
from .base import OutputProvider


class SvgOutputProvider(OutputProvider[TraceFrame]):
    """Encodes trace snapshots as one SVG with an animated reveal of the path."""

    def encode(self, frames: Iterator[TraceFrame], frame_duration: int) -> bytes:
        snapshots = list(frames)
        stray = next(
            ((index, frame) for index, frame in enumerate(snapshots) if not isinstance(frame, TraceFrame)),
            None,
        )
        if stray is not None:
            index, frame = stray
            raise TypeError(
                f"SVG output only supports trace frames (got {type(frame).__name__} at index {index})"
            )
        # SMIL durations must be positive
        return encode_svg_trace_sequence(snapshots, max(1, frame_duration))
