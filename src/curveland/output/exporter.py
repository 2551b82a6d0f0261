"""Still exports of a single motion state."""

from pathlib import Path

from ..errors import ExportError
from ..trace.commands import ExportFormat
from ..trace.motion_state import MotionState
from ..trace.render_context import RenderContext
from ..trace.renderer import Renderer
from ..trace.svg_timeline import TraceFrame
from .pillow_providers import PngOutputProvider
from .svg_provider import SvgOutputProvider


def export_still(
    state: MotionState,
    fmt: ExportFormat,
    render_context: RenderContext | None = None,
) -> bytes:
    """
    Encode the current trace and marker as a single image.

    Args:
        state: The state to export (read only)
        fmt: ``png`` for a raster image, ``svg`` for a vector path
        render_context: Canvas size and colors

    Raises:
        ValueError: If the format is not supported
    """
    context = render_context or RenderContext.default()
    if fmt == "png":
        frame = Renderer(context).render_frame(state)
        return PngOutputProvider().encode(iter([frame]), frame_duration=0)
    if fmt == "svg":
        trace_frame = TraceFrame(time_ms=0, state=state, context=context)
        return SvgOutputProvider().encode(iter([trace_frame]), frame_duration=1)
    raise ValueError(f"Unsupported export format: {fmt}")


class FileExporter:
    """Writes ``dlImg``/``dlSvg`` exports as numbered files in a directory."""

    def __init__(
        self,
        directory: str | Path,
        render_context: RenderContext | None = None,
        prefix: str = "curveland",
    ):
        self.directory = Path(directory)
        self.render_context = render_context or RenderContext.default()
        self.prefix = prefix
        self._count = 0

    def __call__(self, fmt: ExportFormat, state: MotionState) -> Path:
        self._count += 1
        path = self.directory / f"{self.prefix}-{self._count:03d}.{fmt}"
        try:
            data = export_still(state, fmt, self.render_context)
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, ValueError, ArithmeticError) as exc:
            raise ExportError(f"Failed to export {fmt} to {path}: {exc}") from exc
        return path
