"""Timeline frame payloads for SVG trace encoding."""

from dataclasses import dataclass

from .motion_state import MotionState
from .render_context import RenderContext


@dataclass(frozen=True)
class TraceFrame:
    """A motion-state snapshot at a specific animation time."""

    time_ms: int
    state: MotionState
    context: RenderContext

    @property
    def width(self) -> int:
        return self.context.width

    @property
    def height(self) -> int:
        return self.context.height
