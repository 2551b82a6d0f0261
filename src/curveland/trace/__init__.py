"""Command interpreter, scheduler and frame driver for the traced square."""

from .commands import (
    Command,
    Export,
    Force,
    Move,
    ParsedLine,
    SetSpeed,
    Stop,
    Wait,
    parse_line,
    parse_token,
    tokenize,
)
from .driver import FrameDriver
from .loops import CommandLoop, LoopRegistry
from .motion_state import BoundingBox, MotionMode, MotionState, PathTrace, Point
from .raster_animation import generate_raster_frames
from .render_context import RenderContext
from .renderer import Renderer
from .session import Session, Submission
from .svg_animation import generate_svg_timeline_frames
from .svg_timeline import TraceFrame
from .tasks import Scheduler, Task
from .viewport import Viewport, fit_to_viewport

__all__ = [
    "BoundingBox",
    "Command",
    "CommandLoop",
    "Export",
    "Force",
    "FrameDriver",
    "LoopRegistry",
    "MotionMode",
    "MotionState",
    "Move",
    "ParsedLine",
    "PathTrace",
    "Point",
    "RenderContext",
    "Renderer",
    "Scheduler",
    "Session",
    "SetSpeed",
    "Stop",
    "Submission",
    "Task",
    "TraceFrame",
    "Viewport",
    "Wait",
    "fit_to_viewport",
    "generate_raster_frames",
    "generate_svg_timeline_frames",
    "parse_line",
    "parse_token",
    "tokenize",
]
