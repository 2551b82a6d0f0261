"""Encode trace frames as an SVG path with an animated marker."""

import math
from itertools import accumulate
from typing import Sequence

from ..trace.render_context import RenderContext
from ..trace.svg_timeline import TraceFrame
from ..trace.viewport import Viewport, fit_to_viewport
from ._svg_shared import _svg_hex, _svg_num

_SVG_NS = "http://www.w3.org/2000/svg"


def encode_svg_trace_sequence(frames: Sequence[TraceFrame], frame_duration: int) -> bytes:
    """
    Encode trace frames as an SVG document.

    The last frame decides the viewport and the full path. With more than
    one frame the marker steps through every frame position and the path is
    revealed with a dash offset that tracks the trace length at each frame.
    """
    if not frames:
        return b""
    _validate_dimensions(frames)

    final = frames[-1]
    context = final.context
    viewport = fit_to_viewport(final.state.bounds, context.width, context.height, context.margin)
    points = [viewport.project(point) for point in final.state.path]
    animated = len(frames) > 1
    duration = f"{len(frames) * frame_duration}ms"

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{_SVG_NS}" width="{context.width}" height="{context.height}" '
        f'viewBox="0 0 {context.width} {context.height}">',
        f'<rect width="100%" height="100%" fill="{_svg_hex(context.background_color)}"/>',
    ]
    if len(points) > 1:
        parts.append(_path_element(frames, points, context, animated, duration))
    parts.append(_marker_element(frames, viewport, context, animated, duration))
    parts.append("</svg>")
    return "".join(parts).encode("utf-8")


def path_data(points: Sequence[tuple[float, float]]) -> str:
    """Render points as a move-to followed by line-to commands."""
    commands = []
    for index, (x, y) in enumerate(points):
        op = "M" if index == 0 else "L"
        commands.append(f"{op}{_svg_num(x)} {_svg_num(y)}")
    return " ".join(commands)


def _validate_dimensions(frames: Sequence[TraceFrame]) -> None:
    width, height = frames[0].width, frames[0].height
    for frame in frames[1:]:
        if frame.width != width or frame.height != height:
            raise ValueError("All SVG trace frames must have the same dimensions")


def _path_element(
    frames: Sequence[TraceFrame],
    points: list[tuple[float, float]],
    context: RenderContext,
    animated: bool,
    duration: str,
) -> str:
    stroke = (
        f'fill="none" stroke="{_svg_hex(context.path_color)}" '
        f'stroke-width="{context.stroke_width}" stroke-linejoin="round" stroke-linecap="round"'
    )
    cumulative = list(accumulate(
        (math.dist(a, b) for a, b in zip(points, points[1:])), initial=0.0
    ))
    total = cumulative[-1]
    if not animated or total == 0:
        return f'<path d="{path_data(points)}" {stroke}/>'

    offsets = []
    for frame in frames:
        reached = min(len(frame.state.path), len(points)) - 1
        offsets.append(_svg_num(1 - cumulative[reached] / total))
    return (
        f'<path d="{path_data(points)}" {stroke} pathLength="1" stroke-dasharray="1">'
        f'<animate attributeName="stroke-dashoffset" values="{";".join(offsets)}" '
        f'dur="{duration}" calcMode="discrete" repeatCount="indefinite"/>'
        "</path>"
    )


def _marker_element(
    frames: Sequence[TraceFrame],
    viewport: Viewport,
    context: RenderContext,
    animated: bool,
    duration: str,
) -> str:
    half = context.marker_size / 2
    corners = [viewport.project(frame.state.position) for frame in frames]
    final_x, final_y = corners[-1]
    attributes = (
        f'x="{_svg_num(final_x - half)}" y="{_svg_num(final_y - half)}" '
        f'width="{context.marker_size}" height="{context.marker_size}" '
        f'fill="{_svg_hex(context.marker_color)}"'
    )
    if not animated:
        return f"<rect {attributes}/>"

    xs = ";".join(_svg_num(x - half) for x, _ in corners)
    ys = ";".join(_svg_num(y - half) for _, y in corners)
    return (
        f"<rect {attributes}>"
        f'<animate attributeName="x" values="{xs}" dur="{duration}" '
        'calcMode="discrete" repeatCount="indefinite"/>'
        f'<animate attributeName="y" values="{ys}" dur="{duration}" '
        'calcMode="discrete" repeatCount="indefinite"/>'
        "</rect>"
    )
