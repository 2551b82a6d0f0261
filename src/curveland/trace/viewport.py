"""Fit a traced path into a canvas viewport."""

from dataclasses import dataclass

from ..constants import FIT_MARGIN
from .motion_state import BoundingBox, Point


@dataclass(frozen=True, slots=True)
class Viewport:
    """Uniform scale plus offset mapping path coordinates to canvas pixels."""
    scale: float
    offset_x: float
    offset_y: float

    def project(self, point: Point) -> tuple[float, float]:
        return point.x * self.scale + self.offset_x, point.y * self.scale + self.offset_y


def fit_to_viewport(
    bounds: BoundingBox,
    width: int,
    height: int,
    margin: float = FIT_MARGIN,
) -> Viewport:
    """
    Scale and center ``bounds`` inside a ``width`` x ``height`` canvas.

    The scale is ``min(width / box_width, height / box_height) * margin``.
    A zero-sized extent does not constrain the scale; a single point keeps
    a scale of 1 and is centered.
    """
    limits = []
    if bounds.width > 0:
        limits.append(width / bounds.width)
    if bounds.height > 0:
        limits.append(height / bounds.height)
    scale = min(limits) * margin if limits else 1.0

    offset_x = (width - bounds.width * scale) / 2 - bounds.min_x * scale
    offset_y = (height - bounds.height * scale) / 2 - bounds.min_y * scale
    return Viewport(scale, offset_x, offset_y)
