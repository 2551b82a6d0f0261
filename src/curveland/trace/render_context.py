"""Rendering configuration and theming."""

from dataclasses import dataclass, replace

from ..constants import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FIT_MARGIN,
    MARKER_COLOR,
    MARKER_SIZE,
    PATH_COLOR,
    STROKE_WIDTH,
)

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class RenderContext:
    """Canvas size and colors shared by the raster and SVG collaborators."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    background_color: RGB = BACKGROUND_COLOR
    path_color: RGB = PATH_COLOR
    marker_color: RGB = MARKER_COLOR
    marker_size: int = MARKER_SIZE
    stroke_width: int = STROKE_WIDTH
    margin: float = FIT_MARGIN

    @classmethod
    def default(cls) -> "RenderContext":
        return cls()

    @classmethod
    def darkmode(cls) -> "RenderContext":
        return cls(background_color=(13, 17, 23), path_color=(230, 237, 243))

    def with_canvas(self, width: int, height: int) -> "RenderContext":
        return replace(self, width=width, height=height)
