"""Renderer for drawing traced paths using Pillow."""

from PIL import Image, ImageDraw

from .motion_state import MotionState
from .render_context import RenderContext
from .viewport import Viewport, fit_to_viewport


class Renderer:
    """Renders motion states as PIL Images."""

    def __init__(self, render_context: RenderContext):
        self.context = render_context

    def viewport_for(self, state: MotionState) -> Viewport:
        return fit_to_viewport(
            state.bounds, self.context.width, self.context.height, self.context.margin
        )

    def render_frame(self, state: MotionState) -> Image.Image:
        """
        Render the path and the square marker of a state.

        Args:
            state: The state to draw, fitted to the canvas by its bounding box

        Returns:
            RGB PIL Image of the frame
        """
        img = Image.new("RGB", (self.context.width, self.context.height), self.context.background_color)
        draw = ImageDraw.Draw(img)
        viewport = self.viewport_for(state)

        points = [viewport.project(point) for point in state.path]
        if len(points) > 1:
            draw.line(points, fill=self.context.path_color, width=self.context.stroke_width, joint="curve")

        self._draw_marker(draw, viewport.project(state.position))
        return img

    def _draw_marker(self, draw: ImageDraw.ImageDraw, center: tuple[float, float]) -> None:
        half = self.context.marker_size / 2
        x, y = center
        draw.rectangle([x - half, y - half, x + half, y + half], fill=self.context.marker_color)
