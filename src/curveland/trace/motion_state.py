"""Immutable motion state of the traced square and its pure transitions."""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Sequence, overload

from ..constants import AMBIENT_STEP, DEFAULT_SPEED


class MotionMode(str, Enum):
    """How the square moves between user commands."""

    DRIFT = "drift"  # Ambient forward(1) every frame
    FORCE = "force"  # Ambient velocity integration every frame
    MANUAL = "manual"  # Only commands move the square


@dataclass(frozen=True, slots=True)
class Point:
    """A position on the plane, in screen orientation (y grows downwards)."""
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Running extent of every point visited so far."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def around(cls, point: Point) -> "BoundingBox":
        """Create the zero-sized box holding a single point."""
        return cls(point.x, point.x, point.y, point.y)

    @classmethod
    def of(cls, points: Iterable[Point]) -> "BoundingBox":
        """Compute the box of a non-empty collection of points."""
        iterator = iter(points)
        try:
            box = cls.around(next(iterator))
        except StopIteration:
            raise ValueError("Cannot compute the bounding box of no points")
        for point in iterator:
            box = box.include(point)
        return box

    def include(self, point: Point) -> "BoundingBox":
        """Widen the box so it contains ``point``. Never shrinks."""
        return BoundingBox(
            min_x=min(self.min_x, point.x),
            max_x=max(self.max_x, point.x),
            min_y=min(self.min_y, point.y),
            max_y=max(self.max_y, point.y),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class PathTrace(Sequence[Point]):
    """
    Append-only, immutable view over the points the square visited.

    Views share one backing list. Appending to the newest view extends that
    list in place; appending to an older view copies its prefix first, so a
    published view never changes.
    """

    __slots__ = ("_points", "_length")

    def __init__(self, points: Iterable[Point] = ()):
        self._points: list[Point] = list(points)
        self._length = len(self._points)

    @classmethod
    def _view(cls, points: list[Point], length: int) -> "PathTrace":
        trace = cls.__new__(cls)
        trace._points = points
        trace._length = length
        return trace

    def append(self, point: Point) -> "PathTrace":
        if self._length == len(self._points):
            self._points.append(point)
            return PathTrace._view(self._points, self._length + 1)
        points = self._points[: self._length]
        points.append(point)
        return PathTrace._view(points, self._length + 1)

    @property
    def last(self) -> Point:
        return self[-1]

    def __len__(self) -> int:
        return self._length

    @overload
    def __getitem__(self, index: int) -> Point: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Point, ...]: ...

    def __getitem__(self, index: int | slice) -> Point | tuple[Point, ...]:
        if isinstance(index, slice):
            return tuple(self._points[: self._length][index])
        return self._points[range(self._length)[index]]

    def __iter__(self) -> Iterator[Point]:
        for index in range(self._length):
            yield self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathTrace):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"PathTrace({list(self)!r})"


@dataclass(frozen=True)
class MotionState:
    """
    Snapshot of the square at one instant.

    Every transition returns a new snapshot; earlier snapshots stay valid, so
    callers can keep them around for debugging or tests.
    """

    position: Point
    velocity: Point
    path: PathTrace
    bounds: BoundingBox
    frame_count: int = 0
    speed: float = DEFAULT_SPEED
    started: bool = False

    @classmethod
    def initial(cls, origin: Point = Point(0, 0), speed: float = DEFAULT_SPEED) -> "MotionState":
        """Create the seed state: path and box hold only ``origin``."""
        _check_speed(speed)
        return cls(
            position=origin,
            velocity=Point(0, 0),
            path=PathTrace([origin]),
            bounds=BoundingBox.around(origin),
            speed=speed,
        )

    @property
    def horizontal_position(self) -> float:
        return self.position.x

    @property
    def vertical_offset(self) -> float:
        return self.position.y


def _check_speed(speed: float) -> None:
    if not speed > 0:
        raise ValueError(f"Speed must be positive (got {speed})")


def _advance_to(state: MotionState, position: Point) -> MotionState:
    return replace(
        state,
        position=position,
        path=state.path.append(position),
        bounds=state.bounds.include(position),
    )


def move(state: MotionState, dx: float, dy: float) -> MotionState:
    """Displace the square by ``(dx, dy)`` scaled by the current speed."""
    return _advance_to(state, state.position.translated(dx * state.speed, dy * state.speed))


def apply_force(state: MotionState, magnitude: float, angle: float) -> MotionState:
    """
    Add an impulse to the velocity.

    Args:
        state: Current state
        magnitude: Length of the impulse
        angle: Direction in degrees, counter-clockwise from the forward axis

    Returns:
        New state with the updated velocity. The path is untouched.
    """
    radians = math.radians(angle)
    velocity = Point(
        state.velocity.x + magnitude * math.cos(radians),
        # Positive angles point up on a screen whose y axis grows downwards
        state.velocity.y - magnitude * math.sin(radians),
    )
    return replace(state, velocity=velocity)


def integrate_velocity(state: MotionState) -> MotionState:
    """Advance the position by one frame of velocity scaled by speed."""
    return move(state, state.velocity.x, state.velocity.y)


def drift(state: MotionState, step: float = AMBIENT_STEP) -> MotionState:
    """Ambient forward advance, identical to a ``forward(step)`` move."""
    return move(state, step, 0)


def with_speed(state: MotionState, speed: float) -> MotionState:
    _check_speed(speed)
    return replace(state, speed=speed)


def start(state: MotionState) -> MotionState:
    if state.started:
        return state
    return replace(state, started=True)


def tick_frame(state: MotionState) -> MotionState:
    return replace(state, frame_count=state.frame_count + 1)


def ambient_transition(state: MotionState, mode: MotionMode) -> MotionState:
    """Apply the per-frame motion of ``mode``, without counting the frame."""
    if mode is MotionMode.DRIFT:
        return drift(state)
    if mode is MotionMode.FORCE:
        return integrate_velocity(state)
    return state
