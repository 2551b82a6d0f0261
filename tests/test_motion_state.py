"""Tests for motion state snapshots and transitions."""

import pytest

from curveland.trace.motion_state import (
    BoundingBox,
    MotionMode,
    MotionState,
    PathTrace,
    Point,
    ambient_transition,
    apply_force,
    drift,
    integrate_velocity,
    move,
    start,
    tick_frame,
    with_speed,
)


def test_initial_state_is_seeded_with_origin():
    """The seed point is the only point of the path and the box."""
    state = MotionState.initial(Point(3, 4))

    assert list(state.path) == [Point(3, 4)]
    assert state.bounds == BoundingBox(3, 3, 4, 4)
    assert state.frame_count == 0
    assert state.speed == 1
    assert state.started is False


def test_move_appends_one_point_and_scales_by_speed():
    state = with_speed(MotionState.initial(), 2)

    moved = move(state, 10, -3)

    assert moved.position == Point(20, -6)
    assert len(moved.path) == 2
    assert moved.path.last == Point(20, -6)


def test_transitions_do_not_mutate_previous_snapshot():
    """Each transition returns a new snapshot and leaves the old one intact."""
    first = MotionState.initial()
    second = move(first, 5, 0)
    third = move(second, 0, 5)

    assert len(first.path) == 1
    assert len(second.path) == 2
    assert len(third.path) == 3
    assert first.position == Point(0, 0)
    assert second.position == Point(5, 0)


def test_bounding_box_matches_min_max_over_path():
    state = MotionState.initial()
    for dx, dy in [(10, 0), (0, -7), (-25, 3), (4, 12), (0, -1)]:
        state = move(state, dx, dy)
        assert state.bounds == BoundingBox.of(state.path)

    assert state.bounds == BoundingBox(min_x=-15, max_x=10, min_y=-7, max_y=8)


def test_bounding_box_never_shrinks():
    box = BoundingBox(-5, 5, -5, 5)

    assert box.include(Point(0, 0)) == box
    assert box.include(Point(7, -9)) == BoundingBox(-5, 7, -9, 5)


def test_bounding_box_of_no_points_raises():
    with pytest.raises(ValueError):
        BoundingBox.of([])


@pytest.mark.parametrize("speed", [1, 1.5, 3])
def test_forward_then_back_returns_exactly(speed):
    """Forward then back by the same distance returns to the same x, with no drift."""
    state = with_speed(MotionState.initial(), speed)
    forward = move(state, 7, 0)
    back = move(forward, -7, 0)

    assert back.horizontal_position == state.horizontal_position


def test_apply_force_points_up_for_positive_angles():
    """Positive angles point up, so the vertical velocity component is negated."""
    state = apply_force(MotionState.initial(), 10, 90)

    assert state.velocity.x == pytest.approx(0, abs=1e-9)
    assert state.velocity.y == pytest.approx(-10)
    assert len(state.path) == 1


def test_forces_accumulate():
    state = apply_force(MotionState.initial(), 2, 0)
    state = apply_force(state, 2, 0)

    assert state.velocity.x == pytest.approx(4)


def test_integrate_velocity_scales_by_speed():
    state = with_speed(apply_force(MotionState.initial(), 3, 0), 2)

    moved = integrate_velocity(state)

    assert moved.position.x == pytest.approx(6)


def test_drift_is_forward_one():
    state = with_speed(MotionState.initial(), 3)

    assert drift(state).position == Point(3, 0)


def test_ambient_transition_per_mode():
    state = apply_force(MotionState.initial(), 1, 0)

    assert ambient_transition(state, MotionMode.DRIFT).position == Point(1, 0)
    assert ambient_transition(state, MotionMode.FORCE).position.x == pytest.approx(1)
    assert ambient_transition(state, MotionMode.MANUAL) is state


def test_tick_frame_and_start():
    state = start(MotionState.initial())

    assert state.started is True
    assert start(state) is state
    assert tick_frame(state).frame_count == 1


@pytest.mark.parametrize("speed", [0, -1, float("nan")])
def test_speed_must_be_positive(speed):
    with pytest.raises(ValueError, match="Speed must be positive"):
        with_speed(MotionState.initial(), speed)


class TestPathTrace:
    """Tests for the append-only path view."""

    def test_append_shares_storage_without_changing_views(self):
        base = PathTrace([Point(0, 0)])
        longer = base.append(Point(1, 0))
        longest = longer.append(Point(2, 0))

        assert len(base) == 1
        assert list(longer) == [Point(0, 0), Point(1, 0)]
        assert longest[-1] == Point(2, 0)

    def test_appending_to_older_view_branches(self):
        base = PathTrace([Point(0, 0)])
        left = base.append(Point(-1, 0))
        right = base.append(Point(1, 0))

        assert list(left) == [Point(0, 0), Point(-1, 0)]
        assert list(right) == [Point(0, 0), Point(1, 0)]

    def test_indexing_is_limited_to_the_view(self):
        base = PathTrace([Point(0, 0)])
        base.append(Point(1, 1))

        with pytest.raises(IndexError):
            base[1]
        assert base[0:5] == (Point(0, 0),)

    def test_equality_and_hash_follow_points(self):
        a = PathTrace([Point(0, 0)]).append(Point(1, 2))
        b = PathTrace([Point(0, 0), Point(1, 2)])

        assert a == b
        assert hash(a) == hash(b)
        assert Point(1, 2) in a
