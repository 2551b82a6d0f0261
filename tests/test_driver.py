"""Tests for the frame driver."""

import asyncio

import pytest

from curveland.trace import FrameDriver, MotionMode, Point, Session


def test_driver_rejects_non_positive_fps():
    with pytest.raises(ValueError, match="fps"):
        FrameDriver(Session(), fps=0)


def test_frame_duration_follows_fps():
    driver = FrameDriver(Session(), fps=50)

    assert driver.frame_duration == 20
    assert driver.delta_time == pytest.approx(0.02)


def test_idle_session_does_not_count_frames():
    session = Session(mode=MotionMode.DRIFT)
    driver = FrameDriver(session)

    driver.run(10)

    assert session.state.frame_count == 0
    assert session.state.position == Point(0, 0)


def test_drift_advances_forward_each_frame():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("speed2")
    driver = FrameDriver(session)

    driver.tick()
    assert session.state.position == Point(2, 0)
    driver.run(3)
    assert session.state.position == Point(8, 0)
    assert session.state.frame_count == 4


def test_force_mode_integrates_velocity():
    session = Session(mode=MotionMode.FORCE)
    session.submit("f10,90")
    driver = FrameDriver(session)

    driver.tick()

    assert session.state.position.x == pytest.approx(0, abs=1e-9)
    assert session.state.position.y == pytest.approx(-10)


def test_manual_mode_counts_frames_without_moving():
    session = Session(mode=MotionMode.MANUAL)
    session.submit("f10,0")
    driver = FrameDriver(session)

    driver.run(5)

    assert session.state.frame_count == 5
    assert session.state.position == Point(0, 0)


def test_drift_and_loop_combine_in_one_frame():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("u1 w1")
    driver = FrameDriver(session)

    driver.tick()

    assert session.state.position == Point(1, -1)


def test_iter_state_timeline_yields_initial_state_first():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("f0")
    driver = FrameDriver(session, fps=50)

    timeline = list(driver.iter_state_timeline(3))

    assert [elapsed for _, elapsed in timeline] == [0, 20, 40, 60]
    assert [state.frame_count for state, _ in timeline] == [0, 1, 2, 3]
    assert timeline[-1][0].position == Point(3, 0)


def test_run_paced_stops_when_event_is_set():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("f0")
    driver = FrameDriver(session, fps=200)

    async def run_briefly() -> None:
        stop_event = asyncio.Event()
        runner = asyncio.create_task(driver.run_paced(stop_event))
        await asyncio.sleep(0.05)
        stop_event.set()
        await runner

    asyncio.run(run_briefly())

    assert session.state.frame_count > 0
    assert session.state.position.x == session.state.frame_count
