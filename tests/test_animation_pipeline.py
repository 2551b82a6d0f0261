"""Tests for script loading and animation encoding."""

from curveland.animation_pipeline import encode_animation, read_script, submit_lines
from curveland.trace import MotionMode, RenderContext, Session


def test_read_script_skips_blanks_and_comments():
    text = "# zig-zag\n\n  u10 w5 d10  \n# done\nspeed2\n"

    assert read_script(text) == ["u10 w5 d10", "speed2"]


def test_submit_lines_in_order():
    session = Session(mode=MotionMode.MANUAL)

    submissions = submit_lines(session, ["u10", "zz", "f1 w1"])

    assert [submission.ok for submission in submissions] == [True, False, True]
    assert submissions[2].loop_id == 0
    assert session.history == ["u10", "zz", "f1 w1"]


def test_encode_animation_runs_requested_frames():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("f0")

    data = encode_animation(
        session,
        "trace.gif",
        fps=50,
        frames=4,
        render_context=RenderContext.default().with_canvas(40, 30),
    )

    assert data.startswith(b"GIF89")
    assert session.state.frame_count == 4


def test_encode_animation_svg_timeline():
    session = Session(mode=MotionMode.DRIFT)
    session.submit("u3")

    data = encode_animation(session, "trace.svg", fps=50, frames=2)

    # Three snapshots (initial plus two ticks) at 20ms each
    assert b'dur="60ms"' in data
