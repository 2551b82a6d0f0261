"""Tests for the command line interface."""

from typer.testing import CliRunner

from curveland.cli import app

runner = CliRunner()


def _output(result) -> str:
    return result.stdout + result.stderr


def test_mutual_exclusivity_error(tmp_path):
    """Should error when both --output and --write-dataurl-to are provided."""
    result = runner.invoke(
        app,
        ["u10", "--output", str(tmp_path / "t.gif"), "--write-dataurl-to", str(tmp_path / "t.txt")],
    )
    assert result.exit_code == 1
    assert "Cannot specify both --output and --write-dataurl-to" in _output(result)


def test_requires_some_command_lines():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "No command lines given" in _output(result)


def test_unknown_mode_is_rejected():
    result = runner.invoke(app, ["u10", "--mode", "orbit"])

    assert result.exit_code == 1
    assert "Unknown mode 'orbit'" in _output(result)


def test_parse_errors_are_logged_not_fatal():
    result = runner.invoke(app, ["x5", "--frames", "1"])

    assert result.exit_code == 0
    assert "Unrecognized command" in _output(result)


def test_gif_output(tmp_path):
    output_path = tmp_path / "zigzag.gif"

    result = runner.invoke(app, ["u10 w5 d10", "--frames", "6", "--output", str(output_path)])

    assert result.exit_code == 0, _output(result)
    assert output_path.read_bytes().startswith(b"GIF89")
    assert "Loop 0" in result.stdout


def test_svg_output(tmp_path):
    output_path = tmp_path / "trace.svg"

    result = runner.invoke(
        app, ["r f1", "--mode", "manual", "--frames", "3", "-o", str(output_path)]
    )

    assert result.exit_code == 0, _output(result)
    assert output_path.read_bytes().startswith(b"<?xml")


def test_unsupported_output_extension(tmp_path):
    result = runner.invoke(app, ["u10", "--frames", "1", "-o", str(tmp_path / "trace.mp4")])

    assert result.exit_code == 1
    assert "Unsupported output format" in _output(result)


def test_write_dataurl(tmp_path):
    output_path = tmp_path / "README.md"
    output_path.write_text("# Trace\n<!-- curveland -->\n")

    result = runner.invoke(
        app, ["u10 w5 d10", "--frames", "3", "--write-dataurl-to", str(output_path)]
    )

    assert result.exit_code == 0, _output(result)
    lines = output_path.read_text().splitlines()
    assert lines[0] == "# Trace"
    assert lines[1].startswith('<img src="data:image/png;base64,')


def test_script_file(tmp_path):
    script = tmp_path / "orbit.txt"
    script.write_text("# warm up\n\nspeed2\nf5 w1\n")

    result = runner.invoke(app, ["--script", str(script), "--mode", "manual", "--frames", "3"])

    assert result.exit_code == 0, _output(result)
    assert "Loop 0: f5 w1" in result.stdout


def test_missing_script_file(tmp_path):
    result = runner.invoke(app, ["--script", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "not found" in _output(result)


def test_export_commands_write_into_export_dir(tmp_path):
    result = runner.invoke(
        app, ["u10", "dlImg", "dlSvg", "--frames", "0", "--export-dir", str(tmp_path)]
    )

    assert result.exit_code == 0, _output(result)
    assert (tmp_path / "curveland-001.png").exists()
    assert (tmp_path / "curveland-002.svg").exists()


def test_interactive_session():
    result = runner.invoke(
        app,
        ["--interactive", "--mode", "manual", "--step-frames", "1"],
        input="u10\nquit\n",
    )

    assert result.exit_code == 0, _output(result)
    assert "frame 1  position (0, -10)" in result.stdout


def test_interactive_stops_at_end_of_input():
    result = runner.invoke(app, ["-i", "--mode", "manual", "--step-frames", "2"], input="r f1\n")

    assert result.exit_code == 0, _output(result)
    assert "position (2, 0)" in result.stdout


def test_interactive_saves_still(tmp_path):
    output_path = tmp_path / "trace.png"

    result = runner.invoke(
        app, ["-i", "--mode", "manual", "-o", str(output_path)], input="u10\n"
    )

    assert result.exit_code == 0, _output(result)
    assert output_path.read_bytes().startswith(b"\x89PNG")
