"""CLI interface for curveland."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .animation_pipeline import encode_animation, read_script, submit_lines
from .config import AppConfig, load_config
from .constants import DEFAULT_FRAMES, DEFAULT_STEP_FRAMES
from .errors import ConfigError
from .output import (
    FileExporter,
    PngDataUrlOutputProvider,
    export_still,
    supported_output_formats,
)
from .trace import FrameDriver, MotionMode, RenderContext, Session, Submission

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()
MODE_NAMES = ", ".join(mode.value for mode in MotionMode)
EXIT_WORDS = {"quit", "exit"}


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    lines: list[str] | None = typer.Argument(
        None, help="Command lines to submit, e.g. 'u10 w5 d10' (quote each line)"
    ),
    script: str = typer.Option(
        None,
        "--script",
        "-s",
        help="Read command lines from a file (one per line, '#' starts a comment)",
    ),
    mode: str = typer.Option(
        None,
        "--mode",
        "-m",
        help=f"Ambient motion between commands ({MODE_NAMES})",
    ),
    frames: int = typer.Option(
        DEFAULT_FRAMES,
        "--frames",
        "-n",
        help="Number of frames to simulate after submitting the lines",
    ),
    fps: int | None = typer.Option(
        None,
        "--fps",
        help="Frames per second for the animation",
    ),
    out: str = typer.Option(
        None,
        "--output",
        "-out",
        "-o",
        help=f"Write the trace ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    write_dataurl_to: str = typer.Option(
        None,
        "--write-dataurl-to",
        help="Write the final trace as a PNG data URL img tag into a text file",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Read command lines from a prompt",
    ),
    step_frames: int = typer.Option(
        DEFAULT_STEP_FRAMES,
        "--step-frames",
        help="Frames to advance after each interactive line",
    ),
    export_dir: str = typer.Option(
        None,
        "--export-dir",
        help="Directory for dlImg/dlSvg exports",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log scheduler activity",
    ),
) -> None:
    """
    Drive the traced square with command lines and render its path.

    Examples:
      # Zig-zag for four seconds and save a GIF
      curveland "u10 w5 d10 w5" --frames 240 --output zigzag.gif

      # Force mode, replay a script and save the final path
      curveland --mode force --script orbit.txt --output orbit.svg

      # Type commands at a prompt
      curveland --interactive
    """
    _configure_logging(verbose)
    try:
        config = _load_config()
        motion_mode = _resolve_mode(mode, config.mode)
        fps = fps or config.fps
        if fps <= 0:
            raise CLIError("--fps must be positive")
        if frames < 0:
            raise CLIError("--frames must not be negative")

        if out and write_dataurl_to:
            raise CLIError(
                "Cannot specify both --output and --write-dataurl-to. Choose one."
            )

        command_lines = list(lines or [])
        if script:
            command_lines.extend(_load_script(script))
        if not command_lines and not interactive:
            raise CLIError("No command lines given. Pass lines, --script or --interactive")

        context = RenderContext.default().with_canvas(config.canvas_width, config.canvas_height)
        exporter = FileExporter(export_dir or config.export_dir, context)

        with Session(mode=motion_mode, exporter=exporter) as session:
            for submission in submit_lines(session, command_lines):
                _print_submission(submission)

            if interactive:
                driver = FrameDriver(session, fps=fps)
                _run_repl(session, driver, step_frames)
                if out:
                    _save_still(session, out, context)
            elif write_dataurl_to or out:
                _generate_output(session, out, write_dataurl_to, fps, frames, context)
            else:
                FrameDriver(session, fps=fps).run(frames)

            _print_summary(session)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _load_config() -> AppConfig:
    try:
        return load_config()
    except ConfigError as e:
        raise CLIError(str(e))


def _resolve_mode(name: str | None, default: MotionMode) -> MotionMode:
    if not name:
        return default
    try:
        return MotionMode(name.lower())
    except ValueError:
        raise CLIError(f"Unknown mode '{name}'. Available: {MODE_NAMES}")


def _load_script(file_path: str) -> list[str]:
    """Load command lines from a script file."""
    console.print(f"[bold blue]Loading script from {file_path}...[/bold blue]")
    try:
        with open(file_path, "r") as f:
            return read_script(f.read())
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")


def _print_submission(submission: Submission) -> None:
    line = escape(submission.line)
    if submission.error is not None:
        # The interpreter already logged the failure
        return
    if submission.loop_id is not None:
        console.print(f"[green]✓[/green] Loop {submission.loop_id}: {line}")
    elif submission.line:
        console.print(f"[green]✓[/green] {line}")


def _run_repl(session: Session, driver: FrameDriver, step_frames: int) -> None:
    """Prompt for lines until EOF or an exit word, advancing frames after each one."""
    console.print("[bold blue]Type commands (u10, w30, f5,20, speed2, stop, dlImg). 'quit' exits.[/bold blue]")
    while True:
        try:
            line = console.input("[bold]curveland>[/bold] ")
        except EOFError:
            break
        if line.strip().lower() in EXIT_WORDS:
            break
        _print_submission(session.submit(line))
        driver.run(step_frames)
        state = session.state
        console.print(
            f"frame {state.frame_count}  position ({state.position.x:g}, {state.position.y:g})  "
            f"speed {state.speed:g}  loops {len(session.loops)}"
        )


def _save_still(session: Session, output_path: str, context: RenderContext) -> None:
    ext = Path(output_path).suffix.lower().removeprefix(".")
    if ext not in ("png", "svg"):
        raise CLIError("Interactive sessions can only be saved as PNG or SVG")
    with open(output_path, "wb") as f:
        f.write(export_still(session.state, ext, context))
    console.print(f"[green]✓[/green] {ext.upper()} saved to {output_path}")


def _generate_output(
    session: Session,
    out: str | None,
    write_dataurl_to: str | None,
    fps: int,
    frames: int,
    context: RenderContext,
) -> None:
    """Simulate the session and write it in the format chosen by the output path."""
    provider = None
    if write_dataurl_to:
        provider = PngDataUrlOutputProvider(write_dataurl_to)
        output_path = write_dataurl_to
        console.print("\n[bold blue]Generating PNG data URL...[/bold blue]")
    else:
        output_path = out
        ext = Path(output_path).suffix[1:].upper()
        console.print(f"\n[bold blue]Generating {ext} from {frames} frames...[/bold blue]")

    try:
        encoded = encode_animation(
            session,
            output_path,
            fps=fps,
            frames=frames,
            render_context=context,
            provider=provider,
        )
    except ValueError as e:
        raise CLIError(str(e))

    try:
        if provider is not None:
            provider.write(encoded)
            console.print(f"[green]✓[/green] Data URL written to {output_path}")
        else:
            with open(output_path, "wb") as f:
                f.write(encoded)
            ext = Path(output_path).suffix[1:].upper()
            console.print(f"[green]✓[/green] {ext} saved to {output_path}")
    except OSError as e:
        raise CLIError(f"Failed to write '{output_path}': {e}")


def _print_summary(session: Session) -> None:
    state = session.state
    table = Table(title="Trace", show_header=False)
    table.add_row("Frames", str(state.frame_count))
    table.add_row("Position", f"({state.position.x:g}, {state.position.y:g})")
    table.add_row(
        "Bounds",
        f"x {state.bounds.min_x:g}..{state.bounds.max_x:g}, "
        f"y {state.bounds.min_y:g}..{state.bounds.max_y:g}",
    )
    table.add_row("Path points", str(len(state.path)))
    table.add_row("Speed", f"{state.speed:g}")
    for loop in session.loops:
        table.add_row("Loop", escape(loop.describe()))
    console.print(table)


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
