"""Command interpreter owning the motion state, loops and REPL history."""

import logging
from dataclasses import dataclass
from typing import Callable, List

from ..constants import DEFAULT_SPEED
from ..errors import CommandParseError, CurvelandError, ExportError, InvalidIndexError
from .commands import (
    Command,
    Export,
    ExportFormat,
    Force,
    Move,
    SetSpeed,
    Stop,
    Wait,
    parse_line,
)
from .loops import CommandLoop, LoopRegistry
from .motion_state import (
    MotionMode,
    MotionState,
    Point,
    apply_force,
    move,
    start,
    with_speed,
)
from .tasks import Scheduler, Task, TaskBody

logger = logging.getLogger(__name__)

Exporter = Callable[[ExportFormat, MotionState], object]
"""Collaborator called with the export format and the state to export."""


@dataclass(frozen=True)
class Submission:
    """Outcome of submitting one input line."""

    line: str
    commands: tuple[Command, ...] = ()
    loop_id: int | None = None
    error: CurvelandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Session:
    """
    Application context for one traced square.

    Owns the current MotionState, the task scheduler, the registered command
    loops and the REPL history. The FrameDriver ticks it; ``close`` tears it
    down.
    """

    def __init__(
        self,
        mode: MotionMode = MotionMode.DRIFT,
        origin: Point = Point(0, 0),
        speed: float = DEFAULT_SPEED,
        exporter: Exporter | None = None,
    ):
        """
        Initialize a session.

        Args:
            mode: Ambient motion applied by the frame driver
            origin: Starting position of the square
            speed: Initial speed multiplier
            exporter: Collaborator handling ``dlImg``/``dlSvg``
        """
        self.mode = mode
        self.state = MotionState.initial(origin, speed)
        self.scheduler = Scheduler()
        self.loops = LoopRegistry()
        self.history: List[str] = []
        self.exporter = exporter
        self.closed = False

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Cancel every loop and pending task."""
        if self.closed:
            return
        self.loops.cancel_all()
        self.scheduler.cancel_all()
        self.closed = True

    def submit(self, line: str) -> Submission:
        """
        Interpret one line typed into the input box.

        Single commands run immediately; multi-token lines register a loop
        whose first iteration starts on the next frame. Command errors are
        logged and returned, never raised.
        """
        self._check_open()
        text = line.strip()
        self.history.append(text)
        if not text:
            return Submission(text)

        self.state = start(self.state)
        parsed = parse_line(text)
        if parsed.error is not None:
            logger.error("Command aborted: %s", parsed.error)

        if parsed.loop:
            loop = self._register_loop(parsed.commands, text, parsed.iterations)
            return Submission(text, parsed.commands, loop_id=loop.loop_id)

        errors = self._run_now(parsed.commands, text)
        error = parsed.error or (errors[0] if errors else None)
        return Submission(text, parsed.commands, error=error)

    # Programmatic command API, mirroring the token vocabulary

    def up(self, distance: int) -> None:
        self._run_command(Move("up", distance))

    def down(self, distance: int) -> None:
        self._run_command(Move("down", distance))

    def back(self, distance: int) -> None:
        self._run_command(Move("back", distance))

    def forward(self, distance: int) -> None:
        self._run_command(Move("forward", distance))

    def force(self, magnitude: float, angle: float) -> None:
        self._run_command(Force(magnitude, angle))

    def speed(self, value: float) -> None:
        self._run_command(SetSpeed(value))

    def wait(self, frames: int) -> Task:
        """Schedule a standalone wait and return its task."""
        self._check_open()
        self.state = start(self.state)
        return self.scheduler.spawn(
            Task(self._run_sequence((Wait(frames),), lambda: False, self._log_error), name=f"w{frames}"),
            immediate=True,
        )

    def r(self, line: str) -> CommandLoop:
        """Register ``line`` as a loop that runs until stopped."""
        return self._loop_from_line(line, iterations=None)

    def repeat(self, times: int, line: str) -> CommandLoop:
        """Register ``line`` as a loop that runs ``times`` iterations."""
        if times < 1:
            raise ValueError(f"Repeat count must be at least 1 (got {times})")
        return self._loop_from_line(line, iterations=times)

    def stop(self, loop_id: int | None = None) -> list[CommandLoop]:
        """
        Cancel one loop, or all of them.

        Args:
            loop_id: Id of the loop to cancel; None cancels every loop

        Returns:
            The loops that were cancelled

        Raises:
            InvalidIndexError: If ``loop_id`` names no active loop
        """
        if loop_id is None:
            stopped = self.loops.cancel_all()
            if stopped:
                logger.info("Stopped %d command loop(s)", len(stopped))
            else:
                logger.debug("No command loop running")
            return stopped

        loop = self.loops.cancel(loop_id)
        logger.info("Stopped command loop %s", loop.describe())
        return [loop]

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError("Session is closed")

    def _run_command(self, command: Command) -> None:
        self._check_open()
        self.state = start(self.state)
        self._execute(command)

    def _loop_from_line(self, line: str, iterations: int | None) -> CommandLoop:
        self._check_open()
        parsed = parse_line(line)
        if parsed.error is not None:
            raise parsed.error
        if not parsed.commands:
            raise CommandParseError(line.strip(), "Nothing to loop")
        self.state = start(self.state)
        return self._register_loop(parsed.commands, line.strip(), iterations)

    def _run_now(self, commands: tuple[Command, ...], source: str) -> list[CurvelandError]:
        """Run a one-shot sequence up to its first suspension, queueing the rest."""
        errors: list[CurvelandError] = []

        def report(error: CurvelandError) -> None:
            self._log_error(error)
            errors.append(error)

        if commands:
            body = self._run_sequence(commands, lambda: self.closed, report)
            self.scheduler.spawn(Task(body, name=source), immediate=True)
        return errors

    def _register_loop(
        self, commands: tuple[Command, ...], source: str, iterations: int | None
    ) -> CommandLoop:
        loop = self.loops.register(commands, source, iterations)
        loop.task = self.scheduler.spawn(Task(self._loop_body(loop), name=f"loop {loop.loop_id}"))
        logger.info("Registered command loop %s", loop.describe())
        return loop

    def _loop_body(self, loop: CommandLoop) -> TaskBody:
        try:
            while not loop.cancelled:
                yield from self._run_sequence(
                    loop.commands, lambda: loop.cancelled, self._log_error
                )
                if loop.cancelled:
                    break
                loop.completed_iterations += 1
                if loop.exhausted:
                    logger.info("Command loop %d finished", loop.loop_id)
                    break
                # Re-enter on the next frame boundary
                yield
        finally:
            self.loops.discard(loop)

    def _run_sequence(
        self,
        commands: tuple[Command, ...],
        should_stop: Callable[[], bool],
        report: Callable[[CurvelandError], None],
    ) -> TaskBody:
        """Execute commands strictly in order, suspending on waits."""
        for command in commands:
            if should_stop():
                return
            if isinstance(command, Wait):
                yield from self._wait(command.frames, should_stop)
                continue
            try:
                self._execute(command)
            except (InvalidIndexError, ExportError) as exc:
                report(exc)

    def _wait(self, frames: int, should_stop: Callable[[], bool]) -> TaskBody:
        # A fractional target resumes on the first whole frame reaching it
        target = self.state.frame_count + frames / self.state.speed
        logger.debug("Waiting until frame %s", target)
        while self.state.frame_count < target:
            yield
            if should_stop():
                return

    def _execute(self, command: Command) -> None:
        """Apply one non-suspending command."""
        if isinstance(command, Move):
            dx, dy = command.delta
            self.state = move(self.state, dx, dy)
        elif isinstance(command, Force):
            self.state = apply_force(self.state, command.magnitude, command.angle)
        elif isinstance(command, SetSpeed):
            self.state = with_speed(self.state, command.value)
            logger.info("Speed set to %s", command.value)
        elif isinstance(command, Stop):
            self.stop(command.loop_id)
        elif isinstance(command, Export):
            self._export(command.fmt)
        else:
            raise TypeError(f"Cannot execute {command!r}")

    def _export(self, fmt: ExportFormat) -> None:
        if self.exporter is None:
            raise ExportError(f"No exporter configured for '{fmt}'")
        result = self.exporter(fmt, self.state)
        logger.info("Exported %s: %s", fmt, result)

    def _log_error(self, error: CurvelandError) -> None:
        logger.error("Command failed: %s", error)
