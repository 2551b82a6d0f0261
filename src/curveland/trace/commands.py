"""Tokenizer and parser for the single-line command language."""

import math
from dataclasses import dataclass
from typing import Literal, Union

from ..constants import MAX_ARGUMENT
from ..errors import CommandParseError

Direction = Literal["up", "down", "back", "forward"]
ExportFormat = Literal["png", "svg"]

_DIRECTIONS: dict[str, Direction] = {
    "u": "up",
    "up": "up",
    "d": "down",
    "down": "down",
    "b": "back",
    "back": "back",
    "f": "forward",
    "forward": "forward",
}
_SHORT_DIRECTIONS: dict[Direction, str] = {"up": "u", "down": "d", "back": "b", "forward": "f"}
_DELTAS: dict[Direction, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "back": (-1, 0),
    "forward": (1, 0),
}
_EXPORTS: dict[str, ExportFormat] = {"dlImg": "png", "dlSvg": "svg"}
_OTHER_NAMES = ("force", "w", "wait", "speed", "stop")
# Longest first, so "down3" is not read as "d" with argument "own3"
_NAMES = sorted([*_DIRECTIONS, *_EXPORTS, *_OTHER_NAMES], key=len, reverse=True)

LOOP_PREFIX = "r"
REPEAT_PREFIX = "repeat"


@dataclass(frozen=True, slots=True)
class Move:
    """Displace the square along one axis by an integer distance."""
    direction: Direction
    distance: int

    @property
    def delta(self) -> tuple[int, int]:
        unit_x, unit_y = _DELTAS[self.direction]
        return unit_x * self.distance, unit_y * self.distance

    def __str__(self) -> str:
        return f"{_SHORT_DIRECTIONS[self.direction]}{self.distance}"


@dataclass(frozen=True, slots=True)
class Force:
    """Add an impulse of ``magnitude`` towards ``angle`` degrees."""
    magnitude: float
    angle: float

    def __str__(self) -> str:
        return f"f{self.magnitude:g},{self.angle:g}"


@dataclass(frozen=True, slots=True)
class Wait:
    """Suspend the running sequence for a number of frames."""
    frames: int

    def __str__(self) -> str:
        return f"w{self.frames}"


@dataclass(frozen=True, slots=True)
class SetSpeed:
    value: float

    def __str__(self) -> str:
        return f"speed{self.value:g}"


@dataclass(frozen=True, slots=True)
class Stop:
    """Cancel one command loop, or every loop when ``loop_id`` is None."""
    loop_id: int | None = None

    def __str__(self) -> str:
        return "stop" if self.loop_id is None else f"stop{self.loop_id}"


@dataclass(frozen=True, slots=True)
class Export:
    fmt: ExportFormat

    def __str__(self) -> str:
        return next(name for name, fmt in _EXPORTS.items() if fmt == self.fmt)


Command = Union[Move, Force, Wait, SetSpeed, Stop, Export]


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """
    Result of parsing one input line.

    ``commands`` holds every token parsed before the first failure. A line
    that failed to parse never asks for a loop.
    """
    commands: tuple[Command, ...]
    loop: bool = False
    iterations: int | None = None
    error: CommandParseError | None = None


def tokenize(line: str) -> list[str]:
    """Split an input line into whitespace-separated tokens."""
    return line.split()


def parse_token(token: str) -> Command:
    """
    Classify a single token.

    Args:
        token: A token such as ``u10``, ``w30``, ``f5,20`` or ``speed2``

    Returns:
        The command the token stands for

    Raises:
        CommandParseError: If the token is unknown or its argument is invalid
    """
    name, argument = _split_token(token)

    if name in _EXPORTS:
        if argument:
            raise CommandParseError(token, "Export commands take no argument")
        return Export(_EXPORTS[name])

    # A comma turns the short forward token into a force impulse
    if name == "force" or (name == "f" and "," in argument):
        return _parse_force(token, argument)

    if name in _DIRECTIONS:
        return Move(_DIRECTIONS[name], _parse_int(token, argument))

    if name in ("w", "wait"):
        frames = _parse_int(token, argument)
        if frames < 0:
            raise CommandParseError(token, "Wait needs a non-negative frame count")
        return Wait(frames)

    if name == "speed":
        value = _parse_number(token, argument)
        if value <= 0:
            raise CommandParseError(token, "Speed must be positive")
        return SetSpeed(value)

    if name == "stop":
        return Stop(_parse_int(token, argument) if argument else None)

    raise CommandParseError(token, "Unrecognized command")


def parse_line(line: str) -> ParsedLine:
    """
    Parse a whole input line.

    A leading ``r`` registers the rest of the line as a loop even when it
    holds a single command; a leading ``repeat<N>`` runs it N times. Any
    other line with more than one token loops until stopped.
    """
    tokens = tokenize(line)
    loop = len(tokens) > 1
    iterations: int | None = None

    if tokens and tokens[0] == LOOP_PREFIX:
        loop = True
        tokens = tokens[1:]
    elif tokens and tokens[0].startswith(REPEAT_PREFIX):
        head = tokens[0]
        try:
            iterations = _parse_int(head, head[len(REPEAT_PREFIX):])
        except CommandParseError as exc:
            return ParsedLine(commands=(), error=exc)
        if iterations < 1:
            return ParsedLine(
                commands=(),
                error=CommandParseError(head, "Repeat count must be at least 1"),
            )
        loop = True
        tokens = tokens[1:]

    if loop and not tokens:
        prefix = line.split()[0]
        return ParsedLine(commands=(), error=CommandParseError(prefix, "Nothing to loop"))

    commands: list[Command] = []
    for token in tokens:
        try:
            commands.append(parse_token(token))
        except CommandParseError as exc:
            return ParsedLine(commands=tuple(commands), error=exc)
    return ParsedLine(commands=tuple(commands), loop=loop, iterations=iterations)


def _parse_int(token: str, argument: str) -> int:
    try:
        value = int(argument)
    except ValueError:
        raise CommandParseError(token, "Expected an integer argument")
    _check_magnitude(token, value)
    return value


def _parse_number(token: str, argument: str) -> float:
    try:
        value = float(argument)
    except ValueError:
        raise CommandParseError(token, "Expected a numeric argument")
    if not math.isfinite(value):
        raise CommandParseError(token, "Expected a finite number")
    _check_magnitude(token, value)
    return int(value) if value.is_integer() else value


def _check_magnitude(token: str, value: float) -> None:
    if abs(value) > MAX_ARGUMENT:
        raise CommandParseError(token, f"Argument exceeds {MAX_ARGUMENT}")


def _parse_force(token: str, argument: str) -> Force:
    parts = argument.split(",")
    if len(parts) != 2:
        raise CommandParseError(token, "Force needs '<magnitude>,<angle>'")
    magnitude = _parse_number(token, parts[0])
    angle = _parse_number(token, parts[1])
    return Force(magnitude, angle)


def _split_token(token: str) -> tuple[str, str]:
    for name in _NAMES:
        if token.startswith(name):
            return name, token[len(name):]
    raise CommandParseError(token, "Unrecognized command")
