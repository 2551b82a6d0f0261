"""Registry of repeating command sequences."""

import itertools
from dataclasses import dataclass, field
from typing import Iterator

from ..errors import InvalidIndexError
from .commands import Command
from .tasks import Task


@dataclass(eq=False)
class CommandLoop:
    """A registered command sequence that re-runs until cancelled."""

    loop_id: int
    commands: tuple[Command, ...]
    source: str
    iterations: int | None = None  # None repeats forever
    completed_iterations: int = 0
    cancelled: bool = False
    task: Task | None = field(default=None, repr=False)

    @property
    def exhausted(self) -> bool:
        return self.iterations is not None and self.completed_iterations >= self.iterations

    def cancel(self) -> None:
        self.cancelled = True
        if self.task is not None:
            self.task.cancel()

    def describe(self) -> str:
        """Render the loop the way the history panel lists it."""
        return f"{self.loop_id}: " + " | ".join(str(command) for command in self.commands)


class LoopRegistry:
    """
    Insertion-ordered collection of active loops.

    Loop ids come from a counter and are never reused, so an id keeps
    naming the same loop after earlier loops are removed.
    """

    def __init__(self) -> None:
        self._loops: dict[int, CommandLoop] = {}
        self._ids = itertools.count()

    def register(
        self,
        commands: tuple[Command, ...],
        source: str,
        iterations: int | None = None,
    ) -> CommandLoop:
        loop = CommandLoop(
            loop_id=next(self._ids),
            commands=commands,
            source=source,
            iterations=iterations,
        )
        self._loops[loop.loop_id] = loop
        return loop

    def get(self, loop_id: int) -> CommandLoop:
        loop = self._loops.get(loop_id)
        if loop is None:
            raise InvalidIndexError(loop_id)
        return loop

    def cancel(self, loop_id: int) -> CommandLoop:
        """
        Cancel and remove one loop.

        Raises:
            InvalidIndexError: If no active loop has this id
        """
        loop = self.get(loop_id)
        loop.cancel()
        self.discard(loop)
        return loop

    def cancel_all(self) -> list[CommandLoop]:
        loops = list(self._loops.values())
        for loop in loops:
            loop.cancel()
        self._loops.clear()
        return loops

    def discard(self, loop: CommandLoop) -> None:
        """Remove a loop if it is still registered."""
        if self._loops.get(loop.loop_id) is loop:
            del self._loops[loop.loop_id]

    def __contains__(self, loop_id: object) -> bool:
        return loop_id in self._loops

    def __iter__(self) -> Iterator[CommandLoop]:
        return iter(list(self._loops.values()))

    def __len__(self) -> int:
        return len(self._loops)
