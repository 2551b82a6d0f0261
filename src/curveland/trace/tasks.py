"""Cooperative tasks stepped once per frame from an explicit queue."""

import logging
from typing import Generator, List

logger = logging.getLogger(__name__)

TaskBody = Generator[None, None, None]


class Task:
    """
    A resumable unit of work backed by a generator.

    Each step runs the body until it yields ("not yet complete, check again
    next frame") or returns ("complete").
    """

    def __init__(self, body: TaskBody, name: str = "task"):
        self.name = name
        self._body = body
        self._running = False
        self.done = False
        self.cancelled = False

    @property
    def finished(self) -> bool:
        return self.done or self.cancelled

    def step(self) -> bool:
        """
        Resume the body until its next suspension point.

        Returns:
            True once the task has completed or was cancelled
        """
        if self.finished:
            return True
        self._running = True
        try:
            next(self._body)
        except StopIteration:
            self.done = True
        finally:
            self._running = False
        if self.cancelled:
            self._body.close()
        return self.finished

    def cancel(self) -> None:
        """Stop the task at its next checkpoint. Safe to call from inside the body."""
        if self.finished:
            return
        self.cancelled = True
        if not self._running:
            self._body.close()

    def __repr__(self) -> str:
        status = "done" if self.done else "cancelled" if self.cancelled else "pending"
        return f"Task({self.name!r}, {status})"


class Scheduler:
    """Queue of pending tasks, advanced one step per frame in spawn order."""

    def __init__(self) -> None:
        self._tasks: List[Task] = []

    def spawn(self, task: Task, immediate: bool = False) -> Task:
        """
        Queue a task.

        Args:
            task: The task to schedule
            immediate: Run the first step now instead of on the next frame
        """
        if immediate and self._advance(task):
            return task
        self._tasks.append(task)
        return task

    def step(self) -> None:
        """Advance every pending task once."""
        # Iterate a snapshot: steps may cancel other tasks
        for task in list(self._tasks):
            if not task.finished:
                self._advance(task)
        self._tasks = [task for task in self._tasks if not task.finished]

    def _advance(self, task: Task) -> bool:
        """Step one task; a task whose body raises is logged and cancelled."""
        try:
            return task.step()
        except Exception:
            logger.exception("Task %s failed", task.name)
            task.cancel()
            return True

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    @property
    def pending(self) -> tuple[Task, ...]:
        return tuple(task for task in self._tasks if not task.finished)

    def __len__(self) -> int:
        return len(self.pending)
