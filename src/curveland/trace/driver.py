"""Frame driver: the single recurring tick that advances a session."""

import asyncio
import logging
import time
from typing import Iterator

from ..constants import DEFAULT_FPS
from .motion_state import MotionState, ambient_transition, tick_frame
from .session import Session

logger = logging.getLogger(__name__)


class FrameDriver:
    """Ticks a session once per display frame."""

    def __init__(self, session: Session, fps: int = DEFAULT_FPS):
        """
        Initialize the driver.

        Args:
            session: The session to advance
            fps: Display refresh rate the ticks are aligned to
        """
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.session = session
        self.fps = fps
        self.frame_duration = 1000 // fps
        self.delta_time = 1.0 / fps

    def tick(self) -> MotionState:
        """
        Process one frame.

        When the session has started, apply its ambient motion and count the
        frame; then give every pending task (waits, loops) one step.
        """
        session = self.session
        if session.state.started:
            session.state = tick_frame(ambient_transition(session.state, session.mode))
        session.scheduler.step()
        return session.state

    def run(self, frames: int) -> MotionState:
        """Tick ``frames`` times as fast as possible."""
        for _ in range(frames):
            self.tick()
        return self.session.state

    def iter_state_timeline(self, frames: int) -> Iterator[tuple[MotionState, int]]:
        """Yield the initial state then one state per tick, with elapsed time in milliseconds."""
        elapsed_ms = 0
        yield self.session.state, elapsed_ms
        for _ in range(frames):
            state = self.tick()
            elapsed_ms += self.frame_duration
            yield state, elapsed_ms

    async def run_paced(self, stop_event: asyncio.Event) -> None:
        """Tick at the configured rate until ``stop_event`` is set."""
        logger.info("Frame driver started at %d fps", self.fps)
        while not stop_event.is_set():
            started_at = time.monotonic()
            self.tick()
            remaining = self.delta_time - (time.monotonic() - started_at)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=max(remaining, 0))
            except asyncio.TimeoutError:
                continue
        logger.info("Frame driver stopped at frame %d", self.session.state.frame_count)
