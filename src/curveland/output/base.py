"""Provider interface shared by every trace output format."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Iterator, TypeVar

FrameT = TypeVar("FrameT")


class OutputProvider(ABC, Generic[FrameT]):
    """Turns the frame stream of one run into a single encoded file."""

    def __init__(self, path: str | Path = ""):
        self.path = str(path)

    @abstractmethod
    def encode(self, frames: Iterator[FrameT], frame_duration: int) -> bytes:
        """
        Encode a frame stream.

        Args:
            frames: Frames in timeline order; the last one shows the final trace
            frame_duration: Milliseconds each frame stays on screen

        Returns:
            The encoded file, or empty bytes when the stream is empty
        """

    def write(self, data: bytes) -> None:
        """Write encoded bytes to ``self.path``, creating missing parent directories."""
        if not self.path:
            raise ValueError("Output path not set")
        target = Path(self.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
