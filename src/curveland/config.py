"""Environment-driven settings shared by the CLI and the web app."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, DEFAULT_FPS
from .errors import ConfigError
from .trace.motion_state import MotionMode


@dataclass(frozen=True)
class AppConfig:
    """Settings resolved from the environment, before CLI overrides."""

    mode: MotionMode = MotionMode.DRIFT
    fps: int = DEFAULT_FPS
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    export_dir: Path = Path(".")


def load_config(dotenv: bool = True) -> AppConfig:
    """
    Build an AppConfig from ``CURVELAND_*`` environment variables.

    Args:
        dotenv: Whether to load a ``.env`` file first

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    if dotenv:
        load_dotenv()

    defaults = AppConfig()
    return AppConfig(
        mode=_read_mode("CURVELAND_MODE", defaults.mode),
        fps=_read_positive_int("CURVELAND_FPS", defaults.fps),
        canvas_width=_read_positive_int("CURVELAND_CANVAS_WIDTH", defaults.canvas_width),
        canvas_height=_read_positive_int("CURVELAND_CANVAS_HEIGHT", defaults.canvas_height),
        export_dir=Path(os.getenv("CURVELAND_EXPORT_DIR") or defaults.export_dir),
    )


def _read_mode(name: str, default: MotionMode) -> MotionMode:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return MotionMode(raw.strip().lower())
    except ValueError:
        available = ", ".join(mode.value for mode in MotionMode)
        raise ConfigError(f"{name} must be one of {available} (got '{raw}')")


def _read_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer (got '{raw}')")
    if value <= 0:
        raise ConfigError(f"{name} must be positive (got {value})")
    return value
