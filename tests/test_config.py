"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from curveland.config import AppConfig, load_config
from curveland.errors import ConfigError
from curveland.trace import MotionMode

ENV_VARS = (
    "CURVELAND_MODE",
    "CURVELAND_FPS",
    "CURVELAND_CANVAS_WIDTH",
    "CURVELAND_CANVAS_HEIGHT",
    "CURVELAND_EXPORT_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    assert load_config(dotenv=False) == AppConfig()


def test_reads_every_variable(monkeypatch, tmp_path):
    monkeypatch.setenv("CURVELAND_MODE", " Force ")
    monkeypatch.setenv("CURVELAND_FPS", "30")
    monkeypatch.setenv("CURVELAND_CANVAS_WIDTH", "320")
    monkeypatch.setenv("CURVELAND_CANVAS_HEIGHT", "240")
    monkeypatch.setenv("CURVELAND_EXPORT_DIR", str(tmp_path))

    config = load_config(dotenv=False)

    assert config.mode is MotionMode.FORCE
    assert config.fps == 30
    assert (config.canvas_width, config.canvas_height) == (320, 240)
    assert config.export_dir == Path(tmp_path)


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("CURVELAND_MODE", "orbit", "must be one of drift, force, manual"),
        ("CURVELAND_FPS", "fast", "must be an integer"),
        ("CURVELAND_CANVAS_WIDTH", "0", "must be positive"),
        ("CURVELAND_CANVAS_HEIGHT", "-5", "must be positive"),
    ],
)
def test_invalid_values(monkeypatch, name, value, message):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=message):
        load_config(dotenv=False)
