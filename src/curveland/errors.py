"""Exceptions raised by the command interpreter and its collaborators."""


class CurvelandError(Exception):
    """Base exception for curveland errors."""
    pass


class CommandParseError(CurvelandError):
    """A command token could not be recognized or its argument is invalid."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: '{token}'")


class InvalidIndexError(CurvelandError):
    """A stop command referenced a loop that is not running."""

    def __init__(self, loop_id: int):
        self.loop_id = loop_id
        super().__init__(f"No command loop with id {loop_id}")


class ExportError(CurvelandError):
    """An export collaborator failed to produce its output."""
    pass


class ConfigError(CurvelandError):
    """An environment setting holds an unusable value."""
    pass
