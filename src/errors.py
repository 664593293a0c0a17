"""Exception types raised by notedraft."""


class NotedraftError(Exception):
    """Base class for notedraft errors."""


class NoteReadError(NotedraftError):
    """A note file exists but could not be read or decoded."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Cannot read note {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(NotedraftError):
    """A required configuration value is missing or invalid."""
