"""Injected observability channel for the core components.

Components accept any object with a ``notify(level, message)`` method.
``level`` is a stdlib :mod:`logging` level constant. By default the
messages go to the component's module logger; tests pass
:class:`NullNotifier` to keep output quiet.
"""

from __future__ import annotations

import logging
from typing import Protocol


class Notifier(Protocol):
    """Anything that can receive a diagnostic message."""

    def notify(self, level: int, message: str) -> None: ...


class LogNotifier:
    """Forward diagnostics to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("notedraft")

    def notify(self, level: int, message: str) -> None:
        self.logger.log(level, message)


class NullNotifier:
    """Discard every diagnostic."""

    def notify(self, level: int, message: str) -> None:
        return None


class RecordingNotifier:
    """Keep diagnostics in memory as ``(level, message)`` pairs.

    Test helper: lets tests assert on what a component reported without
    going through the logging machinery.
    """

    def __init__(self) -> None:
        self.records: list[tuple[int, str]] = []

    def notify(self, level: int, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: int | None = None) -> list[str]:
        """Return recorded messages, optionally only those at ``level``."""
        return [m for lvl, m in self.records if level is None or lvl == level]
