"""Find the dated notes for a given day in a notes directory."""

from __future__ import annotations

import logging
import os
from datetime import date, timedelta
from pathlib import Path

from notedraft.shared.notify import LogNotifier, Notifier

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"


def date_stamp(day: date) -> str:
    """Format a date as the ``YYYY-MM-DD`` key embedded in note filenames."""
    return day.strftime("%Y-%m-%d")


def today_stamp() -> str:
    return date_stamp(date.today())


def yesterday_stamp() -> str:
    return date_stamp(date.today() - timedelta(days=1))


class NoteLocator:
    """Lists the notes directly under ``notes_root`` for a date.

    Matching is by substring: any file ending in the note extension whose
    name contains the date key is a candidate. Results keep the order the
    file system enumerates them in, which is not guaranteed to be sorted.
    """

    def __init__(
        self,
        notes_root: Path | str,
        *,
        extension: str = NOTE_EXTENSION,
        notifier: Notifier | None = None,
    ) -> None:
        self.notes_root = Path(notes_root)
        self.extension = extension
        self.notifier = notifier or LogNotifier(logger)

    def find_all_by_date(self, stamp: str) -> list[Path]:
        """Return every note whose filename contains ``stamp``.

        A missing notes root is reported at ERROR level and yields an
        empty list, as does a day without notes.
        """
        if not self.notes_root.exists():
            self.notifier.notify(logging.ERROR, f"Notes directory does not exist: {self.notes_root}")
            return []

        names = [
            name
            for name in os.listdir(self.notes_root)
            if name.endswith(self.extension) and stamp in name
        ]

        if not names:
            self.notifier.notify(logging.INFO, f"No notes found for {stamp}")
            return []

        self.notifier.notify(logging.INFO, f"Found {len(names)} note(s) for {stamp}")
        return [self.notes_root / name for name in names]

    def find_by_date(self, stamp: str) -> Path | None:
        """Return the first note for ``stamp`` in enumeration order."""
        paths = self.find_all_by_date(stamp)
        if not paths:
            return None
        self.notifier.notify(logging.INFO, f"Selected note: {paths[0].name}")
        return paths[0]

    def find_today(self) -> Path | None:
        return self.find_by_date(today_stamp())

    def find_yesterday(self) -> Path | None:
        return self.find_by_date(yesterday_stamp())

    def find_all_yesterday(self) -> list[Path]:
        return self.find_all_by_date(yesterday_stamp())
