"""Hand-off of today's journal entry to the coaching session."""

import json
from datetime import date as date_cls
from pathlib import Path

import structlog

from coaching.models import JournalSnapshot

logger = structlog.get_logger()


class JournalInputError(ValueError):
    """Journal or reflection text missing."""


def format_entry_date(day: date_cls | None = None) -> str:
    day = day or date_cls.today()
    return f"{day.year:04d}년 {day.month:02d}월 {day.day:02d}일"


class SessionJournal:
    """JSON file holding the single active journal snapshot."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def write(self, journal: str, reflection: str, date: str | None = None) -> JournalSnapshot:
        """Validate and store a new snapshot.

        Raises:
            JournalInputError: either text is blank
        """
        if not journal or not journal.strip() or not reflection or not reflection.strip():
            raise JournalInputError("Both journal and reflection text are required")

        snapshot = JournalSnapshot(
            date=date or format_entry_date(),
            journal_text=journal,
            reflection_text=reflection,
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(snapshot.to_dict(), ensure_ascii=False), encoding="utf-8")
        logger.info("journal.session_written", date=snapshot.date)
        return snapshot

    def read(self) -> JournalSnapshot | None:
        """Return the stored snapshot, or None if absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("journal.session_corrupt", path=str(self.path))
            return None
        if not isinstance(data, dict):
            return None
        return JournalSnapshot.from_dict(data)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
