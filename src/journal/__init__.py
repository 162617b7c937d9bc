"""Journal session hand-off."""

from .session import JournalInputError, SessionJournal, format_entry_date

__all__ = ["SessionJournal", "JournalInputError", "format_entry_date"]
