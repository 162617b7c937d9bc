"""Value types shared by the advice engine."""

from dataclasses import dataclass

from shared_types import ErrorKind


@dataclass(frozen=True)
class JournalSnapshot:
    """One session's journal input. Read-only to the advice engine."""

    date: str
    journal_text: str
    reflection_text: str

    @classmethod
    def from_dict(cls, data: dict) -> "JournalSnapshot":
        """Accept both the session hand-off keys and the long-form keys."""
        return cls(
            date=str(data.get("date", "")),
            journal_text=str(data.get("journal", data.get("journalText", ""))),
            reflection_text=str(data.get("reflection", data.get("reflectionText", ""))),
        )

    def to_dict(self) -> dict:
        return {"date": self.date, "journal": self.journal_text, "reflection": self.reflection_text}


@dataclass(frozen=True)
class Persona:
    """A fixed advice-giving identity."""

    id: str
    display_name: str
    title: str
    style_description: str
    prompt_template: str

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.display_name.split() if part)


@dataclass(frozen=True)
class AdviceResult:
    """Outcome of one generation for one persona. Exactly one of text/error_kind is set."""

    persona_id: str
    generation: int
    text: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None
