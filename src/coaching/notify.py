"""User-visible failure notifications."""

from typing import Protocol

import structlog

from observability import metrics
from shared_types import ErrorKind

from .models import Persona
from .prompts import FAILURE_TITLE, failure_message

logger = structlog.get_logger()


class Notifier(Protocol):
    def notify(self, persona: Persona, kind: ErrorKind) -> None: ...


class LogNotifier:
    """Default notifier: emits a warning log event."""

    def notify(self, persona: Persona, kind: ErrorKind) -> None:
        metrics.counter("advice_failure_notifications")
        logger.warning(
            "advice.failure_notice",
            persona=persona.id,
            error_kind=str(kind),
            message=failure_message(kind),
        )


class ConsoleNotifier:
    """Prints a one-line notice to a rich console."""

    def __init__(self, console):
        self._console = console

    def notify(self, persona: Persona, kind: ErrorKind) -> None:
        metrics.counter("advice_failure_notifications")
        self._console.print(
            f"[red]{FAILURE_TITLE}[/] {persona.display_name}: {failure_message(kind)}"
        )
