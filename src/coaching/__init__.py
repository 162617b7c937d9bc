"""Persona advice engine: one request lifecycle per persona, gated on an API key."""

from .models import AdviceResult, JournalSnapshot, Persona
from .notify import ConsoleNotifier, LogNotifier, Notifier
from .orchestrator import Orchestrator
from .personas import PERSONAS, PersonaRegistry
from .prompts import build_advice_prompt
from .unit import AdviceUnit

__all__ = [
    "AdviceResult",
    "AdviceUnit",
    "ConsoleNotifier",
    "JournalSnapshot",
    "LogNotifier",
    "Notifier",
    "Orchestrator",
    "PERSONAS",
    "Persona",
    "PersonaRegistry",
    "build_advice_prompt",
]
