"""CLI command modules."""

from .advise import advise, personas
from .journal import journal
from .key import key

__all__ = [
    "advise",
    "journal",
    "key",
    "personas",
]
