"""Completion endpoint client and error taxonomy."""

from .base import (
    GENERATION_POLICY,
    CompletionError,
    EmptyResponseError,
    GenerationPolicy,
    ProtocolError,
    TransportError,
)
from .client import CompletionClient

__all__ = [
    "CompletionClient",
    "CompletionError",
    "TransportError",
    "ProtocolError",
    "EmptyResponseError",
    "GenerationPolicy",
    "GENERATION_POLICY",
]
