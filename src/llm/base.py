"""Completion error taxonomy and fixed generation policy."""

from dataclasses import asdict, dataclass

from shared_types import ErrorKind


class CompletionError(Exception):
    """Base completion error."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class TransportError(CompletionError):
    """No response received from the completion endpoint."""

    kind = ErrorKind.TRANSPORT


class ProtocolError(CompletionError):
    """Endpoint answered with a non-success status code."""

    kind = ErrorKind.PROTOCOL

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Completion API error: HTTP {status_code}")


class EmptyResponseError(CompletionError):
    """Success status but no usable candidate text."""

    kind = ErrorKind.EMPTY_RESPONSE


@dataclass(frozen=True)
class GenerationPolicy:
    """Sampling parameters sent with every request. Not user-configurable."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 500

    def to_wire(self) -> dict:
        """Render as the endpoint's camelCase generationConfig."""
        d = asdict(self)
        return {
            "temperature": d["temperature"],
            "topK": d["top_k"],
            "topP": d["top_p"],
            "maxOutputTokens": d["max_output_tokens"],
        }


GENERATION_POLICY = GenerationPolicy()
