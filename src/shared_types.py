"""Shared enums and types for journal-coach."""

from enum import StrEnum


class AdviceState(StrEnum):
    AWAITING_CREDENTIAL = "awaiting_credential"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorKind(StrEnum):
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"
