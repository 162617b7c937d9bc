"""Gemini generateContent client: one request/response cycle per call."""

import httpx
import structlog

from observability import metrics

from .base import (
    GENERATION_POLICY,
    EmptyResponseError,
    GenerationPolicy,
    ProtocolError,
    TransportError,
)

logger = structlog.get_logger().bind(source="completion")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-pro"


def build_request_body(prompt_text: str, policy: GenerationPolicy = GENERATION_POLICY) -> dict:
    """Wire body for a single-turn text prompt."""
    return {
        "contents": [{"parts": [{"text": prompt_text}]}],
        "generationConfig": policy.to_wire(),
    }


def extract_candidate_text(data) -> str:
    """Return the first candidate's text, unmodified.

    Raises:
        EmptyResponseError: body has no candidate with a text part
    """
    if not isinstance(data, dict):
        raise EmptyResponseError("Response body is not a JSON object")
    candidates = data.get("candidates")
    if not candidates:
        raise EmptyResponseError("Response contained no candidates")
    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise EmptyResponseError(f"Malformed candidate: {e}") from e
    if not isinstance(text, str):
        raise EmptyResponseError("Candidate text is not a string")
    return text


class CompletionClient:
    """Async client for the completion endpoint.

    Performs no retries; callers own retry policy.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        if client is not None:
            self.client = client
        else:
            kwargs = {"headers": {"Content-Type": "application/json"}}
            if timeout is not None:
                kwargs["timeout"] = timeout
            self.client = httpx.AsyncClient(**kwargs)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def complete(self, prompt_text: str, credential: str) -> str:
        """Send one prompt and return the first candidate's text.

        Args:
            prompt_text: Full prompt block
            credential: API key, sent as the ``key`` query parameter

        Raises:
            TransportError: no response received
            ProtocolError: non-2xx status
            EmptyResponseError: 2xx without a usable candidate
        """
        metrics.counter("completion_requests")
        try:
            response = await self.client.post(
                self.endpoint,
                params={"key": credential},
                json=build_request_body(prompt_text),
            )
        except httpx.RequestError as e:
            logger.warning("completion.transport_error", error=type(e).__name__)
            raise TransportError(f"Could not reach completion endpoint: {type(e).__name__}") from e

        if not response.is_success:
            logger.warning("completion.protocol_error", status_code=response.status_code)
            raise ProtocolError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise EmptyResponseError("Response body is not valid JSON") from e

        text = extract_candidate_text(data)
        logger.debug("completion.ok", chars=len(text))
        return text

    async def close(self):
        """Close the async client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
