"""Per-persona advice request state machine."""

import asyncio
from typing import Callable

import structlog

from credentials import usable_credential
from llm import CompletionError
from observability import metrics
from shared_types import AdviceState, ErrorKind

from .models import AdviceResult, JournalSnapshot, Persona
from .notify import LogNotifier, Notifier
from .prompts import build_advice_prompt

logger = structlog.get_logger()

UnitListener = Callable[["AdviceUnit"], None]


class AdviceUnit:
    """Owns one persona's request lifecycle.

    AWAITING_CREDENTIAL -> LOADING -> SUCCEEDED | FAILED.
    FAILED -> LOADING on retry(); any state -> new generation on bind().

    Only the most recently issued request may settle the unit. A response from
    an earlier request is dropped on arrival.

    bind() and retry() schedule the request on the running event loop and
    return immediately.
    """

    def __init__(
        self,
        persona: Persona,
        snapshot: JournalSnapshot,
        credential: str | None,
        client,
        notifier: Notifier | None = None,
    ):
        self._client = client
        self._notifier = notifier or LogNotifier()
        self._persona = persona
        self._snapshot = snapshot
        self._credential: str | None = None
        self._state = AdviceState.AWAITING_CREDENTIAL
        self._result: AdviceResult | None = None
        self._generation = 0
        self._request_seq = 0
        self._active_request: int | None = None
        self._task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[UnitListener] = []
        self.requests_issued = 0

        self.bind(snapshot, credential)

    # --- read side ---

    @property
    def persona(self) -> Persona:
        return self._persona

    @property
    def snapshot(self) -> JournalSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def result(self) -> AdviceResult | None:
        return self._result

    @property
    def text(self) -> str | None:
        return self._result.text if self._result else None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self._result.error_kind if self._result else None

    def current_state(self) -> AdviceState:
        return self._state

    def subscribe(self, listener: UnitListener) -> Callable[[], None]:
        """Register a state-change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- transitions ---

    def bind(
        self,
        snapshot: JournalSnapshot,
        credential: str | None,
        persona: Persona | None = None,
    ) -> None:
        """Start a new generation for (persona, snapshot, credential).

        Any in-flight request is superseded. Without a usable credential the
        unit waits in AWAITING_CREDENTIAL and issues nothing.

        Raises:
            RuntimeError: a credential is given but no event loop is running.
                The unit is left untouched.
        """
        credential = usable_credential(credential)
        loop = asyncio.get_running_loop() if credential else None

        if persona is not None:
            self._persona = persona
        self._snapshot = snapshot
        self._credential = credential
        self._generation += 1
        self._result = None
        self._active_request = None
        self._task = None

        if loop is not None:
            self._issue(loop)
        else:
            self._set_state(AdviceState.AWAITING_CREDENTIAL)

    def retry(self) -> bool:
        """Re-issue the request after a failure. No-op unless FAILED."""
        if self._state != AdviceState.FAILED:
            return False
        loop = asyncio.get_running_loop()
        logger.info("advice.retry", persona=self._persona.id, generation=self._generation)
        metrics.counter("advice_retries")
        self._result = None
        self._issue(loop)
        return True

    async def wait(self) -> AdviceState:
        """Wait until the latest issued request settles."""
        task = self._task
        while task is not None and not task.done():
            await asyncio.wait([task])
            task = self._task
        return self._state

    # --- internals ---

    def _issue(self, loop: asyncio.AbstractEventLoop) -> None:
        self._request_seq += 1
        request_id = self._request_seq
        self._active_request = request_id
        prompt = build_advice_prompt(self._persona, self._snapshot)
        credential = self._credential

        self.requests_issued += 1
        metrics.counter("advice_requests_issued")
        logger.debug(
            "advice.request_issued",
            persona=self._persona.id,
            generation=self._generation,
            request_id=request_id,
        )
        self._set_state(AdviceState.LOADING)

        task = loop.create_task(self._run(request_id, self._generation, prompt, credential))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task

    async def _run(self, request_id: int, generation: int, prompt: str, credential: str) -> None:
        try:
            with metrics.timer("advice_request"):
                text = await self._client.complete(prompt, credential)
        except CompletionError as e:
            self._settle(request_id, AdviceResult(self._persona.id, generation, error_kind=e.kind))
        except Exception:
            logger.exception("advice.unexpected_error", persona=self._persona.id)
            self._settle(
                request_id, AdviceResult(self._persona.id, generation, error_kind=ErrorKind.UNKNOWN)
            )
        else:
            self._settle(request_id, AdviceResult(self._persona.id, generation, text=text))

    def _settle(self, request_id: int, result: AdviceResult) -> None:
        if request_id != self._active_request:
            metrics.counter("advice_superseded")
            logger.debug(
                "advice.superseded",
                persona=self._persona.id,
                request_id=request_id,
                active_request=self._active_request,
            )
            return

        self._active_request = None
        self._result = result
        if result.ok:
            metrics.counter("advice_succeeded")
            logger.info("advice.succeeded", persona=self._persona.id, generation=result.generation)
            self._set_state(AdviceState.SUCCEEDED)
        else:
            metrics.counter("advice_failed")
            logger.warning(
                "advice.failed",
                persona=self._persona.id,
                generation=result.generation,
                error_kind=str(result.error_kind),
            )
            self._set_state(AdviceState.FAILED)
            try:
                self._notifier.notify(self._persona, result.error_kind)
            except Exception:
                logger.exception("advice.notify_failed", persona=self._persona.id)

    def _set_state(self, state: AdviceState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("advice.listener_failed", persona=self._persona.id)

    def __repr__(self) -> str:
        return f"AdviceUnit(persona={self._persona.id!r}, state={self._state!s}, generation={self._generation})"
