"""Fan-out of one journal snapshot to every persona."""

import asyncio
from typing import Callable

import structlog

from credentials import usable_credential
from shared_types import AdviceState

from .models import AdviceResult, JournalSnapshot
from .notify import Notifier
from .personas import PersonaRegistry
from .unit import AdviceUnit

logger = structlog.get_logger()


class Orchestrator:
    """Holds one AdviceUnit per persona, all bound to the same inputs.

    When constructed with a CredentialStore, credential saves and clears are
    pushed to every unit as a new generation.
    """

    def __init__(
        self,
        client,
        registry: PersonaRegistry | None = None,
        credentials=None,
        notifier: Notifier | None = None,
    ):
        self._client = client
        self._registry = registry or PersonaRegistry()
        self._notifier = notifier
        self._units: dict[str, AdviceUnit] = {}
        self._snapshot: JournalSnapshot | None = None
        self._credential: str | None = None
        self._unsubscribe: Callable[[], None] | None = None
        if credentials is not None:
            self._unsubscribe = credentials.subscribe(self.credential_changed)

    @property
    def units(self) -> list[AdviceUnit]:
        return list(self._units.values())

    @property
    def snapshot(self) -> JournalSnapshot | None:
        return self._snapshot

    def unit(self, persona_id: str) -> AdviceUnit:
        return self._units[persona_id]

    def bind(self, snapshot: JournalSnapshot, credential: str | None) -> bool:
        """Bind every persona to (snapshot, credential).

        Returns False when both inputs equal the current generation's, in
        which case nothing is re-issued. A blank credential counts as absent.
        """
        credential = usable_credential(credential)
        if self._units and snapshot == self._snapshot and credential == self._credential:
            return False
        if credential is not None:
            # RuntimeError here leaves every unit as it was
            asyncio.get_running_loop()

        self._snapshot = snapshot
        self._credential = credential
        logger.info(
            "orchestrator.bind",
            date=snapshot.date,
            personas=len(self._registry),
            credential_present=credential is not None,
        )

        for persona in self._registry.all():
            unit = self._units.get(persona.id)
            if unit is None:
                self._units[persona.id] = AdviceUnit(
                    persona, snapshot, credential, self._client, notifier=self._notifier
                )
            else:
                unit.bind(snapshot, credential, persona=persona)
        return True

    def credential_changed(self, credential: str | None) -> None:
        """Credential-update notification. Ignored until a snapshot is bound."""
        if self._snapshot is None:
            return
        self.bind(self._snapshot, credential)

    def retry_failed(self) -> list[str]:
        """Retry every failed unit. Returns the retried persona ids."""
        return [pid for pid, unit in self._units.items() if unit.retry()]

    def states(self) -> dict[str, AdviceState]:
        return {pid: unit.current_state() for pid, unit in self._units.items()}

    def results(self) -> dict[str, AdviceResult | None]:
        return {pid: unit.result for pid, unit in self._units.items()}

    @property
    def awaiting_credential(self) -> bool:
        return bool(self._units) and all(
            s == AdviceState.AWAITING_CREDENTIAL for s in self.states().values()
        )

    async def wait_all(self) -> dict[str, AdviceState]:
        """Wait for every unit's latest request to settle."""
        await asyncio.gather(*(unit.wait() for unit in self._units.values()))
        return self.states()

    def close(self) -> None:
        """Stop listening for credential changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
