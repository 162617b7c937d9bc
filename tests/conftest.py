"""Shared test fixtures for Journal Coach."""

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from coaching.models import JournalSnapshot  # noqa: E402
from coaching.personas import PERSONAS  # noqa: E402
from credentials import CredentialStore, MemoryBackend  # noqa: E402
from observability import metrics  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def snapshot():
    return JournalSnapshot(
        date="2024-01-01",
        journal_text="오늘은 힘들었다",
        reflection_text="그래도 배운 게 있다",
    )


@pytest.fixture
def memory_store():
    return CredentialStore(MemoryBackend())


class ScriptedClient:
    """Completion client stub answering per persona.

    ``outcomes`` maps persona id -> text or exception instance. Unlisted
    personas get ``default``.
    """

    def __init__(self, outcomes: dict | None = None, default: str = "mocked advice"):
        self.outcomes = outcomes or {}
        self.default = default
        self.calls: list[SimpleNamespace] = []

    def persona_for(self, prompt: str) -> str | None:
        for p in PERSONAS:
            if prompt.startswith(p.prompt_template):
                return p.id
        return None

    async def complete(self, prompt: str, credential: str) -> str:
        persona_id = self.persona_for(prompt)
        self.calls.append(SimpleNamespace(prompt=prompt, credential=credential, persona_id=persona_id))
        await asyncio.sleep(0)
        outcome = self.outcomes.get(persona_id, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls_for(self, persona_id: str) -> list[SimpleNamespace]:
        return [c for c in self.calls if c.persona_id == persona_id]


class ControlledClient:
    """Completion client whose responses are released by the test."""

    def __init__(self):
        self.pending: list[SimpleNamespace] = []

    async def complete(self, prompt: str, credential: str) -> str:
        future = asyncio.get_running_loop().create_future()
        self.pending.append(SimpleNamespace(prompt=prompt, credential=credential, future=future))
        return await future


async def drain(cycles: int = 5) -> None:
    """Let ready tasks run."""
    for _ in range(cycles):
        await asyncio.sleep(0)


@pytest.fixture
def scripted_client():
    return ScriptedClient


@pytest.fixture
def controlled_client():
    return ControlledClient()


@pytest.fixture
def run_loop_cycles():
    return drain
