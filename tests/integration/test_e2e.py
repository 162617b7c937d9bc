"""End-to-end scenarios over the real CompletionClient with a mocked transport."""

import json

import httpx
import pytest
from pydantic import ValidationError

from coaching import JournalSnapshot, Orchestrator, PERSONAS
from credentials import CredentialStore, FileBackend
from llm import CompletionClient
from shared_types import AdviceState

SNAPSHOT = JournalSnapshot(
    date="2024-01-01",
    journal_text="오늘은 힘들었다",
    reflection_text="그래도 배운 게 있다",
)


def _mock_endpoint(requests: list, status_for=None):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append({"key": request.url.params["key"], "prompt": body["contents"][0]["parts"][0]["text"]})
        status = status_for(body) if status_for else 200
        if status != 200:
            return httpx.Response(status, json={"error": {"code": status}})
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "괜찮아질 거예요."}]}}]}
        )

    return CompletionClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
class TestEndToEnd:
    async def test_mindfulness_persona_gets_exact_text(self, memory_store):
        requests = []
        memory_store.save("VALIDKEY")
        async with _mock_endpoint(requests) as client:
            orch = Orchestrator(client, credentials=memory_store)
            orch.bind(SNAPSHOT, memory_store.current())
            await orch.wait_all()

        unit = next(u for u in orch.units if u.persona.display_name == "윤미래")
        assert unit.current_state() == AdviceState.SUCCEEDED
        assert unit.text == "괜찮아질 거예요."
        assert {r["key"] for r in requests} == {"VALIDKEY"}
        assert len(requests) == 5

    async def test_absent_credential_then_save_and_rebind(self, tmp_path):
        requests = []
        store = CredentialStore(FileBackend(tmp_path / "secrets.json"))
        async with _mock_endpoint(requests) as client:
            orch = Orchestrator(client)
            orch.bind(SNAPSHOT, store.current())
            await orch.wait_all()

            assert set(orch.states().values()) == {AdviceState.AWAITING_CREDENTIAL}
            assert requests == []

            store.save("NEWKEY")
            orch.bind(SNAPSHOT, store.current())
            assert set(orch.states().values()) == {AdviceState.LOADING}
            await orch.wait_all()

        assert len(requests) == 5
        assert {r["key"] for r in requests} == {"NEWKEY"}
        assert set(orch.states().values()) == {AdviceState.SUCCEEDED}

    async def test_rejected_key_fails_one_persona_only(self, memory_store):
        requests = []
        target = PERSONAS[1].prompt_template

        def status_for(body):
            return 403 if body["contents"][0]["parts"][0]["text"].startswith(target) else 200

        memory_store.save("VALIDKEY")
        async with _mock_endpoint(requests, status_for) as client:
            orch = Orchestrator(client, credentials=memory_store)
            orch.bind(SNAPSHOT, memory_store.current())
            states = await orch.wait_all()

        assert states[PERSONAS[1].id] == AdviceState.FAILED
        assert [s for pid, s in states.items() if pid != PERSONAS[1].id] == [AdviceState.SUCCEEDED] * 4


class TestConfigValidation:
    """Test configuration validation."""

    def test_valid_config(self):
        from cli.config_models import CoachConfig

        config = CoachConfig.from_dict({
            "llm": {"model": "gemini-1.5-flash"},
            "logging": {"level": "debug", "json": True},
        })

        assert config.llm.model == "gemini-1.5-flash"
        assert config.logging.level == "DEBUG"
        assert config.logging.json_mode is True

    def test_invalid_log_level(self):
        from cli.config_models import CoachConfig

        with pytest.raises(ValidationError):
            CoachConfig.from_dict({"logging": {"level": "INVALID"}})

    def test_invalid_base_url(self):
        from cli.config_models import CoachConfig

        with pytest.raises(ValidationError):
            CoachConfig.from_dict({"llm": {"base_url": "ftp://nope"}})

    def test_secret_key_env_expansion(self, monkeypatch):
        from cli.config_models import CoachConfig

        monkeypatch.setenv("COACH_SECRET", "fernet-key-value")
        config = CoachConfig.from_dict({"credentials": {"secret_key": "${COACH_SECRET}"}})
        assert config.credentials.secret_key == "fernet-key-value"

    def test_paths_expanded(self):
        from cli.config_models import CoachConfig

        config = CoachConfig()
        assert "~" not in str(config.paths.credentials_file)

    def test_load_config_from_yaml(self, tmp_path):
        from cli.config import load_config_model

        path = tmp_path / "config.yaml"
        path.write_text("llm:\n  timeout: 12.5\n")
        assert load_config_model(path).llm.timeout == 12.5

    def test_load_config_bad_yaml(self, tmp_path):
        from cli.config import load_config_model

        path = tmp_path / "config.yaml"
        path.write_text("llm: [unclosed\n")
        with pytest.raises(ValueError):
            load_config_model(path)
