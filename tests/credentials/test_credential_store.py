"""Tests for CredentialStore."""

import pytest

from credentials import (
    CREDENTIAL_KEY,
    CredentialStore,
    MemoryBackend,
    ValidationError,
    usable_credential,
)


class TestCredentialStore:
    def test_empty_backend_has_no_credential(self, memory_store):
        assert memory_store.load() is None
        assert memory_store.current() is None

    def test_reads_persisted_value_at_construction(self):
        store = CredentialStore(MemoryBackend({CREDENTIAL_KEY: "PERSISTED"}))
        assert store.current() == "PERSISTED"

    def test_save_persists_and_becomes_current(self, memory_store):
        memory_store.save("VALIDKEY")
        assert memory_store.current() == "VALIDKEY"
        assert memory_store.load() == "VALIDKEY"

    @pytest.mark.parametrize("value", ["", " ", "\t\n", "   \n  "])
    def test_blank_rejected_and_store_unchanged(self, value):
        backend = MemoryBackend({CREDENTIAL_KEY: "ORIGINAL"})
        store = CredentialStore(backend)

        with pytest.raises(ValidationError):
            store.save(value)

        assert store.current() == "ORIGINAL"
        assert store.load() == "ORIGINAL"

    def test_blank_rejected_on_empty_store(self, memory_store):
        with pytest.raises(ValidationError):
            memory_store.save("  ")
        assert memory_store.load() is None

    def test_replacement(self, memory_store):
        memory_store.save("KEY_ONE")
        memory_store.save("KEY_TWO")
        assert memory_store.current() == "KEY_TWO"
        assert memory_store.load() == "KEY_TWO"

    def test_value_saved_raw(self, memory_store):
        memory_store.save(" padded ")
        assert memory_store.load() == " padded "

    def test_current_is_stale_until_refresh(self):
        backend = MemoryBackend()
        store = CredentialStore(backend)
        backend.set(CREDENTIAL_KEY, "WRITTEN_ELSEWHERE")

        assert store.current() is None
        assert store.load() == "WRITTEN_ELSEWHERE"
        assert store.refresh() == "WRITTEN_ELSEWHERE"
        assert store.current() == "WRITTEN_ELSEWHERE"

    def test_clear(self, memory_store):
        memory_store.save("VALIDKEY")
        memory_store.clear()
        assert memory_store.current() is None
        assert memory_store.load() is None

    def test_subscribers_notified(self, memory_store):
        seen = []
        unsubscribe = memory_store.subscribe(seen.append)

        memory_store.save("A_KEY")
        memory_store.clear()
        unsubscribe()
        memory_store.save("B_KEY")

        assert seen == ["A_KEY", None]

    def test_failed_save_does_not_notify(self, memory_store):
        seen = []
        memory_store.subscribe(seen.append)
        with pytest.raises(ValidationError):
            memory_store.save("")
        assert seen == []


class TestMask:
    def test_reveals_last_four(self):
        assert CredentialStore.mask("AIzaSyABCDEFGH1234") == "*" * 14 + "1234"

    def test_short_value_fully_masked(self):
        assert CredentialStore.mask("abcd") == "****"
        assert CredentialStore.mask("ab") == "**"

    def test_five_chars(self):
        assert CredentialStore.mask("abcde") == "*bcde"

    def test_empty(self):
        assert CredentialStore.mask("") == ""
        assert CredentialStore.mask(None) == ""

    def test_never_reveals_more_than_four(self):
        for value in ["x" * n + "SECRET" for n in range(10)]:
            masked = CredentialStore.mask(value)
            assert len(masked) == len(value)
            assert masked[:-4] == "*" * (len(value) - 4)


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_blank_values_are_not_usable(value):
    assert usable_credential(value) is None


def test_usable_value_returned_unchanged():
    assert usable_credential(" KEY ") == " KEY "
