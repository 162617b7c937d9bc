"""Shared CLI utilities."""

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components():
    """Initialize config-backed components.

    Returns dict with config, credentials store and session journal.
    """
    from cli.config import load_config_model
    from credentials import CredentialStore, FileBackend
    from journal import SessionJournal

    config = load_config_model()
    backend = FileBackend(config.paths.credentials_file, secret_key=config.credentials.secret_key)

    return {
        "config": config,
        "credentials": CredentialStore(backend),
        "session": SessionJournal(config.paths.session_file),
    }


def make_client(config):
    """Build the completion client from config."""
    from llm import CompletionClient

    return CompletionClient(
        base_url=config.llm.base_url,
        model=config.llm.model,
        timeout=config.llm.timeout,
    )
