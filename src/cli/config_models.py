"""Pydantic configuration models for Journal Coach."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LLMConfig(BaseModel):
    """Completion endpoint configuration. Sampling parameters are fixed in code."""

    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-pro"
    timeout: Optional[float] = None  # None = httpx default

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v}")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    credentials_file: Path = Path("~/coach/secrets.json")
    session_file: Path = Path("~/coach/session/journal_data.json")
    log_file: Path = Path("~/coach/coach.log")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.credentials_file = self.credentials_file.expanduser()
        self.session_file = self.session_file.expanduser()
        self.log_file = self.log_file.expanduser()
        return self


class CredentialsConfig(BaseModel):
    """At-rest encryption for the credentials file."""

    secret_key: Optional[str] = None  # Fernet key; None = plain JSON


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file_level: str = "DEBUG"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level", "file_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class CoachConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} pattern in the secret key."""
        key = self.credentials.secret_key
        if key and key.startswith("${") and key.endswith("}"):
            self.credentials.secret_key = os.getenv(key[2:-1]) or None
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "CoachConfig":
        """Create config from dict."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
