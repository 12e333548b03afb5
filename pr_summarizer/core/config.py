"""Application configuration.

All secrets must be supplied via environment variables. When running as a
GitHub Action, inputs arrive as ``INPUT_<NAME>`` variables (name upper-cased,
hyphens kept); every field also accepts a plain variable for local runs. This
module intentionally avoids printing secret values.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROVIDER = "openai"


class AppSettings(BaseSettings):
    """Settings for a single summarizer run."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # GitHub auth
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"),
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL"),
    )

    # Actions runtime context
    github_event_path: str | None = Field(
        default=None, validation_alias=AliasChoices("GITHUB_EVENT_PATH")
    )
    github_event_name: str | None = Field(
        default=None, validation_alias=AliasChoices("GITHUB_EVENT_NAME")
    )
    github_repository: str | None = Field(
        default=None, validation_alias=AliasChoices("GITHUB_REPOSITORY")
    )

    # Provider
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_OPENAI-API-KEY", "OPENAI_API_KEY"),
    )
    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_ANTHROPIC-API-KEY", "ANTHROPIC_API_KEY"),
    )
    llm_provider: str = Field(
        default=DEFAULT_PROVIDER,
        validation_alias=AliasChoices("INPUT_MODEL-PROVIDER", "MODEL_PROVIDER"),
    )
    # None means "use the selected provider's default model".
    llm_model: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_MODEL", "MODEL"),
    )

    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))

    @field_validator(
        "github_token",
        "github_event_path",
        "github_event_name",
        "github_repository",
        "openai_api_key",
        "anthropic_api_key",
        "llm_model",
        mode="before",
    )
    @classmethod
    def _normalize_env_string(cls, value: Any) -> Any:
        """Normalizes env var strings.

        Docker's `--env-file` does not strip quotes, and Actions passes unset
        optional inputs as empty strings. We trim whitespace, strip a single
        pair of surrounding quotes and map empty values to None.
        """

        if value is None or not isinstance(value, str):
            return value
        text = value.strip()
        if len(text) >= 2 and ((text[0] == text[-1] == '"') or (text[0] == text[-1] == "'")):
            text = text[1:-1].strip()
        return text or None

    @field_validator("llm_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_PROVIDER
        if not isinstance(value, str):
            return value
        return value.strip().lower() or DEFAULT_PROVIDER

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return value.strip().upper() or "INFO"
