"""Runtime configuration.

Settings come from ``HEAVENGPT_*`` environment variables (the CLI loads
``.env`` first); command-line values are passed in as overrides.

Environment variables:
    HEAVENGPT_BASE_URL: Server base URL (default: https://heaven-gpt.haseebmir.repl.co)
    HEAVENGPT_MODEL: Model identifier (default: gpt-3.5-turbo)
    HEAVENGPT_TEMPERATURE: Sampling temperature, 0-2 (default: 0.1)
    HEAVENGPT_MAX_TOKENS: Maximum tokens to generate (default: 2048)
    HEAVENGPT_SYSTEM_PROMPT: Override for the system instruction
    HEAVENGPT_INCLUDE_HISTORY: Forward prior turns (default: false)
    HEAVENGPT_HISTORY_LIMIT: Prior messages forwarded when enabled (default: 10)
    HEAVENGPT_TIMEOUT: Request timeout in seconds (default: 60)
    HEAVENGPT_LOG_FILE: Diagnostic log path (default: ~/.heavengpt/heavengpt.log)

Empty variables count as unset.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .chat.builder import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TEMPERATURE
from .chat.http import DEFAULT_TIMEOUT
from .diagnostics import DEFAULT_LOG_FILE

DEFAULT_BASE_URL = "https://heaven-gpt.haseebmir.repl.co"

ENV_PREFIX = "HEAVENGPT_"


class ConfigError(ValueError):
    """Raised when a setting has an unusable value."""


class ChatConfig(BaseSettings):
    """Settings for the chat client."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        frozen=True,
    )

    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    system_prompt: str | None = None
    include_history: bool = False
    history_limit: int = Field(default=10, ge=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    log_file: Path = DEFAULT_LOG_FILE

    @field_validator("system_prompt")
    @classmethod
    def _blank_prompt_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


def load_config(**overrides: Any) -> ChatConfig:
    """Build a ChatConfig from the environment.

    Args:
        **overrides: Values that win over the environment; None is ignored

    Returns:
        Validated configuration

    Raises:
        ConfigError: If a value cannot be parsed or is out of range
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ChatConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{ENV_PREFIX}{str(err['loc'][0]).upper()}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e
