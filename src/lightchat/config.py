"""Configuration for lightchat.

ChatConfig holds the model endpoint, credential and session settings.
``load_config()`` reads them from the environment, after loading a local
``.env`` file with python-dotenv. Missing or invalid required settings
raise ConfigError, which is fatal at startup.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from lightchat.exceptions import ConfigError
from lightchat.llm.client import DEFAULT_AZURE_API_VERSION, AzureOpenAIClient, OpenAIClient

if TYPE_CHECKING:
    from lightchat.llm.protocols import LLMClient

logger = logging.getLogger(__name__)

# Environment variable -> ChatConfig field
ENV_VARS: dict[str, str] = {
    "AZURE_OPENAI_MODEL_ID": "model_id",
    "AZURE_OPENAI_ENDPOINT": "endpoint",
    "AZURE_OPENAI_API_KEY": "api_key",
    "AZURE_OPENAI_API_VERSION": "api_version",
    "LIGHTCHAT_PROVIDER": "provider",
    "LIGHTCHAT_AUTO_INVOKE_TOOLS": "auto_invoke_tools",
    "LIGHTCHAT_MAX_TOOL_ROUNDS": "max_tool_rounds",
    "LIGHTCHAT_TIMEOUT": "request_timeout",
    "LIGHTCHAT_MAX_RETRIES": "max_retries",
    "LIGHTCHAT_SYSTEM_PROMPT": "system_prompt",
    "LIGHTCHAT_LOG_LEVEL": "log_level",
}

_FIELD_TO_ENV = {v: k for k, v in ENV_VARS.items()}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ChatConfig(BaseModel):
    """Settings for one lightchat process."""

    endpoint: str
    api_key: str
    model_id: str = "gpt-5-mini"
    api_version: str = DEFAULT_AZURE_API_VERSION
    provider: Literal["azure", "openai"] = "azure"
    auto_invoke_tools: bool = True
    max_tool_rounds: int = 8
    request_timeout: float = 60.0
    max_retries: int = 3
    system_prompt: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("endpoint", "api_key", "model_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("provider", mode="before")
    @classmethod
    def _lower_provider(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @field_validator("max_tool_rounds", "max_retries")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be >= 1")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be > 0")
        return value

    @field_validator("system_prompt")
    @classmethod
    def _blank_prompt_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


def _load_env_file(env_file: str | os.PathLike[str] | None) -> None:
    if env_file is not None:
        if not os.path.isfile(env_file):
            raise ConfigError(f"Environment file not found: {env_file}")
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment file %s", env_file)
        return

    found = find_dotenv(usecwd=True)
    if found:
        load_dotenv(found, override=False)
        logger.debug("Loaded environment file %s", found)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field_name = str(err["loc"][0]) if err.get("loc") else "config"
        env_name = _FIELD_TO_ENV.get(field_name)
        label = f"{env_name} ({field_name})" if env_name else field_name
        if err.get("type") == "missing":
            problems.append(f"{label} is required")
        else:
            problems.append(f"{label}: {err.get('msg', 'invalid')}")
    return "Invalid configuration: " + "; ".join(problems)


def load_config(
    env_file: str | os.PathLike[str] | None = None,
    **overrides: Any,
) -> ChatConfig:
    """Build a ChatConfig from the environment.

    Variables already set in the process environment take precedence over
    the ``.env`` file. Keyword overrides (e.g. from CLI flags) take
    precedence over both; None overrides are ignored.

    Args:
        env_file: Explicit ``.env`` path. When omitted, the nearest ``.env``
            found walking up from the current directory is used, if any.
        **overrides: ChatConfig field values.

    Returns:
        A validated ChatConfig.

    Raises:
        ConfigError: If the endpoint or API key is missing, or any value
            is invalid.
    """
    _load_env_file(env_file)

    values: dict[str, Any] = {}
    for env_name, field_name in ENV_VARS.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw != "":
            values[field_name] = raw
        elif raw == "" and field_name in ("endpoint", "api_key"):
            values[field_name] = raw
    for key, value in overrides.items():
        if key not in ChatConfig.model_fields:
            raise ConfigError(f"Unknown configuration field: {key}")
        if value is not None:
            values[key] = value

    try:
        return ChatConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from None


def create_client(config: ChatConfig) -> LLMClient:
    """Create the model client described by ``config``."""
    if config.provider == "openai":
        return OpenAIClient(
            api_key=config.api_key,
            base_url=config.endpoint,
            default_model=config.model_id,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )
    return AzureOpenAIClient(
        endpoint=config.endpoint,
        api_key=config.api_key,
        default_model=config.model_id,
        api_version=config.api_version,
        timeout=config.request_timeout,
        max_retries=config.max_retries,
    )
