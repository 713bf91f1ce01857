"""Model backends: HTTP clients, the client protocol and their errors."""

from lightchat.llm.client import AzureOpenAIClient, OpenAIClient
from lightchat.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from lightchat.llm.protocols import LLMClient

__all__ = [
    "AzureOpenAIClient",
    "LLMAuthError",
    "LLMClient",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMResponseError",
    "OpenAIClient",
]
