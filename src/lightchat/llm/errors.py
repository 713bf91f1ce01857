"""Errors raised by the model clients."""

from __future__ import annotations

from lightchat.exceptions import LightChatError


class LLMClientError(LightChatError):
    """A request to the model service could not produce a completion."""


class LLMConfigError(LLMClientError):
    """The client was constructed with unusable settings."""


class LLMRateLimitError(LLMClientError):
    """HTTP 429 from the service.

    ``retry_after`` carries the server's Retry-After hint in seconds when
    one was sent.
    """

    def __init__(self, message: str = "Rate limited", retry_after: float | None = None) -> None:
        if retry_after is not None:
            message += f" (retry after {retry_after}s)"
        super().__init__(message)
        self.retry_after = retry_after


class LLMAuthError(LLMClientError):
    """Credentials were refused (HTTP 401 or 403)."""


class LLMResponseError(LLMClientError):
    """The service answered with something that is not a completion."""
