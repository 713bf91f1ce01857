"""HTTP clients for the chat completions endpoint.

Two flavours share one request path: ``OpenAIClient`` talks to any
OpenAI-compatible ``/chat/completions`` URL with a bearer token, and
``AzureOpenAIClient`` addresses an Azure deployment with an ``api-key``
header. Transient failures are retried through tenacity.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import tenacity

from lightchat.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_AZURE_API_VERSION = "2025-04-01-preview"

_TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})
_REJECTED_CREDENTIAL_STATUSES = frozenset({401, 403})
_MAX_BACKOFF_SECONDS = 30


def _is_retryable(exc: BaseException) -> bool:
    """Decide whether a failed request attempt should be repeated."""
    if isinstance(exc, LLMAuthError):
        return False
    if isinstance(exc, LLMRateLimitError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _TRANSIENT_STATUSES
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))


def _retry_after_seconds(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        # HTTP-date form is not supported
        return None


def _check_status(response: httpx.Response) -> None:
    """Translate error statuses into the LLM error hierarchy.

    Credential and rate-limit failures get their own exception types;
    anything else non-2xx surfaces as ``httpx.HTTPStatusError``.
    """
    status = response.status_code
    if status in _REJECTED_CREDENTIAL_STATUSES:
        raise LLMAuthError(f"Authentication failed: HTTP {status} - {response.text}")
    if status == 429:
        raise LLMRateLimitError(
            f"Rate limited: HTTP 429 - {response.text}",
            retry_after=_retry_after_seconds(response),
        )
    response.raise_for_status()


def _decode_completion(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError as exc:
        raise LLMResponseError(f"Response is not JSON: {response.text[:200]}") from exc
    if not isinstance(data, dict) or "choices" not in data:
        raise LLMResponseError(f"Unexpected response format: missing 'choices' key. Response: {data}")
    return data


class OpenAIClient:
    """Chat completions client for OpenAI-compatible services.

    Satisfies the ``LLMClient`` protocol. Use as a context manager, or
    call ``close()`` when done::

        with OpenAIClient(api_key="sk-...") as client:
            message = OpenAIClient.extract_message(client.chat(messages))
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        default_model: str = "gpt-5-mini",
        timeout: float = 60.0,
        max_retries: int = 3,
        backoff: float = 1.0,
    ) -> None:
        """
        Args:
            api_key: Credential sent with every request.
            base_url: Service root; ``/chat/completions`` is appended.
            default_model: Model used when ``chat()`` is not given one.
            timeout: Seconds allowed per HTTP attempt.
            max_retries: Total attempts, including the first.
            backoff: Base delay in seconds between attempts. 0 retries
                immediately.

        Raises:
            LLMConfigError: On an empty key or URL, or max_retries < 1.
        """
        if not api_key:
            raise LLMConfigError("No API key provided.")
        if not base_url:
            raise LLMConfigError("No base URL provided.")
        if max_retries < 1:
            raise LLMConfigError(f"max_retries must be >= 1, got {max_retries}")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._default_model = default_model
        self._max_retries = max_retries
        self._backoff = backoff
        self._client = httpx.Client(timeout=timeout, headers=self._build_headers())

    @property
    def default_model(self) -> str:
        return self._default_model

    def _build_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _completions_url(self, model: str) -> str:
        return f"{self._base_url}/chat/completions"

    def _retrying(self) -> tenacity.Retrying:
        backoff = self._backoff
        return tenacity.Retrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=backoff, min=backoff, max=_MAX_BACKOFF_SECONDS)
                + tenacity.wait_random(0, 2 * backoff)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Request one completion for ``messages``.

        Extra keyword arguments (``tools``, ``tool_choice`` and so on) are
        merged into the request body as-is.

        Returns:
            The decoded response body.

        Raises:
            LLMAuthError: Credentials rejected. Never retried.
            LLMRateLimitError: Still throttled after the last attempt.
            LLMResponseError: The body is not a completion.
            httpx.HTTPError: Any other HTTP or transport failure.
        """
        model = model or self._default_model
        body: dict[str, Any] = {"model": model, "messages": messages}
        if temperature is not None:
            body["temperature"] = temperature
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        body.update(kwargs)

        url = self._completions_url(model)
        return self._retrying()(self._post, url, body)

    def _post(self, url: str, body: dict[str, Any]) -> dict:
        logger.debug("POST %s (%d messages)", url, len(body["messages"]))
        response = self._client.post(url, json=body)
        _check_status(response)
        return _decode_completion(response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @staticmethod
    def extract_message(response: dict) -> dict:
        """Return ``choices[0].message`` of a completion.

        Raises:
            LLMResponseError: If there is no such message object.
        """
        try:
            message = response["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMResponseError(
                f"Cannot extract message from response: {exc}. Response: {response}"
            ) from exc
        if not isinstance(message, dict):
            raise LLMResponseError(f"Message is not an object: {message!r}")
        return message


class AzureOpenAIClient(OpenAIClient):
    """Chat completions client for an Azure OpenAI deployment.

    The model id names the deployment::

        POST {endpoint}/openai/deployments/{model}/chat/completions?api-version=...
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        default_model: str = "gpt-5-mini",
        api_version: str = DEFAULT_AZURE_API_VERSION,
        timeout: float = 60.0,
        max_retries: int = 3,
        backoff: float = 1.0,
    ) -> None:
        if not endpoint:
            raise LLMConfigError("No Azure OpenAI endpoint provided.")
        self._api_version = api_version
        super().__init__(
            api_key=api_key,
            base_url=endpoint,
            default_model=default_model,
            timeout=timeout,
            max_retries=max_retries,
            backoff=backoff,
        )

    def _build_headers(self) -> dict[str, str]:
        return {"api-key": self._api_key}

    def _completions_url(self, model: str) -> str:
        return (
            f"{self._base_url}/openai/deployments/{model}/chat/completions"
            f"?api-version={self._api_version}"
        )
