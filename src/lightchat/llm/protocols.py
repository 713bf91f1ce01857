"""Structural type for anything that can answer a chat session."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LLMClient(Protocol):
    """What a ChatSession needs from a model backend.

    ``chat`` takes OpenAI-format messages and returns an OpenAI-format
    completion dict. Test doubles only need these two methods.
    """

    def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict: ...

    def close(self) -> None: ...
