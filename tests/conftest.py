"""Shared test fixtures for lightchat.

Provides canned OpenAI-style responses, a scripted LLM client, a fresh
light registry, and environment isolation for configuration tests.
"""

from __future__ import annotations

import copy
import json

import pytest

from lightchat.config import ENV_VARS
from lightchat.registry import LightRegistry
from lightchat.session import ChatSession, SessionConfig
from lightchat.toolkit import get_light_tools


# ------------------------------------------------------------------
# Canned responses
# ------------------------------------------------------------------

def text_response(text: str = "Done.") -> dict:
    """LLM response with a plain assistant reply."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "gpt-5-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def tool_calls_response(calls: list[tuple[str, dict | str, str]], text: str | None = None) -> dict:
    """LLM response requesting tool calls.

    Args:
        calls: List of (tool_name, arguments, call_id) tuples. String
            arguments are sent verbatim (for malformed-JSON cases).
        text: Optional content alongside the calls.
    """
    tool_calls = [
        {
            "id": cid,
            "type": "function",
            "function": {
                "name": name,
                "arguments": args if isinstance(args, str) else json.dumps(args),
            },
        }
        for name, args, cid in calls
    ]
    return {
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text, "tool_calls": tool_calls},
                "finish_reason": "tool_calls",
            }
        ]
    }


def tool_call_response(name: str, arguments: dict | str, call_id: str = "call_1") -> dict:
    """LLM response with a single tool call."""
    return tool_calls_response([(name, arguments, call_id)])


class ScriptedLLM:
    """LLM client returning responses in sequence and recording each call.

    A response may be an exception instance (including KeyboardInterrupt),
    which is raised instead.
    The last response repeats once the script runs out.
    """

    def __init__(self, responses: list[dict | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    def chat(self, messages, *, model=None, temperature=None, max_tokens=None, **kwargs):
        self.calls.append({
            "messages": copy.deepcopy(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        })
        idx = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[idx]
        if isinstance(response, BaseException):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------

@pytest.fixture
def registry() -> LightRegistry:
    """A registry holding the three seeded lights."""
    return LightRegistry()


@pytest.fixture
def make_session(registry):
    """Factory building a ChatSession over ``registry`` with a scripted LLM."""

    def _make(responses: list[dict | Exception], **config_kwargs) -> tuple[ChatSession, ScriptedLLM]:
        llm = ScriptedLLM(responses)
        session = ChatSession(llm, get_light_tools(registry), SessionConfig(**config_kwargs))
        return session, llm

    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every lightchat variable from the environment.

    Variables added later (e.g. by load_dotenv) are removed on teardown.
    """
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
