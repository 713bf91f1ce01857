"""Conversation history models.

Provides the ToolCall request parsed from model responses, the immutable
Turn record, and ChatHistory -- an append-only, ordered turn log that
renders itself as OpenAI chat messages.
"""

from __future__ import annotations

import enum
import json as _json
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator


class Role(str, enum.Enum):
    """Author of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model.

    Arguments are parsed from OpenAI's JSON string at ingestion time.
    When the payload is not a JSON object, ``arguments`` is empty and
    ``parse_error`` describes the problem; ``raw_arguments`` keeps the
    original text so the call can be echoed back to the model verbatim.
    """

    id: str
    name: str
    arguments: dict = field(default_factory=dict)
    type: str = "function"
    parse_error: str | None = None
    raw_arguments: str | None = None

    @classmethod
    def from_openai(cls, tc: dict) -> ToolCall:
        """Parse from OpenAI/compatible format.

        Some providers send arguments as a dict rather than a JSON string.
        A ``function`` that is not an object yields a call carrying a
        ``parse_error``.
        """
        call_id = tc.get("id") or f"call_{uuid.uuid4().hex[:8]}"
        func = tc.get("function") or {}
        if not isinstance(func, dict):
            return cls(
                id=call_id,
                name="",
                type=tc.get("type", "function"),
                parse_error="Tool call function must be an object",
            )
        name = func.get("name") or ""
        raw_args = func.get("arguments")

        if raw_args is None or raw_args == "":
            return cls(id=call_id, name=name, type=tc.get("type", "function"))
        if isinstance(raw_args, dict):
            return cls(id=call_id, name=name, arguments=raw_args, type=tc.get("type", "function"))

        try:
            arguments = _json.loads(raw_args)
        except (_json.JSONDecodeError, TypeError) as exc:
            return cls(
                id=call_id,
                name=name,
                type=tc.get("type", "function"),
                parse_error=f"Malformed JSON arguments: {exc}",
                raw_arguments=str(raw_args),
            )
        if not isinstance(arguments, dict):
            return cls(
                id=call_id,
                name=name,
                type=tc.get("type", "function"),
                parse_error="Arguments must be a JSON object",
                raw_arguments=str(raw_args),
            )
        return cls(id=call_id, name=name, arguments=arguments, type=tc.get("type", "function"))

    def to_openai(self) -> dict:
        """Serialize to OpenAI wire format."""
        arguments = self.raw_arguments if self.raw_arguments is not None else _json.dumps(self.arguments)
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": arguments},
        }


@dataclass(frozen=True)
class Turn:
    """One entry in the conversation history.

    Attributes:
        role: Who authored the turn.
        content: Text content (may be empty for a tool-call turn).
        tool_calls: Tool calls requested by the assistant in this turn.
        tool_call_id: For tool turns, the id of the call being answered.
        name: For tool turns, the name of the tool that produced the result.
        is_error: True for assistant turns that report a failure to the
            user. Error turns are never sent back to the model.
    """

    role: Role
    content: str = ""
    tool_calls: tuple[ToolCall, ...] = ()
    tool_call_id: str | None = None
    name: str | None = None
    is_error: bool = False

    def to_message(self) -> dict[str, Any]:
        """Render as an OpenAI chat message dict."""
        msg: dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            msg["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
            if not self.content:
                msg["content"] = None
        if self.role == Role.TOOL:
            msg["tool_call_id"] = self.tool_call_id
        return msg


class ChatHistory:
    """Ordered, append-only log of conversation turns.

    Turns cannot be removed, replaced or inserted. Readers get
    iteration, indexing and tuple snapshots only.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    def append(self, turn: Turn) -> Turn:
        if not isinstance(turn, Turn):
            raise TypeError(f"Expected Turn, got {type(turn).__name__}")
        self._turns.append(turn)
        return turn

    def add_system(self, content: str) -> Turn:
        return self.append(Turn(role=Role.SYSTEM, content=content))

    def add_user(self, content: str) -> Turn:
        return self.append(Turn(role=Role.USER, content=content))

    def add_assistant(self, content: str) -> Turn:
        return self.append(Turn(role=Role.ASSISTANT, content=content))

    def add_error(self, content: str) -> Turn:
        return self.append(Turn(role=Role.ASSISTANT, content=content, is_error=True))

    def add_tool_calls(self, tool_calls: list[ToolCall], content: str = "") -> Turn:
        return self.append(
            Turn(role=Role.ASSISTANT, content=content, tool_calls=tuple(tool_calls))
        )

    def add_tool_result(self, tool_call: ToolCall, content: str) -> Turn:
        return self.append(
            Turn(
                role=Role.TOOL,
                content=content,
                tool_call_id=tool_call.id,
                name=tool_call.name,
            )
        )

    @property
    def turns(self) -> tuple[Turn, ...]:
        """Snapshot of all turns in chronological order."""
        return tuple(self._turns)

    def to_messages(self) -> list[dict[str, Any]]:
        """Render the history as OpenAI messages, skipping error turns."""
        return [t.to_message() for t in self._turns if not t.is_error]

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def __repr__(self) -> str:
        return f"ChatHistory(turns={len(self._turns)})"
