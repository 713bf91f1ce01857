"""Chat session configuration types.

Provides SessionState and SessionConfig for configuring the chat loop.

Tool invocation policy:
- ``auto_invoke_tools=True``: every requested tool call executes directly.
- ``auto_invoke_tools=False``: each call goes through the
  ``approve_tool_call`` callback; without a callback every call is rejected.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lightchat.config import ChatConfig
    from lightchat.models.history import ToolCall
    from lightchat.session.models import StepResult, ToolCallReview


class SessionState(str, enum.Enum):
    """States a chat session moves through while resolving one user turn."""

    AWAITING_USER_INPUT = "awaiting_user_input"
    MODEL_QUERY = "model_query"
    TOOL_DISPATCH = "tool_dispatch"


@dataclass
class SessionConfig:
    """Configuration for a chat session.

    Mutable dataclass -- callers may adjust settings between turns.

    Attributes:
        auto_invoke_tools: Execute requested tool calls without approval.
        max_tool_rounds: Maximum tool-dispatch rounds per user turn.
        system_prompt: Optional system turn placed at the start of history.
        model: LLM model identifier (None = client default).
        approve_tool_call: Review callback used when auto_invoke_tools is
            False. Takes a ToolCall, returns a ToolCallReview.
        on_step: Callback invoked after each tool call completes.
    """

    auto_invoke_tools: bool = True
    max_tool_rounds: int = 8
    system_prompt: str | None = None
    model: str | None = None
    approve_tool_call: Callable[[ToolCall], ToolCallReview] | None = None
    on_step: Callable[[StepResult], None] | None = None

    @classmethod
    def from_chat_config(cls, config: ChatConfig, **kwargs) -> SessionConfig:
        """Build session settings from a loaded ChatConfig.

        Keyword arguments set the remaining fields (e.g. callbacks).
        """
        return cls(
            auto_invoke_tools=config.auto_invoke_tools,
            max_tool_rounds=config.max_tool_rounds,
            system_prompt=config.system_prompt,
            model=config.model_id,
            **kwargs,
        )
