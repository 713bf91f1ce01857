"""Chat session result and review models.

Provides ToolCallDecision, ToolCallReview, StepResult and TurnResult.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lightchat.models.history import ToolCall
    from lightchat.toolkit.models import ToolResult


class ToolCallDecision(str, enum.Enum):
    """Decision outcomes for a reviewed tool call."""

    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ToolCallReview:
    """Response from an ``approve_tool_call`` callback.

    Frozen: once a callback decides, the review is immutable.
    """

    decision: ToolCallDecision
    reason: str = ""


@dataclass(frozen=True)
class StepResult:
    """Result of a single tool call within a user turn.

    Frozen: step results are immutable records of what happened.
    """

    step: int
    tool_call: ToolCall
    result: ToolResult
    review_decision: str | None = None

    @property
    def success(self) -> bool:
        return self.result.success


@dataclass(frozen=True)
class TurnResult:
    """Final result of one user turn.

    Attributes:
        reply: Text shown to the user (the assistant reply, or the error
            message when the turn failed).
        steps: Every tool call executed or refused during the turn.
        failed: True if the turn ended with an error turn.
    """

    reply: str
    steps: list[StepResult] = field(default_factory=list)
    failed: bool = False
