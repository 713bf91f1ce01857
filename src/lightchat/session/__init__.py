"""Chat session package -- the conversational loop and its types.

Provides the ChatSession class, configuration, step/turn result types,
tool-call review models, and the console approval prompt.
"""

from lightchat.session.callbacks import make_console_prompt
from lightchat.session.config import SessionConfig, SessionState
from lightchat.session.loop import ChatSession
from lightchat.session.models import (
    StepResult,
    ToolCallDecision,
    ToolCallReview,
    TurnResult,
)

__all__ = [
    # Core
    "ChatSession",
    # Config
    "SessionConfig",
    "SessionState",
    # Models
    "StepResult",
    "ToolCallDecision",
    "ToolCallReview",
    "TurnResult",
    # Review callback
    "make_console_prompt",
]
