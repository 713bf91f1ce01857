"""lightchat: a console chat with a model that can switch the lights.

Wires an OpenAI-compatible chat-completion endpoint to a small in-memory
lights plugin and runs the conversation, dispatching the model's tool
calls along the way.
"""

from lightchat.config import ChatConfig, create_client, load_config
from lightchat.exceptions import (
    ConfigError,
    DuplicateFixtureError,
    LightChatError,
    SessionError,
)
from lightchat.models import ChatHistory, Fixture, Role, ToolCall, Turn
from lightchat.registry import LightRegistry
from lightchat.session import (
    ChatSession,
    SessionConfig,
    SessionState,
    StepResult,
    ToolCallDecision,
    ToolCallReview,
    TurnResult,
)
from lightchat.toolkit import ToolDefinition, ToolExecutor, ToolResult, get_light_tools

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "ChatConfig",
    "load_config",
    "create_client",
    # Errors
    "LightChatError",
    "ConfigError",
    "DuplicateFixtureError",
    "SessionError",
    # Models
    "Fixture",
    "ChatHistory",
    "Role",
    "ToolCall",
    "Turn",
    # Registry + tools
    "LightRegistry",
    "ToolDefinition",
    "ToolExecutor",
    "ToolResult",
    "get_light_tools",
    # Session
    "ChatSession",
    "SessionConfig",
    "SessionState",
    "StepResult",
    "ToolCallDecision",
    "ToolCallReview",
    "TurnResult",
]
