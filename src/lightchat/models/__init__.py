"""Data models: fixtures and conversation history."""

from lightchat.models.fixture import SEED_FIXTURES, Fixture, seed_fixtures
from lightchat.models.history import ChatHistory, Role, ToolCall, Turn

__all__ = [
    "Fixture",
    "SEED_FIXTURES",
    "seed_fixtures",
    "ChatHistory",
    "Role",
    "ToolCall",
    "Turn",
]
