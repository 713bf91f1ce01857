"""Lights toolkit: LLM-consumable tool definitions for the light registry.

Provides tool definitions, a factory binding them to a registry, and an
executor that dispatches model tool calls by name.
"""

from lightchat.toolkit.definitions import ChangeStateArgs, GetLightsArgs, get_light_tools
from lightchat.toolkit.executor import ToolExecutor
from lightchat.toolkit.models import ToolDefinition, ToolResult

__all__ = [
    "ToolDefinition",
    "ToolResult",
    "ToolExecutor",
    "GetLightsArgs",
    "ChangeStateArgs",
    "get_light_tools",
]
