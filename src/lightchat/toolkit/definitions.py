"""Tool definitions for the lights plugin.

Each tool exposes one LightRegistry operation as a named, described,
JSON-Schema-typed function. ``get_light_tools()`` is the factory that
binds the tools to a specific registry instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

from lightchat.toolkit.models import ToolDefinition

if TYPE_CHECKING:
    from lightchat.models.fixture import Fixture
    from lightchat.registry import LightRegistry


class GetLightsArgs(BaseModel):
    """get_lights takes no arguments."""

    model_config = ConfigDict(extra="forbid")


class ChangeStateArgs(BaseModel):
    """Arguments for change_state."""

    model_config = ConfigDict(extra="forbid")

    id: int
    isOn: bool

    @field_validator("id", mode="before")
    @classmethod
    def _id_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value


def _make_get_lights(registry: LightRegistry) -> ToolDefinition:
    def handler() -> list[Fixture]:
        return registry.list_fixtures()

    return ToolDefinition(
        name="get_lights",
        description="Get a list of lights and their current state",
        parameters={
            "type": "object",
            "properties": {},
            "required": [],
        },
        handler=handler,
        args_model=GetLightsArgs,
    )


def _make_change_state(registry: LightRegistry) -> ToolDefinition:
    def handler(id: int, isOn: bool) -> Fixture | None:  # noqa: A002, N803
        return registry.set_fixture_state(id, isOn)

    return ToolDefinition(
        name="change_state",
        description="Changes the state of the light",
        parameters={
            "type": "object",
            "properties": {
                "id": {
                    "type": "integer",
                    "description": "Id of the light to change.",
                },
                "isOn": {
                    "type": "boolean",
                    "description": "True to switch the light on, false to switch it off.",
                },
            },
            "required": ["id", "isOn"],
        },
        handler=handler,
        args_model=ChangeStateArgs,
    )


def get_light_tools(registry: LightRegistry) -> list[ToolDefinition]:
    """Build the lights plugin tools bound to ``registry``.

    Args:
        registry: The registry the tools read and mutate.

    Returns:
        List of ToolDefinition instances (get_lights, change_state).
    """
    return [
        _make_get_lights(registry),
        _make_change_state(registry),
    ]
