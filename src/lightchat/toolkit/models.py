"""Tool definitions and tool execution results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import BaseModel


@dataclass(frozen=True)
class ToolDefinition:
    """A callable the model may invoke by name.

    ``parameters`` is the JSON Schema advertised to the model. When
    ``args_model`` is set, incoming arguments are validated through it and
    the handler receives the validated fields as keyword arguments.
    """

    name: str
    description: str
    parameters: dict
    handler: Callable[..., object]
    args_model: type[BaseModel] | None = field(default=None, compare=False)

    def to_openai(self) -> dict:
        function = {"name": self.name, "description": self.description, "parameters": self.parameters}
        return {"type": "function", "function": function}


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation.

    On success ``output`` holds the JSON text of ``value``; on failure
    ``error`` says what went wrong.
    """

    tool_name: str
    success: bool
    output: str = ""
    error: str = ""
    value: object = field(default=None, compare=False)

    def to_content(self) -> str:
        if self.success:
            return self.output
        return f"Error: {self.error}"
