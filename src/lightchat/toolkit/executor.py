"""Runs tool calls against a fixed set of tool definitions.

``ToolExecutor.execute`` never raises: an unknown name, bad arguments
or a handler exception all come back as a failed ``ToolResult`` whose
error text is shown to the model.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from lightchat.toolkit.models import ToolResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lightchat.toolkit.models import ToolDefinition

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(map(str, err['loc'])) or 'arguments'}: {err['msg']}"
        for err in exc.errors()
    ]
    return "Invalid arguments: " + "; ".join(problems)


class ToolExecutor:
    """Name-indexed dispatcher over a list of ``ToolDefinition``.

    Usage::

        executor = ToolExecutor(get_light_tools(registry))
        result = executor.execute("change_state", {"id": 2, "isOn": True})
        print(result.to_content())
    """

    def __init__(self, tools: Iterable[ToolDefinition]) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    def execute(self, tool_name: str, arguments: dict | None) -> ToolResult:
        """Invoke ``tool_name`` with ``arguments``.

        ``None`` arguments are treated as an empty object. A successful
        result carries the handler's return value both raw (``value``)
        and JSON-encoded (``output``).
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            return self._failed(tool_name, f"Unknown tool: {tool_name}")

        arguments = {} if arguments is None else arguments
        if not isinstance(arguments, dict):
            return self._failed(tool_name, "Invalid arguments: expected an object")

        kwargs = dict(arguments)
        if tool.args_model is not None:
            try:
                kwargs = tool.args_model.model_validate(arguments).model_dump()
            except ValidationError as exc:
                return self._failed(tool_name, _describe_validation_error(exc))

        try:
            value = tool.handler(**kwargs)
            output = json.dumps(to_jsonable_python(value))
        except Exception as exc:
            logger.debug("Handler for %s raised", tool_name, exc_info=True)
            return self._failed(tool_name, f"{type(exc).__name__}: {exc}")

        logger.debug("%s(%s) -> %s", tool_name, kwargs, output)
        return ToolResult(tool_name=tool_name, success=True, output=output, value=value)

    @staticmethod
    def _failed(tool_name: str, error: str) -> ToolResult:
        logger.debug("%s failed: %s", tool_name, error)
        return ToolResult(tool_name=tool_name, success=False, error=error)

    def available_tools(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> list[dict]:
        """Definitions in the shape the ``tools`` request field expects."""
        return [tool.to_openai() for tool in self._tools.values()]

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools
