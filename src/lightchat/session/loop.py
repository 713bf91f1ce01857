"""Core chat session loop.

Provides the ChatSession class that resolves one user turn at a time:
send history and tool schemas to the LLM, execute any tool calls it
requests, feed the results back, and repeat until the LLM answers with
text.

Tool-level failures (unknown tool, bad arguments, rejected call) are
reported to the model as tool turns. Service-level failures (network,
auth, rate limits after retries) end the turn with an error turn that is
shown to the user. Nothing raised by the model or the tools escapes
``send()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from lightchat.exceptions import SessionError
from lightchat.llm.client import OpenAIClient
from lightchat.llm.errors import LLMClientError, LLMResponseError
from lightchat.models.history import ChatHistory, ToolCall
from lightchat.session.config import SessionConfig, SessionState
from lightchat.session.models import (
    StepResult,
    ToolCallDecision,
    TurnResult,
)
from lightchat.toolkit.executor import ToolExecutor
from lightchat.toolkit.models import ToolResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lightchat.config import ChatConfig
    from lightchat.llm.protocols import LLMClient
    from lightchat.registry import LightRegistry
    from lightchat.toolkit.models import ToolDefinition

logger = logging.getLogger(__name__)


def _message_text(message: dict) -> str:
    """Return the assistant text of ``message``.

    Content may be a string, null, or a list of content parts, in which
    case the text parts are joined.

    Raises:
        LLMResponseError: If the content has any other shape.
    """
    content = message.get("content")
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list) and all(isinstance(part, dict) for part in content):
        return "".join(
            str(part.get("text") or "") for part in content if part.get("type") == "text"
        )
    raise LLMResponseError(f"Unsupported message content: {content!r}")


class ChatSession:
    """A conversation with an LLM that can call the lights tools.

    The session holds the append-only history. Each ``send()`` appends the
    user turn, then any tool-call and tool-result turns, then exactly one
    assistant turn (a reply or an error).

    Usage::

        registry = LightRegistry()
        session = ChatSession(client, get_light_tools(registry))
        result = session.send("Turn on the porch light")
        print(result.reply)
    """

    def __init__(
        self,
        client: LLMClient,
        tools: Iterable[ToolDefinition],
        config: SessionConfig | None = None,
    ) -> None:
        self._client = client
        self._executor = ToolExecutor(tools)
        self._config = config or SessionConfig()
        self._history = ChatHistory()
        self._state = SessionState.AWAITING_USER_INPUT
        if self._config.system_prompt:
            self._history.add_system(self._config.system_prompt)

    @classmethod
    def from_config(
        cls,
        config: ChatConfig,
        *,
        client: LLMClient | None = None,
        registry: LightRegistry | None = None,
        **session_kwargs: Any,
    ) -> ChatSession:
        """Build a session over the lights plugin from a loaded ChatConfig.

        Args:
            config: Loaded configuration.
            client: LLM client. Defaults to ``create_client(config)``.
            registry: Light registry. Defaults to the seeded registry.
            **session_kwargs: Extra SessionConfig fields (e.g. on_step).
        """
        from lightchat.config import create_client
        from lightchat.registry import LightRegistry as _LightRegistry
        from lightchat.toolkit.definitions import get_light_tools

        return cls(
            client if client is not None else create_client(config),
            get_light_tools(registry if registry is not None else _LightRegistry()),
            SessionConfig.from_chat_config(config, **session_kwargs),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Return the current session state."""
        return self._state

    @property
    def history(self) -> ChatHistory:
        """The conversation so far."""
        return self._history

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def executor(self) -> ToolExecutor:
        return self._executor

    def send(self, text: str) -> TurnResult:
        """Resolve one user turn.

        Args:
            text: The user's message.

        Returns:
            TurnResult with the reply to show and the tool steps taken.

        Raises:
            SessionError: If called while another turn is in progress.
        """
        if self._state != SessionState.AWAITING_USER_INPUT:
            raise SessionError(f"Cannot accept input in state {self._state.value}")
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")

        self._history.add_user(text)
        steps: list[StepResult] = []
        pending: list[ToolCall] = []
        max_rounds = self._config.max_tool_rounds

        try:
            for round_idx in range(max_rounds + 1):
                self._state = SessionState.MODEL_QUERY
                try:
                    message = self._query_model()
                    content = _message_text(message)
                    tool_calls = self._extract_tool_calls(message)
                except (LLMClientError, httpx.HTTPError) as exc:
                    logger.warning("Model query failed: %s", exc)
                    return self._fail(f"Error: {exc}", steps)

                if not tool_calls:
                    self._history.add_assistant(content)
                    return TurnResult(reply=content, steps=steps)

                if round_idx == max_rounds:
                    break

                self._state = SessionState.TOOL_DISPATCH
                self._history.add_tool_calls(tool_calls, content=content)
                pending = list(tool_calls)
                while pending:
                    tc = pending[0]
                    step_result = self._dispatch(tc, len(steps) + 1)
                    pending.pop(0)
                    self._history.add_tool_result(tc, step_result.result.to_content())
                    steps.append(step_result)
                    self._notify_step(step_result)

            return self._fail(
                f"Error: no reply after {max_rounds} tool round(s).", steps
            )
        except KeyboardInterrupt:
            # Every tool-call turn must be answered before the history is
            # sent again.
            for tc in pending:
                self._history.add_tool_result(tc, "Error: cancelled")
            raise
        finally:
            self._state = SessionState.AWAITING_USER_INPUT

    def record_error(self, message: str) -> TurnResult:
        """Close the current exchange with an error turn shown to the user.

        Used by callers that abort a turn from outside, e.g. on Ctrl-C.
        """
        if self._state != SessionState.AWAITING_USER_INPUT:
            raise SessionError(f"Cannot record an error in state {self._state.value}")
        return self._fail(message, [])

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _fail(self, message: str, steps: list[StepResult]) -> TurnResult:
        self._history.add_error(message)
        return TurnResult(reply=message, steps=steps, failed=True)

    def _query_model(self) -> dict:
        """Send the history and tool schemas to the LLM.

        Returns:
            The first choice's message dict.
        """
        kwargs: dict[str, Any] = {}
        schemas = self._executor.schemas()
        if schemas:
            kwargs["tools"] = schemas
            kwargs["tool_choice"] = "auto"
        if self._config.model:
            kwargs["model"] = self._config.model

        response = self._client.chat(self._history.to_messages(), **kwargs)
        return OpenAIClient.extract_message(response)

    def _extract_tool_calls(self, message: dict) -> list[ToolCall]:
        """Parse the tool calls of an OpenAI-format message, in order."""
        raw_calls = message.get("tool_calls") or []
        if not isinstance(raw_calls, list):
            raise LLMResponseError(f"tool_calls is not a list: {raw_calls!r}")
        result: list[ToolCall] = []
        for raw in raw_calls:
            if not isinstance(raw, dict):
                logger.warning("Ignoring malformed tool call: %r", raw)
                continue
            tc = ToolCall.from_openai(raw)
            if tc.parse_error:
                logger.warning("Tool call %s for %s: %s", tc.id, tc.name, tc.parse_error)
            result.append(tc)
        return result

    def _dispatch(self, tc: ToolCall, step_num: int) -> StepResult:
        """Execute one tool call, honoring the invocation policy."""
        if tc.parse_error:
            return StepResult(
                step=step_num,
                tool_call=tc,
                result=ToolResult(tool_name=tc.name, success=False, error=tc.parse_error),
            )

        if self._config.auto_invoke_tools:
            return StepResult(
                step=step_num,
                tool_call=tc,
                result=self._executor.execute(tc.name, tc.arguments),
            )

        return self._dispatch_reviewed(tc, step_num)

    def _dispatch_reviewed(self, tc: ToolCall, step_num: int) -> StepResult:
        """Ask the approval callback before executing a tool call."""
        callback = self._config.approve_tool_call
        if callback is None:
            return self._rejected(tc, step_num, "tool calls require approval")

        try:
            review = callback(tc)
        except Exception as exc:
            logger.debug("approve_tool_call callback error: %s", exc, exc_info=True)
            return self._rejected(tc, step_num, f"approval callback error: {exc}")

        if review.decision == ToolCallDecision.APPROVED:
            return StepResult(
                step=step_num,
                tool_call=tc,
                result=self._executor.execute(tc.name, tc.arguments),
                review_decision=ToolCallDecision.APPROVED.value,
            )

        return self._rejected(tc, step_num, review.reason or "rejected by user")

    @staticmethod
    def _rejected(tc: ToolCall, step_num: int, reason: str) -> StepResult:
        return StepResult(
            step=step_num,
            tool_call=tc,
            result=ToolResult(tool_name=tc.name, success=False, error=f"Rejected: {reason}"),
            review_decision=ToolCallDecision.REJECTED.value,
        )

    def _notify_step(self, step_result: StepResult) -> None:
        if self._config.on_step is None:
            return
        try:
            self._config.on_step(step_result)
        except Exception:
            logger.debug("on_step callback error", exc_info=True)
