"""Tests for session config, result models, and review callbacks."""

from __future__ import annotations

import dataclasses
import io

import pytest
from rich.console import Console

from lightchat.config import ChatConfig
from lightchat.models.history import ToolCall
from lightchat.session import (
    SessionConfig,
    SessionState,
    StepResult,
    ToolCallDecision,
    ToolCallReview,
    TurnResult,
    make_console_prompt,
)
from lightchat.toolkit import ToolResult


@pytest.fixture()
def sample_tool_call() -> ToolCall:
    return ToolCall(id="tc-1", name="change_state", arguments={"id": 2, "isOn": True})


class TestEnums:
    def test_session_state_values(self) -> None:
        assert SessionState.AWAITING_USER_INPUT == "awaiting_user_input"
        assert SessionState.MODEL_QUERY == "model_query"
        assert SessionState.TOOL_DISPATCH == "tool_dispatch"

    def test_decision_values(self) -> None:
        assert ToolCallDecision.APPROVED == "approved"
        assert ToolCallDecision.REJECTED == "rejected"


class TestSessionConfig:
    def test_defaults(self) -> None:
        config = SessionConfig()
        assert config.auto_invoke_tools is True
        assert config.max_tool_rounds == 8
        assert config.approve_tool_call is None

    def test_from_chat_config(self) -> None:
        chat = ChatConfig(
            endpoint="https://x", api_key="k", model_id="m", auto_invoke_tools=False
        )
        config = SessionConfig.from_chat_config(chat, on_step=print)
        assert config.model == "m"
        assert config.auto_invoke_tools is False
        assert config.on_step is print


class TestResultModels:
    def test_step_result_frozen(self, sample_tool_call) -> None:
        step = StepResult(
            step=1,
            tool_call=sample_tool_call,
            result=ToolResult(tool_name="change_state", success=True, output="{}"),
        )
        assert step.success
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.step = 2  # type: ignore[misc]

    def test_turn_result_counts(self, sample_tool_call) -> None:
        step = StepResult(
            step=1,
            tool_call=sample_tool_call,
            result=ToolResult(tool_name="change_state", success=False, error="x"),
        )
        result = TurnResult(reply="hi", steps=[step])
        assert len(result.steps) == 1
        assert not result.failed
        assert not step.success

    def test_review_reason_defaults_empty(self) -> None:
        review = ToolCallReview(decision=ToolCallDecision.REJECTED)
        assert review.reason == ""


class TestConsolePrompt:
    @pytest.mark.parametrize(
        "answer,decision",
        [
            ("y\n", ToolCallDecision.APPROVED),
            ("YES\n", ToolCallDecision.APPROVED),
            ("n\n", ToolCallDecision.REJECTED),
            ("\n", ToolCallDecision.REJECTED),
        ],
    )
    def test_console_prompt(self, sample_tool_call, monkeypatch, answer, decision) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(answer))
        out = io.StringIO()
        prompt = make_console_prompt(Console(file=out, soft_wrap=True))

        assert prompt(sample_tool_call).decision == decision
        assert "change_state" in out.getvalue()

    def test_console_prompt_eof_rejects(self, sample_tool_call, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        prompt = make_console_prompt(Console(file=io.StringIO()))
        assert prompt(sample_tool_call).decision == ToolCallDecision.REJECTED
