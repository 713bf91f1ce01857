"""Interactive tool-call approval for manual invocation mode."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from lightchat.session.models import ToolCallDecision, ToolCallReview

if TYPE_CHECKING:
    from rich.console import Console

    from lightchat.models.history import ToolCall


def make_console_prompt(console: Console):
    """Create a callback that asks the user on ``console`` to approve each call.

    Answering anything other than "y"/"yes" rejects the call. End of input
    rejects as well.
    """
    from rich.markup import escape

    def prompt(tool_call: ToolCall) -> ToolCallReview:
        args = json.dumps(tool_call.arguments, sort_keys=True)
        console.print(
            f"[bold yellow]Tool call[/bold yellow] {escape(tool_call.name)} {escape(args)}"
        )
        try:
            answer = console.input("Run it? [y/N] > ", markup=False)
        except EOFError:
            answer = ""
        if answer.strip().lower() in ("y", "yes"):
            return ToolCallReview(decision=ToolCallDecision.APPROVED)
        return ToolCallReview(decision=ToolCallDecision.REJECTED, reason="Rejected by user")

    return prompt
