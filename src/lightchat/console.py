"""Console driver: reads user lines, prints assistant replies.

``iter_user_input()`` turns the prompt/read cycle into a lazy iterator
that stops at end of input. ``run_chat()`` feeds it into a ChatSession.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lightchat.cli.formatting import format_reply, format_step

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rich.console import Console

    from lightchat.session.loop import ChatSession

logger = logging.getLogger(__name__)

USER_PROMPT = "User > "


def iter_user_input(console: Console, prompt: str = USER_PROMPT) -> Iterator[str]:
    """Yield one line of user input per prompt until the input ends.

    End of input (EOF) or Ctrl-C at the prompt ends the sequence.
    Whitespace-only lines are skipped.
    """
    while True:
        try:
            line = console.input(prompt, markup=False)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return
        if not line.strip():
            continue
        yield line


def run_chat(
    session: ChatSession,
    console: Console,
    *,
    lines: Iterable[str] | None = None,
    verbose: bool = False,
) -> int:
    """Run the read-eval-print loop until the input ends.

    Args:
        session: The chat session to drive.
        console: Where prompts and replies are written.
        lines: User lines to send. Defaults to reading from ``console``.
        verbose: Print each tool call as it completes.

    Returns:
        Number of user turns processed.
    """
    if verbose and session.config.on_step is None:
        session.config.on_step = lambda step: format_step(step, console)

    turns = 0
    for text in lines if lines is not None else iter_user_input(console):
        try:
            result = session.send(text)
        except KeyboardInterrupt:
            logger.info("Turn cancelled by user")
            result = session.record_error("Turn cancelled.")
        format_reply(result, console)
        turns += 1
    return turns
