"""lightchat CLI -- chat with a model that can switch the lights.

This module is NEVER imported from lightchat/__init__.py.
It is only loaded via the ``lightchat`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
import os
from contextlib import closing

import click
from rich.console import Console
from rich.logging import RichHandler

from lightchat.cli.formatting import format_error, format_fixtures, get_console
from lightchat.config import create_client, load_config
from lightchat.exceptions import LightChatError

_LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def setup_logging(level: str) -> None:
    """Route lightchat's log records to stderr through rich.

    Unknown level names fall back to WARNING.
    """
    level = level.strip().upper()
    pkg_logger = logging.getLogger("lightchat")
    pkg_logger.setLevel(level if level in _LOG_LEVELS else "WARNING")
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


@click.command()
@click.option(
    "--env-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Environment file to load (default: nearest .env).",
)
@click.option(
    "--manual-tools",
    is_flag=True,
    help="Ask before running each tool call the model requests.",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    help="Log level (default: LIGHTCHAT_LOG_LEVEL or WARNING).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show tool calls as they run.")
def cli(env_file: str | None, manual_tools: bool, log_level: str | None, verbose: bool) -> None:
    """Chat with a language model that can see and switch the lights.

    Reads one message per "User > " prompt until end of input.
    """
    from lightchat.console import run_chat
    from lightchat.registry import LightRegistry
    from lightchat.session import ChatSession, make_console_prompt

    console = get_console()
    setup_logging(log_level or os.environ.get("LIGHTCHAT_LOG_LEVEL") or "WARNING")
    try:
        config = load_config(
            env_file,
            auto_invoke_tools=False if manual_tools else None,
            log_level=log_level,
        )
        client = create_client(config)
    except LightChatError as e:
        format_error(str(e), console)
        raise SystemExit(1) from None

    # The .env file may set a different level
    setup_logging(config.log_level)

    session_kwargs = {}
    if not config.auto_invoke_tools:
        session_kwargs["approve_tool_call"] = make_console_prompt(console)

    registry = LightRegistry()
    with closing(client):
        session = ChatSession.from_config(
            config, client=client, registry=registry, **session_kwargs
        )
        if verbose:
            format_fixtures(registry.list_fixtures(), console)
        run_chat(session, console, verbose=verbose)
