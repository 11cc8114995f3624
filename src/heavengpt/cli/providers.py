"""Factory functions for CLI.

Centralizes creation of configuration, transport and session instances.
Hides configuration details from command implementations.
"""

from typing import Any

import typer
from rich.console import Console

from ..chat import ChatError, ChatSession, HttpChatTransport, RequestBuilder
from ..config import ChatConfig, ConfigError, load_config
from ..diagnostics import DiagnosticLog

# Default console for output
_console = Console()


def get_config(console: Console | None = None, **overrides: Any) -> ChatConfig:
    """Load configuration from the environment plus command-line overrides.

    Raises:
        SystemExit: If a setting is invalid
    """
    con = console or _console
    try:
        return load_config(**overrides)
    except ConfigError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def get_session(config: ChatConfig, console: Console | None = None) -> ChatSession:
    """Create a chat session wired to the HTTP transport and diagnostic log.

    Raises:
        SystemExit: If the base URL is unusable
    """
    con = console or _console
    try:
        transport = HttpChatTransport(config.base_url, timeout=config.timeout)
    except ChatError as e:
        con.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1)

    builder = RequestBuilder(
        system_prompt=config.system_prompt,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        include_history=config.include_history,
        history_limit=config.history_limit,
    )
    return ChatSession(transport, builder, log=DiagnosticLog(config.log_file))
