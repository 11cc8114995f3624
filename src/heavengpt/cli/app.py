"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..chat import parse_segments
from ..diagnostics import setup_logging
from ..ui.formatting import render_message, segment_label
from .providers import get_config, get_session

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="heavengpt",
    help="Terminal chat client for chat-completion endpoints",
    no_args_is_help=True,
    add_completion=True,
)

# Root logger output for `chat -v`, written beside the diagnostic log
DEBUG_LOG_NAME = "heavengpt-debug.log"

# Console for rich output
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"heavengpt {__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output (to stderr, or to a file next to the diagnostic log for chat)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit"
    ),
):
    """Chat with an OpenAI-compatible /chat/completions endpoint."""
    ctx.obj = {"verbose": verbose}
    # The TUI owns the terminal; chat configures its own file logging
    if ctx.invoked_subcommand != "chat":
        setup_logging("DEBUG" if verbose else "WARNING")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server base URL (overrides HEAVENGPT_BASE_URL)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model identifier (overrides HEAVENGPT_MODEL)"
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        "-r",
        help="Print reply text without highlighting"
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Diagnostic log file (overrides HEAVENGPT_LOG_FILE)"
    ),
):
    """Send a single prompt and print the reply."""
    config = get_config(console, base_url=base_url, model=model, log_file=log_file)

    async def _ask():
        session = get_session(config, console)
        try:
            result = await session.send(prompt)
        finally:
            await session.close()

        if not result.ok:
            console.print(f"[red]Error: {result.error.message}[/red]")
            raise typer.Exit(code=1)

        if not result.replies:
            console.print("[yellow]The server returned no choices.[/yellow]")
            return

        for reply in result.replies:
            if raw:
                console.print(reply.content, markup=False, highlight=False)
            else:
                console.print(Panel(
                    render_message(reply.content),
                    title=f"[bold magenta]{reply.role}[/bold magenta]",
                    title_align="left",
                    border_style="magenta",
                ))

    asyncio.run(_ask())


@app.command()
def segments(
    file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Saved message to inspect"
    ),
    render: bool = typer.Option(
        False,
        "--render",
        help="Render the segments instead of listing them"
    ),
):
    """Show how a saved message splits into prose and code segments."""
    text = file.read_text(encoding="utf-8")

    if render:
        console.print(render_message(text))
        return

    parts = parse_segments(text)
    if not parts:
        console.print("[dim]No segments (file is blank).[/dim]")
        return

    table = Table(title=f"Segments in {file.name}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Lines", justify="right")
    table.add_column("Preview", style="dim")

    for segment in parts:
        lines = segment.text.strip("\n").splitlines() or [""]
        preview = lines[0].strip()
        if len(preview) > 60:
            preview = preview[:57] + "..."
        table.add_row(str(segment.id), segment_label(segment), str(len(lines)), preview)

    console.print(table)


@app.command()
def chat(
    ctx: typer.Context,
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server base URL (overrides HEAVENGPT_BASE_URL)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model identifier (overrides HEAVENGPT_MODEL)"
    ),
    include_history: bool | None = typer.Option(
        None,
        "--history/--no-history",
        help="Forward earlier turns with each request (overrides HEAVENGPT_INCLUDE_HISTORY)"
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Diagnostic log file (overrides HEAVENGPT_LOG_FILE)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI chat interface."""
    config = get_config(
        console,
        base_url=base_url,
        model=model,
        include_history=include_history,
        log_file=log_file,
    )
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    setup_logging(
        "DEBUG" if verbose else "WARNING",
        log_file=config.log_file.with_name(DEBUG_LOG_NAME) if verbose else None,
        use_console=False,
    )

    async def _tui():
        from ..ui import run_textual_tui

        session = get_session(config, console)
        await run_textual_tui(session, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
