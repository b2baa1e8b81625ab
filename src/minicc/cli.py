"""Command line interface: interactive chat, one-shot queries and session management."""

import asyncio
import json
import logging
import sys
import time
import uuid
from typing import Optional

import click
from dotenv import find_dotenv, load_dotenv

from .agent import create_orchestrator
from .core import AgentSettings, ConversationOrchestrator, MiniCCError, SessionStore, StorageError
from .core.logger import setup_logging


def session_option(f):
    """Click decorator for session selection."""
    f = click.option("session_id", "-s", "--session", help="Session ID to use (created if missing)")(f)
    f = click.option(
        "continue_", "-c", "--continue", is_flag=True, help="Continue the most recently updated session"
    )(f)
    return f


def new_session_id() -> str:
    return str(uuid.uuid4())


def resolve_session_id(
    store: SessionStore, session_id: Optional[str], continue_: bool = False, new_session: bool = False
) -> str:
    """Pick the session for a command: explicit id, most recent one, or a fresh id."""
    if session_id:
        return session_id
    if continue_ and not new_session:
        return store.most_recent() or new_session_id()
    return new_session_id()


def _init_orchestrator() -> ConversationOrchestrator:
    try:
        return create_orchestrator(AgentSettings.from_env())
    except MiniCCError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(package_name="minicc")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool) -> None:
    """MiniCC - a minimal coding assistant with tools in your terminal."""
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@session_option
@click.option("new_session", "--new", is_flag=True, help="Start a new session")
def chat(session_id: Optional[str], continue_: bool, new_session: bool) -> None:
    """Start an interactive chat. Type 'exit' or 'quit' to stop."""
    orchestrator = _init_orchestrator()
    resolved = resolve_session_id(orchestrator.sessions, session_id, continue_, new_session)

    click.secho(f"Session: {resolved}", fg="cyan", err=True)
    click.echo("Type 'exit' or 'quit' to stop.", err=True)
    asyncio.run(_interactive_loop(orchestrator, resolved))


async def _interactive_loop(orchestrator: ConversationOrchestrator, session_id: str) -> None:
    while True:
        try:
            user_input = click.prompt("You", default="", show_default=False, prompt_suffix="> ").strip()
        except click.Abort:
            click.echo()
            break

        if user_input.lower() in ("exit", "quit"):
            click.echo("Goodbye!")
            break
        if not user_input:
            continue

        try:
            answer = await orchestrator.chat(session_id, user_input)
        except MiniCCError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            continue
        click.echo(f"Assistant: {answer}")


@cli.command()
@click.argument("question")
@session_option
@click.option(
    "--output-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Print the answer as plain text or as a JSON document",
)
def query(question: str, session_id: Optional[str], continue_: bool, output_format: str) -> None:
    """Answer QUESTION, print the result and exit."""
    if not question.strip():
        raise click.UsageError("A prompt is required, e.g. minicc query \"your prompt\"")

    orchestrator = _init_orchestrator()
    resolved = resolve_session_id(orchestrator.sessions, session_id, continue_)
    started = time.monotonic()

    try:
        answer = asyncio.run(orchestrator.chat(resolved, question))
    except MiniCCError as e:
        duration_ms = int((time.monotonic() - started) * 1000)
        if output_format == "json":
            error = {"message": str(e), "code": type(e).__name__}
            click.echo(json.dumps({"success": False, "error": error, "metadata": {"duration_ms": duration_ms}}, indent=2))
        else:
            click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    duration_ms = int((time.monotonic() - started) * 1000)
    if output_format == "json":
        payload = {
            "success": True,
            "data": {"content": answer},
            "metadata": {"session_id": resolved, "duration_ms": duration_ms},
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(answer)


@cli.command()
@click.option("list_", "-l", "--list", is_flag=True, help="List all sessions (default)")
@click.option("delete_id", "-d", "--delete", help="Delete the given session")
@click.option("--clear", is_flag=True, help="Delete all sessions")
@click.option(
    "--history-dir",
    envvar="MINICC_HISTORY_DIR",
    default=".history",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory holding session files",
)
def sessions(list_: bool, delete_id: Optional[str], clear: bool, history_dir: str) -> None:
    """Manage stored sessions."""
    store = SessionStore(history_dir)

    try:
        if delete_id:
            store.delete(delete_id)
            click.echo(f"Deleted session: {delete_id}")
        if clear:
            store.clear_all()
            click.echo("All sessions cleared.")
    except StorageError as e:
        raise click.ClickException(str(e))

    if list_ or not (delete_id or clear):
        _print_sessions(store)


def _print_sessions(store: SessionStore) -> None:
    summaries = store.list_details()
    if not summaries:
        click.echo("No sessions found.")
        return

    for summary in sorted(summaries, key=lambda s: s.last_update_time, reverse=True):
        updated = summary.last_update_time.astimezone().strftime("%Y-%m-%d %H:%M")
        click.echo(f"{click.style(summary.id, fg='cyan')}  {summary.message_count} message(s)  updated {updated}")
        if summary.last_message:
            click.echo(f"    {summary.last_message}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
