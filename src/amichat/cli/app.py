"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from rich.console import Console
from rich.markup import escape

from ..assistant import AssistantSession, Role, TranscriptEntry
from ..chat import ChatMessage, ConnectionState
from ..config import SUGGESTIONS, load_settings
from ..log import configure_logging
from .providers import build_assistant_session, build_chat_session

# Create Typer app
app = typer.Typer(
    name="amichat",
    help="Peer chat over STOMP and a conversational AI assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("/quit", "/exit", "/q")
SUGGESTION_SHORTCUTS = {str(number): text for number, text in enumerate(SUGGESTIONS, 1)}


@app.callback()
def setup(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """Configure logging for every command."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


def _print_message(message: ChatMessage) -> None:
    console.print(
        f"[dim]{message.timestamp}[/dim] [bold]{escape(message.sender)}[/bold]"
        f" → {escape(message.recipient)}: {escape(message.content)}"
    )


def _print_entry(entry: TranscriptEntry) -> None:
    if entry.role == Role.ASSISTANT:
        console.print(f"[bold cyan]AMI[/bold cyan] [dim]{entry.timestamp}[/dim]")
    else:
        console.print(f"[bold yellow]You[/bold yellow] [dim]{entry.timestamp}[/dim]")
    console.print(entry.content, markup=False)


@app.command()
def chat(
    identity: str = typer.Option(
        ...,
        "--identity",
        "-i",
        help="Your name, used as sender and subscription key"
    ),
    recipient: str = typer.Option(
        "",
        "--to",
        "-t",
        help="Default recipient for lines without 'name:' prefix"
    ),
):
    """Chat with other users. Type 'name: message' to send, '/quit' to leave."""
    settings = load_settings()

    async def _chat():
        session = build_chat_session(settings)
        session.messages.on_message(_print_message)
        session.connection.on_state_change(
            lambda old, new: console.print(f"[dim]Connection: {new.value}[/dim]")
        )

        if not session.connect(identity):
            console.print("[red]Error: identity must not be blank[/red]")
            raise typer.Exit(code=1)

        current_recipient = recipient.strip()
        try:
            while True:
                try:
                    line = await asyncio.to_thread(console.input, "")
                except (KeyboardInterrupt, EOFError):
                    break

                line = line.strip()
                if not line:
                    continue
                if line.lower() in EXIT_COMMANDS:
                    break

                target, sep, text = line.partition(":")
                if sep and target.strip() and " " not in target.strip():
                    current_recipient = target.strip()
                    content = text
                else:
                    content = line

                if session.connection.state is not ConnectionState.CONNECTED:
                    console.print("[yellow]Not connected yet, message not sent[/yellow]")
                    continue
                if not current_recipient:
                    console.print("[yellow]No recipient: use 'name: message'[/yellow]")
                    continue

                session.compose(current_recipient, content)
                if not session.send():
                    console.print("[red]Message could not be sent[/red]")
        finally:
            session.disconnect()
            console.print("[dim]Goodbye![/dim]")

    asyncio.run(_chat())


@app.command()
def ask(
    prompt: str | None = typer.Argument(
        None,
        help="Single prompt (omit for interactive mode)"
    ),
    greeting: bool = typer.Option(
        True,
        "--greeting/--no-greeting",
        help="Start the conversation with AMI's greeting"
    ),
):
    """Talk to the AMI assistant."""
    settings = load_settings()

    async def _turn(session: AssistantSession, text: str) -> None:
        before = len(session.transcript)
        with console.status("[dim]AI đang nhập...[/dim]"):
            await session.submit(text)
        for entry in session.transcript.entries[before + 1:]:
            _print_entry(entry)
        if session.error:
            console.print(f"[red]{session.error}[/red]")

    async def _ask():
        session = build_assistant_session(settings, greeting=greeting and prompt is None)
        async with session:
            if prompt:
                await _turn(session, prompt)
                if session.error:
                    raise typer.Exit(code=1)
                return

            for entry in session.transcript:
                _print_entry(entry)
            for number, suggestion in SUGGESTION_SHORTCUTS.items():
                console.print(f"[dim]  {number}. {suggestion}[/dim]")
            console.print("[dim]Pick a suggestion by number, type '/quit' to leave\n[/dim]")

            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except (KeyboardInterrupt, EOFError):
                    console.print()
                    break

                choice = user_input.strip()
                if choice.lower() in EXIT_COMMANDS:
                    break
                user_input = SUGGESTION_SHORTCUTS.get(choice, user_input)
                if user_input.strip():
                    await _turn(session, user_input)

            console.print("[dim]Goodbye![/dim]")

    asyncio.run(_ask())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
