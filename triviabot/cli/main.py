"""
triviabot CLI.

Runs the webhook server and offers a couple of operator commands against the
persisted game state.
"""

import asyncio
import subprocess
import sys

import typer

from triviabot.core.config.settings import Settings
from triviabot.game.round_state import RoundStateRepository
from triviabot.game.score_store import ScoreStore
from triviabot.persistence.store_factory import create_document_store

app = typer.Typer(help="GroupMe trivia bot CLI")

APP_FACTORY = "triviabot.core.app:create_app"


def _uvicorn_command(host: str, port: int, extra: list[str]) -> list[str]:
    return [
        sys.executable,
        "-m",
        "uvicorn",
        APP_FACTORY,
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
        *extra,
    ]


def _serve(cmd: list[str]) -> None:
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        typer.echo(f"❌ Server failed to start (exit code: {e.returncode})", err=True)
        typer.echo("Check that GROUPME_ACCESS_TOKEN, GROUPME_GROUP_ID and", err=True)
        typer.echo("GROUPME_BOT_ID are set, and that the port is free.", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("👋 Server stopped")


@app.command()
def dev(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
):
    """
    Run development server with auto-reload.

    Set ENVIRONMENT=DEV to print chat messages to the console instead of
    posting them.
    """
    typer.echo("🚀 Starting triviabot development server...")
    typer.echo(f"🌐 Webhook: http://{host}:{port}/submit_message")
    typer.echo("💡 Press CTRL+C to stop")
    _serve(_uvicorn_command(host, port, ["--reload"]))


@app.command()
def run(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
):
    """
    Run production server (no auto-reload, single worker).

    One worker only: the round and points documents have a single writer.
    """
    typer.echo(f"🚀 Starting triviabot on {host}:{port}")
    _serve(_uvicorn_command(host, port, ["--workers", "1"]))


@app.command()
def points():
    """Print the stored points table, highest first."""
    settings = Settings()
    store = create_document_store(settings.store_backend, settings.data_dir)
    record = asyncio.run(ScoreStore(store).all_points())

    if not record.root:
        typer.echo("No points recorded yet.")
        return

    for user_id, total in sorted(record.root.items(), key=lambda item: -item[1]):
        typer.echo(f"{user_id}\t{total}")


@app.command()
def reset():
    """Clear the current round without revealing the answer in chat."""
    settings = Settings()
    store = create_document_store(settings.store_backend, settings.data_dir)
    repository = RoundStateRepository(store)

    question = asyncio.run(repository.load())
    if question is None:
        typer.echo("No active round.")
        return

    asyncio.run(repository.save(None))
    typer.echo(f"Cleared round: {question.prompt}")


def main():
    app()


if __name__ == "__main__":
    main()
