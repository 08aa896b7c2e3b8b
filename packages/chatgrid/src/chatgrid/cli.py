"""
CLI entry point.

    chatgrid snapshot --fixture demo.json [--width 80 --height 24] [--key j ...]
    chatgrid keys
"""
from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.console import Console

from .app import ChatApp
from .backend import InMemoryBackend
from .config import load_config
from .errors import ChatgridError
from .events import KeyPressed, MessageArrived

app = typer.Typer(
    name="chatgrid",
    help="chatgrid - terminal chat screen renderer",
    no_args_is_help=True,
)

console = Console()


def _setup_logging(debug_log: Optional[str]) -> None:
    if not debug_log:
        return
    logging.basicConfig(
        filename=debug_log,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_arrival(raw: str) -> MessageArrived:
    channel_id, sep, text = raw.partition(":")
    if not sep or not channel_id:
        raise typer.BadParameter(f"expected CHANNEL:TEXT, got {raw!r}")
    return MessageArrived(channel_id, text)


@app.command()
def snapshot(
    fixture: str = typer.Option(..., "--fixture", "-f", help="JSON file with channels and messages"),
    width: int = typer.Option(80, "--width", "-w", help="Screen width in columns"),
    height: int = typer.Option(24, "--height", "-h", help="Screen height in rows"),
    keys: Optional[List[str]] = typer.Option(None, "--key", "-k", help="Key ids to replay before drawing"),
    arrivals: Optional[List[str]] = typer.Option(None, "--arrive", help="CHANNEL:TEXT message to deliver"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
    color: bool = typer.Option(False, "--color", help="Emit ANSI colors"),
    debug_log: Optional[str] = typer.Option(None, "--debug-log", help="Write debug logs to this file"),
) -> None:
    """Render one frame of the chat screen to stdout."""
    _setup_logging(debug_log)
    try:
        cfg = load_config(config)
        backend = InMemoryBackend.from_file(fixture)
    except ChatgridError as exc:
        console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1)

    chat_app = ChatApp(backend, width, height, cfg, bell=lambda: None)
    chat_app.start()
    events = [_parse_arrival(raw) for raw in arrivals or []]
    events += [KeyPressed(key) for key in keys or []]
    for event in events:
        if len(chat_app.queue) >= chat_app.queue.maxsize:
            chat_app.process_pending()
        chat_app.post(event)
    grid = chat_app.process_pending()

    lines = grid.to_ansi_lines() if color else grid.to_text_lines()
    for line in lines:
        typer.echo(line, color=color)


@app.command()
def keys(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """List key bindings per mode."""
    from rich.table import Table

    from .keybindings import KeybindingsManager

    try:
        cfg = load_config(config)
    except ChatgridError as exc:
        console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1)

    manager = KeybindingsManager(cfg.keymap)
    table = Table(title="Key Bindings")
    table.add_column("Mode")
    table.add_column("Action")
    table.add_column("Keys")
    for mode, actions in manager.as_dict().items():
        for action, bound in actions.items():
            table.add_row(mode, action, ", ".join(bound))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
