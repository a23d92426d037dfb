from __future__ import annotations

import logging

import typer
from rich import print

from . import __version__
from .commands.common import read_config_or_exit, widget_from_path
from .commands.config_cmds import config_path_cmd, config_show_cmd
from .commands.import_export_cmds import export_quotes_cmd, import_quotes_cmd
from .commands.quote_cmds import add_cmd, categories_cmd, filter_cmd, show_cmd
from .commands.sync_cmds import sync_daemon_cmd, sync_once_cmd
from .config import get_config_path, get_env_overrides, load_config
from .widget import QuoteWidget

app = typer.Typer(help="quotesync: random quotes with remote sync")
sync_app = typer.Typer(help="Sync quotes with the remote source")
config_app = typer.Typer(help="Inspect configuration")
app.add_typer(sync_app, name="sync")
app.add_typer(config_app, name="config")


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _widget(db_path: str | None) -> QuoteWidget:
    return widget_from_path(db_path)


@app.command()
def show(
    db_path: str = typer.Option(None, help="Path to SQLite database"),
    category: str = typer.Option(None, help="Filter by category (persisted)"),
) -> None:
    """Show a random quote."""

    show_cmd(widget_from_path=_widget, db_path=db_path, category=category)


@app.command()
def add(
    text: str = typer.Argument(..., help="Quote text"),
    category: str = typer.Argument(..., help="Quote category"),
    db_path: str = typer.Option(None, help="Path to SQLite database"),
    post: bool = typer.Option(True, "--post/--no-post", help="Also post the quote to the server"),
) -> None:
    """Add a new quote."""

    add_cmd(widget_from_path=_widget, db_path=db_path, text=text, category=category, post=post)


@app.command()
def categories(
    db_path: str = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """List quote categories."""

    categories_cmd(widget_from_path=_widget, db_path=db_path)


@app.command("filter")
def filter_(
    category: str = typer.Argument(..., help="Category name, or 'all'"),
    db_path: str = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Select a category filter and show a quote from it."""

    filter_cmd(widget_from_path=_widget, db_path=db_path, category=category)


@app.command("export")
def export_quotes(
    db_path: str = typer.Option(None, help="Path to SQLite database"),
    output: str = typer.Option("quotes.json", "--output", "-o", help="Output file ('-' for stdout)"),
) -> None:
    """Export quotes to JSON."""

    export_quotes_cmd(widget_from_path=_widget, db_path=db_path, output=output)


@app.command("import")
def import_quotes(
    input_file: str = typer.Argument(..., help="JSON file to import ('-' for stdin)"),
    db_path: str = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Import quotes from a JSON export."""

    import_quotes_cmd(widget_from_path=_widget, db_path=db_path, input_file=input_file)


@sync_app.command("once")
def sync_once(
    db_path: str = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Run one sync cycle now."""

    sync_once_cmd(widget_from_path=_widget, db_path=db_path)


@sync_app.command("daemon")
def sync_daemon(
    db_path: str = typer.Option(None, help="Path to SQLite database"),
    interval_s: int = typer.Option(None, help="Seconds between sync cycles"),
) -> None:
    """Sync now and then on a fixed interval."""

    sync_daemon_cmd(
        load_config=load_config,
        widget_from_path=_widget,
        db_path=db_path,
        interval_s=interval_s,
    )


@config_app.command("show")
def config_show() -> None:
    """Show effective configuration."""

    config_show_cmd(
        read_config_or_exit=read_config_or_exit,
        load_config=load_config,
        get_env_overrides=get_env_overrides,
    )


@config_app.command("path")
def config_path() -> None:
    """Show the config file path."""

    config_path_cmd(get_config_path=get_config_path)


@app.command("version")
def version() -> None:
    """Print version."""

    print(__version__)


def main() -> None:
    app()
