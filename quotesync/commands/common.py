from __future__ import annotations

from typing import Any

import typer
from rich import print
from rich.markup import escape

from ..config import load_config, read_config_file
from ..store import Quote
from ..widget import QuoteWidget


def widget_from_path(db_path: str | None) -> QuoteWidget:
    return QuoteWidget.from_config(load_config(), db_path=db_path)


def read_config_or_exit() -> dict[str, Any]:
    try:
        return read_config_file()
    except ValueError as exc:
        print(f"[red]Invalid config file: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def print_quote(quote: Quote | None, *, category_filter: str) -> None:
    if quote is None:
        print(f"[yellow]No quotes available for category {escape(category_filter)!r}.[/yellow]")
        return
    print(f'[bold]"{escape(quote.text)}"[/bold]')
    print(f"  [dim]Category:[/dim] {escape(quote.category)}")
