from __future__ import annotations

import typer
from rich import print
from rich.markup import escape

from ..errors import ValidationError
from .common import print_quote


def show_cmd(*, widget_from_path, db_path: str | None, category: str | None) -> None:
    """Show a random quote for the active (or given) category."""

    widget = widget_from_path(db_path)
    try:
        if category:
            quote = widget.filter_quotes(category)
        else:
            quote = widget.show_random_quote()
        print_quote(quote, category_filter=widget.categories.selection)
    finally:
        widget.close()


def add_cmd(
    *,
    widget_from_path,
    db_path: str | None,
    text: str,
    category: str,
    post: bool,
) -> None:
    """Add a quote locally and optionally post it to the remote source."""

    widget = widget_from_path(db_path)
    try:
        if not post:
            widget.post_on_add = False
        try:
            quote = widget.add_quote(text, category)
        except ValidationError as exc:
            print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from None
        print(f"[green]✓ Quote added locally[/green] ({escape(quote.category)})")
    finally:
        widget.close()


def categories_cmd(*, widget_from_path, db_path: str | None) -> None:
    """List categories in first-seen order; the active one is marked."""

    widget = widget_from_path(db_path)
    try:
        for name in widget.categories.categories:
            marker = "*" if name == widget.categories.selection else " "
            print(f"{marker} {escape(name)}")
        if widget.categories.is_stale:
            print(
                f"[yellow]Selected category {escape(widget.categories.selection)!r} "
                "has no quotes[/yellow]"
            )
    finally:
        widget.close()


def filter_cmd(*, widget_from_path, db_path: str | None, category: str) -> None:
    """Persist the category filter and show a quote from it."""

    widget = widget_from_path(db_path)
    try:
        quote = widget.filter_quotes(category)
        print_quote(quote, category_filter=category)
    finally:
        widget.close()
