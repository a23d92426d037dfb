from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich import print
from rich.markup import escape

from ..codec import read_document
from ..errors import DecodeError, ValidationError


def export_quotes_cmd(*, widget_from_path, db_path: str | None, output: str) -> None:
    """Export quotes to a JSON file."""

    widget = widget_from_path(db_path)
    try:
        if output == "-":
            sys.stdout.write(widget.export_document() + "\n")
            return
        output_path = widget.export_json(output)
        print(f"[green]✓ Exported to {output_path}[/green]")
        print(f"  Quotes: {len(widget.collection)}")
    finally:
        widget.close()


def import_quotes_cmd(*, widget_from_path, db_path: str | None, input_file: str) -> None:
    """Append quotes from an exported JSON file."""

    if input_file == "-":
        input_json = sys.stdin.read()
    else:
        input_path = Path(input_file).expanduser()
        if not input_path.exists():
            print(f"[red]Input file not found: {input_path}[/red]")
            raise typer.Exit(code=1)
        try:
            input_json = read_document(input_path)
        except DecodeError as exc:
            print(f"[red]Import failed: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from None

    widget = widget_from_path(db_path)
    try:
        try:
            count = widget.import_json(input_json)
        except ValidationError as exc:
            print(f"[red]Import failed: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from None
        print(f"[green]✓ Imported {count} quotes[/green]")
        print(f"  Total: {len(widget.collection)}")
    finally:
        widget.close()
