from __future__ import annotations

import threading
from pathlib import Path

import typer
from rich import print
from rich.markup import escape

from ..notify import StatusMessage

STATUS_STYLES = {"info": "cyan", "success": "green", "error": "red"}


def _print_status(status: StatusMessage) -> None:
    style = STATUS_STYLES.get(status.kind, "white")
    print(f"[{style}]{escape(status.message)}[/{style}]")


def sync_once_cmd(*, widget_from_path, db_path: str | None) -> None:
    """Run a single sync cycle."""

    widget = widget_from_path(db_path)
    try:
        widget.notifier.subscribe(_print_status)
        report = widget.sync_now()
        for quote in report.conflicts:
            print(f"  [dim]replaced local:[/dim] {escape(quote.text)} ({escape(quote.category)})")
        if not report.ok:
            raise typer.Exit(code=1)
        print(f"  Quotes: {report.merged_count} ({report.remote_count} from server)")
    finally:
        widget.close()


def sync_daemon_cmd(
    *,
    load_config,
    widget_from_path,
    db_path: str | None,
    interval_s: int | None,
    stop_event: threading.Event | None = None,
) -> None:
    """Run sync cycles on a fixed interval until interrupted."""

    config = load_config()
    if not config.sync_enabled:
        print("[yellow]Sync is disabled (set sync_enabled in the config).[/yellow]")
        raise typer.Exit(code=1)
    interval = interval_s if interval_s is not None else config.sync_interval_s
    if interval <= 0:
        print("[red]Sync interval must be positive[/red]")
        raise typer.Exit(code=1)
    log_path = Path(config.daemon_log) if config.daemon_log else None
    widget = widget_from_path(db_path)
    stop = stop_event or threading.Event()
    try:
        widget.notifier.subscribe(_print_status)
        print(f"[bold]Syncing every {interval}s (Ctrl-C to stop)[/bold]")
        widget.start_sync(interval, log_path=log_path)
        try:
            stop.wait()
        except KeyboardInterrupt:
            print("[yellow]Stopping sync[/yellow]")
    finally:
        widget.close()
