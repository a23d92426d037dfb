from __future__ import annotations

import datetime as dt
import logging
import threading
import traceback
from pathlib import Path

from .engine import SyncEngine, SyncReport

logger = logging.getLogger(__name__)


def _tick(engine: SyncEngine, log_path: Path | None) -> SyncReport | None:
    try:
        report = engine.run_cycle()
    except Exception:
        tb = traceback.format_exc()
        logger.error("sync daemon tick crashed\n%s", tb)
        _append_sync_daemon_log(tb, log_path)
        return None
    if not report.ok and not report.skipped:
        _append_sync_daemon_log(f"sync failed: {report.error}", log_path)
    return report


def run_sync_daemon(
    engine: SyncEngine,
    interval_s: float,
    *,
    stop_event: threading.Event | None = None,
    log_path: Path | None = None,
) -> None:
    """Run one cycle now, then one every ``interval_s`` seconds until stopped."""
    stop = stop_event or threading.Event()
    _tick(engine, log_path)
    while not stop.wait(interval_s):
        _tick(engine, log_path)


class RepeatingSync:
    """Cancellable background task around ``run_sync_daemon``."""

    def __init__(
        self,
        engine: SyncEngine,
        interval_s: float,
        *,
        log_path: Path | None = None,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.engine = engine
        self.interval_s = interval_s
        self.log_path = log_path
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=run_sync_daemon,
            args=(self.engine, self.interval_s),
            kwargs={"stop_event": self._stop, "log_path": self.log_path},
            name="quotesync-sync",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout_s: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout_s)
            self._thread = None


def schedule(engine: SyncEngine, interval_s: float, *, log_path: Path | None = None) -> RepeatingSync:
    task = RepeatingSync(engine, interval_s, log_path=log_path)
    task.start()
    return task


def _append_sync_daemon_log(message: str, log_path: Path | None) -> None:
    if log_path is None:
        return
    try:
        log_path = log_path.expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        ts = dt.datetime.now(dt.UTC).isoformat()
        with log_path.open("a", encoding="utf-8", errors="ignore") as handle:
            handle.write(f"\n[{ts}]\n{message}\n")
    except OSError:
        logger.debug("could not write sync daemon log %s", log_path)
