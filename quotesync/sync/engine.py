from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..categories import CategoryIndex
from ..notify import Notifier
from ..store import Quote, QuoteCollection, QuoteStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Sequence[Quote]]


class SyncState(enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    MERGING = "merging"
    PERSISTING = "persisting"
    FAILED = "failed"


@dataclass(frozen=True)
class MergeResult:
    merged: list[Quote]
    conflicts: list[Quote]


@dataclass
class SyncReport:
    ok: bool
    skipped: bool = False
    remote_count: int = 0
    merged_count: int = 0
    conflicts: list[Quote] = field(default_factory=list)
    error: str | None = None


def merge(remote: Sequence[Quote], local: Sequence[Quote]) -> MergeResult:
    """Merge a remote snapshot into local quotes; remote wins on equal text.

    Remote quotes come first in remote order, followed by the local quotes
    whose text the remote does not have. Local quotes that collide are
    returned as conflicts. Duplicates inside ``remote`` are kept as-is.
    """
    merged = list(remote)
    remote_texts = {quote.text for quote in remote}
    conflicts: list[Quote] = []
    for quote in local:
        if quote.text in remote_texts:
            conflicts.append(quote)
        else:
            merged.append(quote)
    return MergeResult(merged=merged, conflicts=conflicts)


def sync_status_message(report: SyncReport) -> str:
    if not report.ok:
        return f"Sync failed: {report.error or 'unknown error'}"
    if report.conflicts:
        count = len(report.conflicts)
        noun = "conflict" if count == 1 else "conflicts"
        return f"Sync complete! {count} {noun} resolved, server data took precedence."
    return "Sync complete!"


class SyncEngine:
    """Runs fetch, merge and persist cycles against a quote collection.

    Only one cycle runs at a time; a cycle requested while another is in
    flight is skipped, not queued.
    """

    def __init__(
        self,
        store: QuoteStore,
        collection: QuoteCollection,
        fetcher: Fetcher,
        *,
        categories: CategoryIndex | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.store = store
        self.collection = collection
        self.fetcher = fetcher
        self.categories = categories
        self.notifier = notifier or Notifier()
        self.state = SyncState.IDLE
        self.last_report: SyncReport | None = None
        self._busy = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def run_cycle(self) -> SyncReport:
        if not self._busy.acquire(blocking=False):
            logger.info("sync cycle skipped: previous cycle still running")
            return SyncReport(ok=False, skipped=True, error="busy")
        try:
            report = self._run_cycle()
        finally:
            self.state = SyncState.IDLE
            self._busy.release()
        self.last_report = report
        return report

    def _run_cycle(self) -> SyncReport:
        self.notifier.info("Syncing with server...")
        try:
            self.state = SyncState.FETCHING
            remote = list(self.fetcher())
            self.state = SyncState.MERGING
            with self.collection.lock:
                # Local is read here, after the fetch, so adds made meanwhile are kept.
                result = merge(remote, self.collection.items)
                self.state = SyncState.PERSISTING
                self.store.replace(self.collection, result.merged)
            if self.categories is not None:
                self.categories.refresh(self.collection)
        except Exception as exc:
            self.state = SyncState.FAILED
            logger.exception("sync cycle failed")
            report = SyncReport(ok=False, error=str(exc) or type(exc).__name__)
            self.notifier.error(sync_status_message(report))
            return report
        report = SyncReport(
            ok=True,
            remote_count=len(remote),
            merged_count=len(result.merged),
            conflicts=result.conflicts,
        )
        self.notifier.success(sync_status_message(report))
        return report
