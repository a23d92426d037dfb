from __future__ import annotations

from pathlib import Path

from . import codec
from .categories import CategoryIndex
from .config import QuoteSyncConfig
from .errors import ValidationError
from .notify import Notifier
from .selection import last_viewed, pick_quote, render_quote
from .storage import KeyValueStorage, MemoryKeyValueStorage, SqliteKeyValueStorage
from .store import Quote, QuoteStore
from .sync.daemon import RepeatingSync
from .sync.engine import Fetcher, SyncEngine, SyncReport
from .sync.remote import RemoteSource


class QuoteWidget:
    """The quote browser: one collection, its filter, and its sync engine.

    User actions report through ``notifier``; validation failures are also
    raised so callers can stop.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        session_storage: KeyValueStorage | None = None,
        *,
        remote: RemoteSource | None = None,
        fetcher: Fetcher | None = None,
        notifier: Notifier | None = None,
        post_on_add: bool = True,
    ) -> None:
        self.storage = storage
        self.session_storage = session_storage or MemoryKeyValueStorage()
        self.notifier = notifier or Notifier()
        self.remote = remote
        self.post_on_add = post_on_add
        self.store = QuoteStore(storage)
        self.collection = self.store.load()
        self.categories = CategoryIndex(storage)
        self.categories.refresh(self.collection)
        self.categories.restore()
        if fetcher is None:
            fetcher = remote.fetch_remote_snapshot if remote is not None else list
        self.engine = SyncEngine(
            self.store,
            self.collection,
            fetcher,
            categories=self.categories,
            notifier=self.notifier,
        )
        self.current: Quote | None = None
        self._sync_task: RepeatingSync | None = None

    @classmethod
    def from_config(
        cls, config: QuoteSyncConfig, *, db_path: str | Path | None = None
    ) -> QuoteWidget:
        storage = SqliteKeyValueStorage(db_path or config.db_path)
        return cls(
            storage,
            remote=RemoteSource.from_config(config),
            post_on_add=config.post_on_add,
        )

    def start(
        self,
        *,
        sync_interval_s: float | None = None,
        restore_last_viewed: bool = False,
    ) -> Quote | None:
        if restore_last_viewed:
            self.current = last_viewed(self.session_storage)
        if self.current is None:
            self.show_random_quote()
        if sync_interval_s is not None:
            self.start_sync(sync_interval_s)
        return self.current

    def show_random_quote(self) -> Quote | None:
        self.current = pick_quote(
            self.collection, self.categories.selection, session_storage=self.session_storage
        )
        return self.current

    def render(self) -> str:
        return render_quote(self.current)

    def add_quote(self, text: str, category: str) -> Quote:
        try:
            quote = self.store.add(self.collection, Quote(text=text, category=category))
        except ValidationError as exc:
            self.notifier.error(str(exc))
            raise
        self.categories.refresh(self.collection)
        self.notifier.success("Quote added locally!")
        if self.post_on_add and self.remote is not None:
            self.remote.post_quote(quote)
        return quote

    def filter_quotes(self, category: str) -> Quote | None:
        self.categories.set_selection(category)
        return self.show_random_quote()

    def export_json(self, path: str | Path = codec.DEFAULT_EXPORT_NAME) -> Path:
        output_path = codec.export_file(self.collection, path)
        self.notifier.success(f"Exported {len(self.collection)} quotes to {output_path}")
        return output_path

    def export_document(self) -> str:
        return codec.export_document(self.collection)

    def import_json(self, raw: str) -> int:
        try:
            quotes = codec.import_document(raw)
        except ValidationError as exc:
            self.notifier.error(f"Import failed: {exc}")
            raise
        count = self.store.extend(self.collection, quotes)
        self.categories.refresh(self.collection)
        self.notifier.success(f"Quotes imported successfully! ({count} added)")
        return count

    def sync_now(self) -> SyncReport:
        return self.engine.run_cycle()

    def start_sync(self, interval_s: float, *, log_path: Path | None = None) -> RepeatingSync:
        if self._sync_task is None:
            self._sync_task = RepeatingSync(self.engine, interval_s, log_path=log_path)
        self._sync_task.start()
        return self._sync_task

    def stop_sync(self) -> None:
        if self._sync_task is not None:
            self._sync_task.stop()
            self._sync_task = None

    def close(self) -> None:
        self.stop_sync()
        close = getattr(self.storage, "close", None)
        if callable(close):
            close()
