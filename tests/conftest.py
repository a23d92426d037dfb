from __future__ import annotations

from pathlib import Path

import pytest

from quotesync.storage import MemoryKeyValueStorage
from quotesync.store import Quote
from quotesync.widget import QuoteWidget


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("QUOTESYNC_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.setenv("QUOTESYNC_DAEMON_LOG", str(tmp_path / "sync-daemon.log"))
    for name in (
        "QUOTESYNC_DB_PATH",
        "QUOTESYNC_REMOTE_URL",
        "QUOTESYNC_REMOTE_LIMIT",
        "QUOTESYNC_REMOTE_CATEGORY",
        "QUOTESYNC_REMOTE_TIMEOUT_S",
        "QUOTESYNC_SYNC_INTERVAL_S",
        "QUOTESYNC_SYNC_ENABLED",
        "QUOTESYNC_POST_ON_ADD",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture
def make_widget(storage: MemoryKeyValueStorage):
    def _make(remote_quotes: list[Quote] | None = None) -> QuoteWidget:
        remote = list(remote_quotes or [])
        return QuoteWidget(storage, fetcher=lambda: list(remote))

    return _make
