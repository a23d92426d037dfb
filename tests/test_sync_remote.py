from __future__ import annotations

import logging

import pytest

from quotesync.config import QuoteSyncConfig
from quotesync.errors import DecodeError, TransportError
from quotesync.store import Quote
from quotesync.sync import http_client
from quotesync.sync.remote import RemoteSource, quotes_from_records

RECORDS = [
    {"userId": 1, "id": 1, "title": "first title", "body": "ignored"},
    {"userId": 1, "id": 2, "title": "second title", "body": "ignored"},
    {"userId": 1, "id": 3, "title": "", "body": "no title"},
    {"userId": 1, "id": 4, "title": "third title", "body": "ignored"},
]


def test_records_map_title_to_text_with_fixed_category() -> None:
    quotes = quotes_from_records(RECORDS, category="Server")
    assert quotes == [
        Quote("first title", "Server"),
        Quote("second title", "Server"),
        Quote("third title", "Server"),
    ]


def test_records_respect_limit() -> None:
    assert quotes_from_records(RECORDS, category="Server", limit=1) == [
        Quote("first title", "Server")
    ]


def test_records_must_be_a_list() -> None:
    with pytest.raises(DecodeError):
        quotes_from_records({"title": "x"}, category="Server")


def test_fetch_requests_limited_snapshot(monkeypatch) -> None:
    calls = []

    def fake_request(method, url, **kwargs):
        calls.append((method, url))
        return 200, RECORDS

    monkeypatch.setattr(http_client, "request_json", fake_request)
    source = RemoteSource("https://remote.test/posts", limit=2)

    assert source.fetch_remote_snapshot() == [
        Quote("first title", "Server"),
        Quote("second title", "Server"),
    ]
    assert calls == [("GET", "https://remote.test/posts?_limit=2")]


@pytest.mark.parametrize(
    "outcome",
    [TransportError("down"), DecodeError("garbage"), (500, {"error": "boom"}), (200, {"x": 1})],
)
def test_fetch_failures_yield_empty_snapshot(monkeypatch, caplog, outcome) -> None:
    def fake_request(method, url, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(http_client, "request_json", fake_request)
    source = RemoteSource("https://remote.test/posts")

    with caplog.at_level(logging.WARNING, logger="quotesync.sync.remote"):
        assert source.fetch_remote_snapshot() == []
    assert "remote fetch failed" in caplog.text


def test_post_quote_sends_body_and_returns_response(monkeypatch) -> None:
    sent = {}

    def fake_request(method, url, **kwargs):
        sent.update(method=method, url=url, body=kwargs.get("body"))
        return 201, {"id": 101, **kwargs["body"]}

    monkeypatch.setattr(http_client, "request_json", fake_request)
    source = RemoteSource("https://remote.test/posts")

    result = source.post_quote(Quote("t", "c"))

    assert sent == {"method": "POST", "url": "https://remote.test/posts", "body": {"text": "t", "category": "c"}}
    assert result == {"id": 101, "text": "t", "category": "c"}


def test_post_quote_swallows_transport_errors(monkeypatch) -> None:
    def fake_request(method, url, **kwargs):
        raise TransportError("offline")

    monkeypatch.setattr(http_client, "request_json", fake_request)
    assert RemoteSource("https://remote.test/posts").post_quote(Quote("t", "c")) is None


def test_from_config_uses_remote_settings() -> None:
    cfg = QuoteSyncConfig(
        remote_url="https://other.test/items",
        remote_limit=3,
        remote_category="Upstream",
        remote_timeout_s=2.5,
    )
    source = RemoteSource.from_config(cfg)
    assert (source.url, source.limit, source.category, source.timeout_s) == (
        "https://other.test/items",
        3,
        "Upstream",
        2.5,
    )
