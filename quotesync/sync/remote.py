from __future__ import annotations

import logging
from typing import Any

from ..config import QuoteSyncConfig
from ..errors import DecodeError, TransportError
from ..store import Quote
from . import http_client

logger = logging.getLogger(__name__)


def quotes_from_records(records: Any, *, category: str, limit: int | None = None) -> list[Quote]:
    """Map remote records to quotes; each record's title becomes the text."""
    if not isinstance(records, list):
        raise DecodeError(f"expected a list of records, got {type(records).__name__}")
    if limit is not None:
        records = records[:limit]
    quotes: list[Quote] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        title = record.get("title")
        if not isinstance(title, str) or not title:
            continue
        quotes.append(Quote(text=title, category=category))
    return quotes


class RemoteSource:
    def __init__(
        self,
        url: str,
        *,
        limit: int = 5,
        category: str = "Server",
        timeout_s: float = 10.0,
    ) -> None:
        self.url = url
        self.limit = limit
        self.category = category
        self.timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: QuoteSyncConfig) -> RemoteSource:
        return cls(
            config.remote_url,
            limit=config.remote_limit,
            category=config.remote_category,
            timeout_s=config.remote_timeout_s,
        )

    def fetch(self) -> list[Quote]:
        """Fetch the remote snapshot, raising TransportError or DecodeError."""
        url = http_client.build_url(self.url, {"_limit": self.limit})
        status, payload = http_client.request_json("GET", url, timeout_s=self.timeout_s)
        if not 200 <= status < 300:
            raise TransportError(f"GET {url} returned {status}", status=status)
        return quotes_from_records(payload, category=self.category, limit=self.limit)

    def fetch_remote_snapshot(self) -> list[Quote]:
        try:
            return self.fetch()
        except (TransportError, DecodeError) as exc:
            logger.warning("remote fetch failed: %s", exc, exc_info=exc)
            return []

    def post_quote(self, quote: Quote) -> Any:
        url = http_client.build_url(self.url)
        try:
            status, payload = http_client.request_json(
                "POST", url, body=quote.to_dict(), timeout_s=self.timeout_s
            )
        except (TransportError, DecodeError) as exc:
            logger.warning("posting quote failed: %s", exc, exc_info=exc)
            return None
        if not 200 <= status < 300:
            logger.warning("posting quote failed: POST %s returned %s", url, status)
            return None
        logger.info("quote posted to server: %s", payload)
        return payload
