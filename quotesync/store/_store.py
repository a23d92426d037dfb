from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence

from ..errors import ValidationError
from ..storage import KeyValueStorage
from .types import Quote, QuoteCollection

logger = logging.getLogger(__name__)

QUOTES_KEY = "quotes"

SEED_QUOTES: tuple[Quote, ...] = (
    Quote(
        text="The best way to get started is to quit talking and begin doing.",
        category="Motivation",
    ),
    Quote(text="Don't let yesterday take up too much of today.", category="Inspiration"),
    Quote(text="Success is not final; failure is not fatal.", category="Wisdom"),
)


def _encode(quotes: Iterable[Quote]) -> str:
    return json.dumps([quote.to_dict() for quote in quotes], ensure_ascii=False)


class QuoteStore:
    """Loads, mutates and persists the quote collection.

    Every mutation writes the whole collection under ``QUOTES_KEY`` first and
    only then updates the in-memory list, so a failed write leaves both sides
    unchanged.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = QUOTES_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> QuoteCollection:
        raw = self.storage.get(self.key)
        if raw is None:
            return QuoteCollection(items=list(SEED_QUOTES))
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("persisted quotes are not valid json; using seed quotes")
            return QuoteCollection(items=list(SEED_QUOTES))
        if not isinstance(data, list):
            logger.debug("persisted quotes are not a list; using seed quotes")
            return QuoteCollection(items=list(SEED_QUOTES))
        quotes = [quote for quote in map(Quote.from_dict, data) if quote is not None]
        if data and not quotes:
            return QuoteCollection(items=list(SEED_QUOTES))
        return QuoteCollection(items=quotes)

    def save(self, collection: QuoteCollection) -> None:
        self.storage.set(self.key, _encode(collection.snapshot()))

    def add(self, collection: QuoteCollection, quote: Quote) -> Quote:
        text = (quote.text or "").strip()
        category = (quote.category or "").strip()
        if not text or not category:
            raise ValidationError("Please enter both quote text and category.")
        stored = Quote(text=text, category=category)
        with collection.lock:
            self._commit(collection, [*collection.items, stored])
        return stored

    def extend(self, collection: QuoteCollection, quotes: Sequence[Quote]) -> int:
        if not quotes:
            return 0
        with collection.lock:
            self._commit(collection, [*collection.items, *quotes])
        return len(quotes)

    def replace(self, collection: QuoteCollection, quotes: Sequence[Quote]) -> None:
        with collection.lock:
            self._commit(collection, quotes)

    def _commit(self, collection: QuoteCollection, quotes: Sequence[Quote]) -> None:
        self.storage.set(self.key, _encode(quotes))
        collection._set_items(quotes)
