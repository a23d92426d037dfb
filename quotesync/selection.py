from __future__ import annotations

import html
import json
import random
from collections.abc import Iterable

from .categories import ALL_CATEGORIES
from .storage import KeyValueStorage
from .store import Quote

LAST_VIEWED_KEY = "lastViewedQuote"
NO_QUOTES_MESSAGE = "No quotes available for this category."


def candidates(collection: Iterable[Quote], category_filter: str) -> list[Quote]:
    if category_filter == ALL_CATEGORIES:
        return list(collection)
    return [quote for quote in collection if quote.category == category_filter]


def pick_quote(
    collection: Iterable[Quote],
    category_filter: str,
    *,
    session_storage: KeyValueStorage | None = None,
    rng: random.Random | None = None,
) -> Quote | None:
    """Pick a random quote matching the filter, or None when nothing matches.

    The pick is recorded in session storage for display restore only.
    """
    pool = candidates(collection, category_filter)
    chosen = (rng or random).choice(pool) if pool else None
    if session_storage is not None:
        payload = chosen.to_dict() if chosen is not None else None
        session_storage.set(LAST_VIEWED_KEY, json.dumps(payload, ensure_ascii=False))
    return chosen


def last_viewed(session_storage: KeyValueStorage) -> Quote | None:
    raw = session_storage.get(LAST_VIEWED_KEY)
    if not raw:
        return None
    try:
        return Quote.from_dict(json.loads(raw))
    except (json.JSONDecodeError, RecursionError):
        return None


def render_quote(quote: Quote | None) -> str:
    if quote is None:
        return NO_QUOTES_MESSAGE
    return (
        f'<blockquote>"{html.escape(quote.text)}"</blockquote>\n'
        f"<p><strong>Category:</strong> {html.escape(quote.category)}</p>"
    )
