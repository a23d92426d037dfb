from __future__ import annotations

from ._store import QUOTES_KEY, SEED_QUOTES, QuoteStore
from .types import Quote, QuoteCollection

__all__ = [
    "QUOTES_KEY",
    "SEED_QUOTES",
    "Quote",
    "QuoteCollection",
    "QuoteStore",
]
