from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Quote:
    text: str
    category: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "category": self.category}

    @classmethod
    def from_dict(cls, data: Any) -> Quote | None:
        """Build a quote from a decoded JSON object, or None if text/category are missing."""
        if not isinstance(data, dict):
            return None
        text = data.get("text")
        category = data.get("category")
        if not text or not category:
            return None
        # Numbers and booleans are stringified; nested values are not quotes.
        scalars = (str, int, float)
        if not isinstance(text, scalars) or not isinstance(category, scalars):
            return None
        return cls(text=str(text), category=str(category))


@dataclass
class QuoteCollection:
    """Ordered quotes plus a version bumped on every mutation.

    Callers that read-modify-write hold ``lock`` for the whole step.
    """

    items: list[Quote] = field(default_factory=list)
    version: int = 0
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __iter__(self) -> Iterator[Quote]:
        return iter(list(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Quote:
        return self.items[index]

    def snapshot(self) -> list[Quote]:
        with self.lock:
            return list(self.items)

    def _set_items(self, items: Iterable[Quote]) -> None:
        self.items = list(items)
        self.version += 1
