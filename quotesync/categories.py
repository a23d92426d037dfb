from __future__ import annotations

from collections.abc import Iterable, Sequence

from .storage import KeyValueStorage
from .store import Quote

ALL_CATEGORIES = "all"
SELECTED_CATEGORY_KEY = "selectedCategory"


def derive_categories(collection: Iterable[Quote]) -> list[str]:
    """Return "all" followed by each category in first-occurrence order."""
    categories = [ALL_CATEGORIES]
    seen: set[str] = set()
    for quote in collection:
        if quote.category in seen:
            continue
        seen.add(quote.category)
        categories.append(quote.category)
    return categories


def restore_selection(persisted_value: str | None, available_categories: Sequence[str]) -> str:
    # A value missing from available_categories is kept; it simply matches no quotes.
    if persisted_value:
        return persisted_value
    return ALL_CATEGORIES


class CategoryIndex:
    def __init__(self, storage: KeyValueStorage, *, key: str = SELECTED_CATEGORY_KEY) -> None:
        self.storage = storage
        self.key = key
        self.categories: list[str] = [ALL_CATEGORIES]
        self.selection = ALL_CATEGORIES

    def refresh(self, collection: Iterable[Quote]) -> list[str]:
        self.categories = derive_categories(collection)
        return self.categories

    def restore(self) -> str:
        self.selection = restore_selection(self.storage.get(self.key), self.categories)
        return self.selection

    def set_selection(self, value: str) -> None:
        self.storage.set(self.key, value)
        self.selection = value

    @property
    def is_stale(self) -> bool:
        return self.selection not in self.categories
