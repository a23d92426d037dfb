from quotesync.categories import (
    ALL_CATEGORIES,
    SELECTED_CATEGORY_KEY,
    CategoryIndex,
    derive_categories,
    restore_selection,
)
from quotesync.selection import pick_quote
from quotesync.storage import MemoryKeyValueStorage
from quotesync.store import Quote


def test_derive_categories_keeps_first_occurrence_order() -> None:
    quotes = [
        Quote("a", "Zen"),
        Quote("b", "Art"),
        Quote("c", "Zen"),
        Quote("d", "Music"),
        Quote("e", "Art"),
    ]
    assert derive_categories(quotes) == ["all", "Zen", "Art", "Music"]


def test_derive_categories_of_empty_collection() -> None:
    assert derive_categories([]) == [ALL_CATEGORIES]


def test_restore_selection_defaults_to_all() -> None:
    assert restore_selection(None, ["all", "X"]) == "all"
    assert restore_selection("", ["all", "X"]) == "all"


def test_restore_selection_keeps_stale_value() -> None:
    assert restore_selection("Z", ["all", "X"]) == "Z"


def test_set_selection_writes_through() -> None:
    storage = MemoryKeyValueStorage()
    index = CategoryIndex(storage)
    index.set_selection("Wisdom")
    assert storage.get(SELECTED_CATEGORY_KEY) == "Wisdom"
    assert CategoryIndex(storage).restore() == "Wisdom"


def test_stale_selection_yields_no_quote() -> None:
    storage = MemoryKeyValueStorage()
    storage.set(SELECTED_CATEGORY_KEY, "Z")
    quotes = [Quote("A", "X"), Quote("B", "Y")]
    index = CategoryIndex(storage)
    index.refresh(quotes)

    selection = index.restore()

    assert selection == "Z"
    assert index.is_stale
    assert pick_quote(quotes, selection) is None
