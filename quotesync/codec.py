from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from .errors import DecodeError, ValidationError
from .fs_paths import ensure_path
from .store import Quote

DEFAULT_EXPORT_NAME = "quotes.json"


def export_document(collection: Iterable[Quote]) -> str:
    return json.dumps([quote.to_dict() for quote in collection], ensure_ascii=False, indent=2)


def import_document(raw: str) -> list[Quote]:
    """Parse an exported document.

    Entries without a text or category are dropped. Everything else is passed
    through untrimmed, and the caller appends the result without dedup.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DecodeError("Invalid JSON: document is nested too deeply") from exc
    if not isinstance(data, list):
        raise ValidationError("Import file must contain a JSON array of quotes")
    quotes = [quote for quote in map(Quote.from_dict, data) if quote is not None]
    if not quotes:
        raise ValidationError("No valid quotes found (each needs text and category)")
    return quotes


def export_file(collection: Iterable[Quote], path: str | Path = DEFAULT_EXPORT_NAME) -> Path:
    output_path = ensure_path(path)
    output_path.write_text(export_document(collection) + "\n", encoding="utf-8")
    return output_path


def read_document(path: str | Path) -> str:
    raw = Path(path).expanduser().read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Import file is not valid UTF-8: {exc}") from exc


def import_file(path: str | Path) -> list[Quote]:
    return import_document(read_document(path))
