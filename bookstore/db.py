from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from .models import Book
from .repository import InMemoryBookRepository

logger = logging.getLogger("bookstore")

EMPTY_COLLECTION = "[]"


class CorruptStoreError(ValueError):
    """Raised internally when the books file cannot be read as a list of books."""


def _decode_books(raw: str) -> List[Book]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptStoreError(f"expected a list, got {type(data).__name__}")
    # Bad entries are dropped one by one; the rest of the file still loads
    books: List[Book] = []
    seen_ids = set()
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping books file entry {index}: expected an object, got {type(entry).__name__}")
            continue
        try:
            book = Book.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping unreadable books file entry {index} {entry!r}: {e!r}")
            continue
        if book.id in seen_ids:
            logger.warning(f"Skipping books file entry {index}: duplicate id {book.id}")
            continue
        seen_ids.add(book.id)
        books.append(book)
    return books


class JsonBookStore(InMemoryBookRepository):
    """File-backed book store.

    The whole collection lives in memory and is rewritten to a single JSON
    file after every mutation. A missing, empty or corrupt file is reset to
    an empty list at startup; single unreadable entries are skipped. Write failures are logged and swallowed: the
    in-memory change still counts as done.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path).resolve()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create directory for books file {self.path}: {e}")
        self._load()

    def _reset(self) -> None:
        self._books = []
        self._next_id = 1
        try:
            self.path.write_text(EMPTY_COLLECTION, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not initialize books file {self.path}: {e}")

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"Books file {self.path} not found; starting with an empty store")
            self._reset()
            return
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read books file {self.path}: {e}; starting empty")
            self._reset()
            return
        if not raw:
            self._reset()
            return
        try:
            books = _decode_books(raw)
        except CorruptStoreError as e:
            logger.warning(f"Books file {self.path} is corrupt ({e}); resetting to empty")
            self._reset()
            return
        self._books = books
        self._next_id = max((b.id for b in books), default=0) + 1
        logger.info(f"Loaded {len(books)} books from {self.path}")

    def _persist(self) -> None:
        try:
            payload = json.dumps([b.to_dict() for b in self._books], indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            # Non-fatal: memory already holds the change
            logger.warning(f"Failed to write books file {self.path}: {e}")
