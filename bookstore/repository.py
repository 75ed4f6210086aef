from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

# Repository contract the API and services program against. Keeps the
# handler layer decoupled from the concrete persistence backend and lets
# tests swap in the memory-only implementation.

from .models import UPDATABLE_FIELDS, Book, utcnow


class BookRepository(ABC):
    @abstractmethod
    def create(self, title: str, author: str, genre: str, price: Any) -> Book:
        """Store a new book, assigning its id and creation timestamp."""

    @abstractmethod
    def find_by_id(self, book_id: int) -> Optional[Book]:
        """Return the book with this id, or None."""

    @abstractmethod
    def update(self, book_id: int, changes: Mapping[str, Any]) -> Optional[Book]:
        """Merge changes into an existing book. Returns None if the id is unknown."""

    @abstractmethod
    def delete(self, book_id: int) -> bool:
        """Remove a book. Returns False if the id is unknown."""

    @abstractmethod
    def find_by_genre(self, genre: Optional[str]) -> List[Book]:
        """Return books whose genre matches, ignoring case and surrounding whitespace."""


def normalize_genre(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


class InMemoryBookRepository(BookRepository):
    """List-backed repository. Subclasses persist by overriding ``_persist``."""

    def __init__(self) -> None:
        self._books: List[Book] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._books)

    def all(self) -> List[Book]:
        return list(self._books)

    def _persist(self) -> None:
        pass

    def create(self, title: str, author: str, genre: str, price: Any) -> Book:
        book = Book(
            id=self._next_id,
            title=title,
            author=author,
            genre=genre,
            price=price,
            createdat=utcnow(),
        )
        self._next_id += 1
        self._books.append(book)
        self._persist()
        return book

    def find_by_id(self, book_id: int) -> Optional[Book]:
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def update(self, book_id: int, changes: Mapping[str, Any]) -> Optional[Book]:
        book = self.find_by_id(book_id)
        if book is None:
            return None
        for name, value in changes.items():
            # id, createdat and unknown keys are silently dropped
            if name in UPDATABLE_FIELDS:
                setattr(book, name, value)
        self._persist()
        return book

    def delete(self, book_id: int) -> bool:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                del self._books[index]
                self._persist()
                return True
        return False

    def find_by_genre(self, genre: Optional[str]) -> List[Book]:
        target = normalize_genre(genre)
        if not target:
            return []
        return [book for book in self._books if normalize_genre(book.genre) == target]
