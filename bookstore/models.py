from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel

# Fields a caller may replace after creation; id and createdat are store-owned.
UPDATABLE_FIELDS = ("title", "author", "genre", "price")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, including the trailing 'Z' form. Returns None when unreadable."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass
class Book:
    id: int
    title: str
    author: str
    genre: str
    price: Any
    createdat: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "price": self.price,
            "createdat": self.createdat.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        """Build a Book from its persisted form.

        Raises KeyError/TypeError/ValueError when the id is missing or not an
        integer. A missing or unreadable createdat is repaired to now.
        """
        raw_id = data["id"]
        if isinstance(raw_id, bool):
            raise TypeError("book id must be an integer")
        return cls(
            id=int(raw_id),
            title=data.get("title"),
            author=data.get("author"),
            genre=data.get("genre"),
            price=data.get("price"),
            createdat=parse_timestamp(data.get("createdat")) or utcnow(),
        )


# Request bodies for the HTTP layer. Every field is optional so the handlers
# can answer missing fields with 400 rather than a schema error.

class BookCreate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    price: Optional[float] = None


class BookUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    price: Optional[float] = None
