from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .models import Book
from .repository import BookRepository

logger = logging.getLogger("bookstore")


def coerce_price(value: Any) -> float:
    """Best-effort numeric price; anything unusable counts as zero."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


@dataclass
class DiscountResult:
    genre: str
    discount_percentage: float
    books: List[Book] = field(default_factory=list)
    total_original_price: float = 0.0
    total_discounted_price: float = 0.0


class DiscountService:
    """Genre-scoped price totals before and after a percentage discount.

    Read-only: never mutates the books it sums. The discount is applied as
    given; range checking belongs to the caller.
    """

    def __init__(self, repository: BookRepository) -> None:
        self.repository = repository

    def calculate_discounted_total(self, genre: Optional[str], discount_percent: float) -> DiscountResult:
        books = self.repository.find_by_genre(genre or "")
        total_original = sum((coerce_price(b.price) for b in books), 0.0)
        total_discounted = total_original * (1 - discount_percent / 100)
        logger.debug(
            f"Discount for genre={genre!r} at {discount_percent}%: "
            f"{len(books)} books, {total_original} -> {total_discounted}"
        )
        return DiscountResult(
            genre=genre,
            discount_percentage=discount_percent,
            books=books,
            total_original_price=total_original,
            total_discounted_price=total_discounted,
        )
