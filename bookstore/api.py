import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from .models import BookCreate, BookUpdate
from .repository import BookRepository
from .services import DiscountService

logger = logging.getLogger("bookstore")

router = APIRouter()


def get_repository(request: Request) -> BookRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Book store not initialized")
    return repository


def get_discount_service(repository: BookRepository = Depends(get_repository)) -> DiscountService:
    return DiscountService(repository)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _is_valid_price(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/books", status_code=201)
async def create_book(payload: BookCreate, repository: BookRepository = Depends(get_repository)):
    if _is_blank(payload.title) or _is_blank(payload.author) or _is_blank(payload.genre) or payload.price is None:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if not _is_valid_price(payload.price):
        raise HTTPException(status_code=400, detail="Price must be a finite, non-negative number")
    book = repository.create(
        title=payload.title,
        author=payload.author,
        genre=payload.genre,
        price=payload.price,
    )
    logger.info(f"Created book id={book.id} title={book.title!r}")
    return book.to_dict()


# Registered before /books/{book_id} so the literal path wins
@router.get("/books/discounted-price")
async def discounted_price(
    genre: Optional[str] = None,
    discount: Optional[str] = None,
    service: DiscountService = Depends(get_discount_service),
):
    if _is_blank(genre) or _is_blank(discount):
        raise HTTPException(status_code=400, detail="Missing genre or discount query parameter")
    try:
        discount_value = float(discount)
    except ValueError:
        discount_value = math.nan
    if math.isnan(discount_value) or discount_value < 0 or discount_value > 100:
        raise HTTPException(status_code=400, detail="Discount must be a number between 0 and 100")

    result = service.calculate_discounted_total(genre, discount_value)
    if not result.books:
        raise HTTPException(status_code=404, detail=f"No books found in genre {genre}")
    # camelCase keys are the published shape of this response
    return {
        "genre": result.genre,
        "discountPercentage": result.discount_percentage,
        "totalOriginalPrice": result.total_original_price,
        "totalDiscountedPrice": result.total_discounted_price,
    }


@router.get("/books/{book_id}")
async def get_book(book_id: int, repository: BookRepository = Depends(get_repository)):
    book = repository.find_by_id(book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book.to_dict()


@router.put("/books/{book_id}")
async def update_book(book_id: int, payload: BookUpdate, repository: BookRepository = Depends(get_repository)):
    changes = payload.model_dump(exclude_unset=True)
    for name in ("title", "author", "genre"):
        if name in changes and _is_blank(changes[name]):
            raise HTTPException(status_code=400, detail=f"{name} must not be empty")
    if "price" in changes and not _is_valid_price(changes["price"]):
        raise HTTPException(status_code=400, detail="Price must be a finite, non-negative number")

    book = repository.update(book_id, changes)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    logger.info(f"Updated book id={book.id} fields={sorted(changes)}")
    return book.to_dict()


@router.delete("/books/{book_id}", status_code=204)
async def delete_book(book_id: int, repository: BookRepository = Depends(get_repository)):
    if not repository.delete(book_id):
        raise HTTPException(status_code=404, detail="Book not found")
    logger.info(f"Deleted book id={book_id}")
    return Response(status_code=204)
