# bookstore_orders/services/catalog.py
from dataclasses import dataclass
from decimal import Decimal

from sqlmodel import Session

from bookstore_orders.exceptions import BookNotFound
from bookstore_orders.models.base import to_money
from bookstore_orders.models.book import Book


@dataclass(frozen=True)
class BookInfo:
    book_id: int
    title: str
    author: str
    price: Decimal
    available: bool


def lookup_book(session: Session, book_id: int) -> BookInfo:
    """Resolve a book to its current effective price and availability.

    Soft-deleted books are reported as missing.
    """
    book = session.get(Book, book_id)
    if not book or not book.is_active:
        raise BookNotFound(book_id)

    return BookInfo(
        book_id=book.id,
        title=book.title,
        author=book.author,
        price=to_money(book.effective_price),
        available=book.in_stock,
    )
