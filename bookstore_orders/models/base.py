# bookstore_orders/models/base.py
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Protocol

CENTS = Decimal("0.01")


def utcnow() -> datetime:
    # timezone-aware UTC; every timestamp column is DateTime(timezone=True)
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class BookMembership(Protocol):
    """Capability shared by carts and wishlists: a set of book references."""

    def add_book(self, book_id: int, **kwargs) -> None: ...

    def remove_book(self, book_id: int) -> None: ...

    def book_ids(self) -> List[int]: ...
