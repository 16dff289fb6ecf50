from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from bookstore_orders.models.base import utcnow


class Book(SQLModel, table=True):
    # main info
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    author: str
    isbn: Optional[str] = None

    # shop details
    price: Decimal = Field(max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    offer_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    stock: Optional[int] = None
    is_active: bool = True

    # timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def in_stock(self) -> bool:
        return self.stock is not None and self.stock > 0

    @property
    def effective_price(self) -> Decimal:
        # offer > discount > regular
        return self.offer_price or self.discount_price or self.price
