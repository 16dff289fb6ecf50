from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal


class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: Optional[int] = Field(default=None, foreign_key="order.id", index=True)
    book_id: int = Field(foreign_key="book.id")

    # copied from the cart line at checkout, never changed afterwards
    book_title: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
