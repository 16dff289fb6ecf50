from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime, UniqueConstraint
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from bookstore_orders.models.base import to_money, utcnow


class Cart(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)

    total_price: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    checked_out: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # the cart owns its lines; lines only keep the cart_id value
    items: List["CartItem"] = Relationship(
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "CartItem.id",
        }
    )

    def find_item(self, book_id: int) -> Optional["CartItem"]:
        for item in self.items:
            if item.book_id == book_id:
                return item
        return None

    def book_ids(self) -> List[int]:
        return [item.book_id for item in self.items]

    def add_book(self, book_id: int, quantity: int = 1, price=None, title: str = "") -> "CartItem":
        item = self.find_item(book_id)

        if item:
            # price was snapshotted when the line was created
            item.quantity += quantity
        else:
            item = CartItem(
                book_id=book_id,
                book_title=title,
                quantity=quantity,
                price=to_money(price),
            )
            self.items.append(item)

        self.recalculate_total()
        return item

    def set_quantity(self, book_id: int, quantity: int) -> None:
        item = self.find_item(book_id)
        if item:
            item.quantity = quantity
        self.recalculate_total()

    def remove_book(self, book_id: int) -> None:
        item = self.find_item(book_id)
        if item:
            self.items.remove(item)
        self.recalculate_total()

    def clear(self) -> None:
        self.items.clear()
        self.recalculate_total()

    def recalculate_total(self) -> Decimal:
        # always from scratch, never patched incrementally
        self.total_price = to_money(
            sum((item.line_total for item in self.items), Decimal("0"))
        )
        self.updated_at = utcnow()
        return self.total_price


class CartItem(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("cart_id", "book_id", name="uq_cart_book"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    cart_id: Optional[int] = Field(default=None, foreign_key="cart.id", index=True)
    book_id: int = Field(foreign_key="book.id")

    book_title: str = ""
    price: Decimal = Field(max_digits=10, decimal_places=2)
    quantity: int = 1
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
