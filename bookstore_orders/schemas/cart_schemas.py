from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from bookstore_orders.models.cart import Cart, CartItem


class CartAddRequest(SQLModel):
    book_id: int
    quantity: int = 1


class CartUpdateRequest(SQLModel):
    quantity: int


class CartItemView(BaseModel):
    book_id: int
    book_title: str
    price: Decimal
    quantity: int
    line_total: Decimal

    @classmethod
    def from_item(cls, item: CartItem) -> "CartItemView":
        return cls(
            book_id=item.book_id,
            book_title=item.book_title,
            price=item.price,
            quantity=item.quantity,
            line_total=item.line_total,
        )


class CartView(BaseModel):
    id: int
    user_id: int
    items: List[CartItemView] = Field(default_factory=list)
    total_price: Decimal
    total_items: int = 0
    checked_out: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartView":
        items = [CartItemView.from_item(item) for item in cart.items]
        return cls(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            total_price=cart.total_price,
            total_items=len(items),
            checked_out=cart.checked_out,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )
