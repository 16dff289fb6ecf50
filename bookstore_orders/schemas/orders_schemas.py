from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from bookstore_orders.models.order import Order
from bookstore_orders.models.order_event import OrderEvent
from bookstore_orders.models.order_item import OrderItem


class OrderItemView(BaseModel):
    book_id: int
    book_title: str
    price: Decimal
    quantity: int
    line_total: Decimal

    @classmethod
    def from_item(cls, item: OrderItem) -> "OrderItemView":
        return cls(
            book_id=item.book_id,
            book_title=item.book_title,
            price=item.price,
            quantity=item.quantity,
            line_total=item.line_total,
        )


class OrderResponse(BaseModel):
    id: int
    user_id: int
    status: str
    total_amount: Decimal
    shipping_address: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemView]

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total_amount=order.total_amount,
            shipping_address=order.shipping_address,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[OrderItemView.from_item(item) for item in order.items],
        )


class OrderPage(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    limit: int
    results: List[OrderResponse]


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderEventView(BaseModel):
    event_type: str
    label: str
    meta: Optional[dict] = None
    created_by: str
    created_at: datetime

    @classmethod
    def from_event(cls, event: OrderEvent) -> "OrderEventView":
        return cls(
            event_type=event.event_type,
            label=event.label,
            meta=event.meta,
            created_by=event.created_by,
            created_at=event.created_at,
        )
