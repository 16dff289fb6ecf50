from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from bookstore_orders.constants.order_status import OrderStatus
from bookstore_orders.models.base import to_money, utcnow
from bookstore_orders.models.order_item import OrderItem


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    shipping_address: str

    # fixed at creation, never recomputed
    total_amount: Decimal = Field(max_digits=12, decimal_places=2)

    status: str = Field(default=OrderStatus.PENDING.value, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    items: List["OrderItem"] = Relationship(
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "OrderItem.id",
        }
    )

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @staticmethod
    def total_of(items: List[OrderItem]) -> Decimal:
        return to_money(sum((item.line_total for item in items), Decimal("0")))
