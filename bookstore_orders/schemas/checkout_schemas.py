# bookstore_orders/schemas/checkout_schemas.py
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class CheckoutRequest(BaseModel):
    shipping_address: str = Field(min_length=1, max_length=500)


class CheckoutResponse(BaseModel):
    success: bool
    message: str
    order_id: int
    total_amount: Decimal
    estimated_delivery_date: date
