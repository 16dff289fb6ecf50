# -------- ADMIN ORDERS --------
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from bookstore_orders.database import get_session
from bookstore_orders.dependencies.admin import require_admin
from bookstore_orders.schemas.orders_schemas import (
    OrderEventView,
    OrderPage,
    OrderResponse,
    UpdateOrderStatusRequest,
)
from bookstore_orders.services import order_service

router = APIRouter()


@router.get("", response_model=OrderPage)
def list_orders(
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = Query(None),
    session: Session = Depends(get_session),
    _: int = Depends(require_admin)
):
    return order_service.list_all_orders(session, status=status, page=page, limit=limit)


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    data: UpdateOrderStatusRequest,
    session: Session = Depends(get_session),
    _: int = Depends(require_admin)
):
    return order_service.admin_set_order_status(session, order_id, data.status)


@router.get("/{order_id}/timeline", response_model=List[OrderEventView])
def order_timeline(
    order_id: int,
    session: Session = Depends(get_session),
    _: int = Depends(require_admin)
):
    return order_service.get_order_timeline(session, order_id)
