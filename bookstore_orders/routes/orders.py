from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from bookstore_orders.database import get_session
from bookstore_orders.dependencies.identity import get_current_user_id
from bookstore_orders.schemas.orders_schemas import OrderEventView, OrderResponse
from bookstore_orders.services import order_service

router = APIRouter()


@router.get("/", response_model=List[OrderResponse])
def list_my_orders(
    status: Optional[str] = Query(None),
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return order_service.list_orders(session, user_id, status)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return order_service.get_order(session, user_id, order_id)


@router.put("/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return order_service.cancel_order(session, order_id, user_id)


@router.get("/{order_id}/timeline", response_model=List[OrderEventView])
def order_timeline(
    order_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return order_service.get_order_timeline(session, order_id, owner_id=user_id)
