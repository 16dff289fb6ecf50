from fastapi import APIRouter, Depends
from sqlmodel import Session

from bookstore_orders.database import get_session
from bookstore_orders.dependencies.identity import get_current_user_id
from bookstore_orders.schemas.checkout_schemas import CheckoutRequest, CheckoutResponse
from bookstore_orders.services import checkout_service

router = APIRouter()


@router.post("/", response_model=CheckoutResponse)
def checkout(
    data: CheckoutRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return checkout_service.checkout(session, user_id, data.shipping_address)
