from fastapi import APIRouter, Depends
from sqlmodel import Session

from bookstore_orders.database import get_session
from bookstore_orders.dependencies.identity import get_current_user_id
from bookstore_orders.schemas.cart_schemas import CartAddRequest, CartUpdateRequest, CartView
from bookstore_orders.services import cart_service

router = APIRouter()


# View Cart

@router.get("/", response_model=CartView)
def get_cart(
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return cart_service.get_cart(session, user_id)


# Add to Cart

@router.post("/add", response_model=CartView)
def add_to_cart(
    data: CartAddRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return cart_service.add_to_cart(session, user_id, data.book_id, data.quantity)


# Update Cart

@router.put("/update/{book_id}", response_model=CartView)
def update_cart_item(
    book_id: int,
    data: CartUpdateRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return cart_service.update_cart_item(session, user_id, book_id, data.quantity)


# Remove from Cart

@router.delete("/remove/{book_id}", response_model=CartView)
def remove_item(
    book_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return cart_service.remove_from_cart(session, user_id, book_id)


# Clear Cart

@router.delete("/clear", response_model=CartView)
def clear_cart(
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return cart_service.clear_cart(session, user_id)
