from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from bookstore_orders.database import get_session
from bookstore_orders.dependencies.identity import get_current_user_id
from bookstore_orders.schemas.wishlist_schemas import (
    BulkBooksRequest,
    BulkOperationResponse,
    WishlistCreateRequest,
    WishlistRenameRequest,
    WishlistResponse,
    WishlistStatsResponse,
)
from bookstore_orders.services import bulk_wishlist, wishlist_service

router = APIRouter()


@router.get("/", response_model=List[WishlistResponse])
def list_wishlists(
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.list_wishlists(session, user_id)


@router.post("/", response_model=WishlistResponse, status_code=status.HTTP_201_CREATED)
def create_wishlist(
    data: WishlistCreateRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.create_wishlist(session, user_id, data.name)


@router.get("/{wishlist_id}", response_model=WishlistResponse)
def get_wishlist(
    wishlist_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.get_wishlist(session, user_id, wishlist_id)


@router.put("/{wishlist_id}", response_model=WishlistResponse)
def rename_wishlist(
    wishlist_id: int,
    data: WishlistRenameRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.rename_wishlist(session, user_id, wishlist_id, data.name)


@router.delete("/{wishlist_id}")
def delete_wishlist(
    wishlist_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    wishlist_service.delete_wishlist(session, user_id, wishlist_id)
    return {"message": "Wishlist deleted"}


@router.get("/{wishlist_id}/stats", response_model=WishlistStatsResponse)
def wishlist_stats(
    wishlist_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.wishlist_stats(session, user_id, wishlist_id)


@router.post("/{wishlist_id}/books/{book_id}", response_model=WishlistResponse)
def add_to_wishlist(
    wishlist_id: int,
    book_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.add_book_to_wishlist(session, user_id, wishlist_id, book_id)


@router.delete("/{wishlist_id}/books/{book_id}", response_model=WishlistResponse)
def remove_from_wishlist(
    wishlist_id: int,
    book_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return wishlist_service.remove_book_from_wishlist(session, user_id, wishlist_id, book_id)


# -------- BULK --------

@router.post("/{wishlist_id}/bulk/add", response_model=BulkOperationResponse)
def bulk_add(
    wishlist_id: int,
    data: BulkBooksRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return bulk_wishlist.bulk_add_books(session, user_id, wishlist_id, data.book_ids)


@router.post("/{wishlist_id}/bulk/remove", response_model=BulkOperationResponse)
def bulk_remove(
    wishlist_id: int,
    data: BulkBooksRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id)
):
    return bulk_wishlist.bulk_remove_books(session, user_id, wishlist_id, data.book_ids)
