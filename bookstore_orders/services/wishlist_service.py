# bookstore_orders/services/wishlist_service.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from bookstore_orders.config import settings
from bookstore_orders.database import REPEATABLE_READ, transaction
from bookstore_orders.exceptions import (
    BookAlreadyInWishlist,
    BookNotInWishlist,
    InvalidRequest,
    OwnerNotFound,
    WishlistAlreadyExists,
    WishlistNotFound,
)
from bookstore_orders.models.base import utcnow
from bookstore_orders.models.book import Book
from bookstore_orders.models.wishlist import Wishlist, WishlistBook
from bookstore_orders.schemas.wishlist_schemas import (
    WishlistBookView,
    WishlistResponse,
    WishlistStatsResponse,
)
from bookstore_orders.services import catalog, directory

logger = logging.getLogger(__name__)

RECENTLY_ADDED_LIMIT = 5


def normalize_name(name: str) -> str:
    cleaned = (name or "").strip()
    max_length = settings.wishlist_name_max_length
    if not cleaned or len(cleaned) > max_length:
        raise InvalidRequest(f"Wishlist name must be between 1 and {max_length} characters")
    return cleaned


def _name_taken(session: Session, owner_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
    statement = select(Wishlist.id).where(
        Wishlist.user_id == owner_id,
        func.lower(Wishlist.name) == name.lower(),
    )
    if exclude_id is not None:
        statement = statement.where(Wishlist.id != exclude_id)
    return session.exec(statement).first() is not None


def find_wishlist(session: Session, owner_id: int, wishlist_id: int, for_update: bool = False) -> Wishlist:
    statement = select(Wishlist).where(
        Wishlist.id == wishlist_id,
        Wishlist.user_id == owner_id,
    )
    if for_update:
        statement = statement.with_for_update()

    wishlist = session.exec(statement).first()
    if not wishlist:
        raise WishlistNotFound(wishlist_id)
    return wishlist


def _book_views(session: Session, wishlist: Wishlist, newest_first: bool = False, limit: Optional[int] = None) -> List[WishlistBookView]:
    statement = (
        select(WishlistBook, Book)
        .join(Book, WishlistBook.book_id == Book.id)
        .where(WishlistBook.wishlist_id == wishlist.id)
    )
    if newest_first:
        statement = statement.order_by(WishlistBook.added_at.desc(), WishlistBook.id.desc())
    else:
        statement = statement.order_by(WishlistBook.id)
    if limit:
        statement = statement.limit(limit)

    return [
        WishlistBookView(
            book_id=book.id,
            title=book.title,
            author=book.author,
            price=book.effective_price,
            added_at=entry.added_at,
        )
        for entry, book in session.exec(statement).all()
    ]


def to_response(session: Session, wishlist: Wishlist) -> WishlistResponse:
    books = _book_views(session, wishlist)
    return WishlistResponse(
        id=wishlist.id,
        user_id=wishlist.user_id,
        name=wishlist.name,
        books=books,
        book_count=len(books),
        created_at=wishlist.created_at,
        updated_at=wishlist.updated_at,
    )


# -------- public operations --------

def list_wishlists(session: Session, owner_id: int) -> List[WishlistResponse]:
    with transaction(session):
        if not directory.resolve_owner(session, owner_id):
            raise OwnerNotFound(owner_id)

        wishlists = session.exec(
            select(Wishlist).where(Wishlist.user_id == owner_id).order_by(Wishlist.id)
        ).all()
        logger.debug(f"Found {len(wishlists)} wishlists for user ID: {owner_id}")
        return [to_response(session, wishlist) for wishlist in wishlists]


def get_wishlist(session: Session, owner_id: int, wishlist_id: int) -> WishlistResponse:
    with transaction(session):
        return to_response(session, find_wishlist(session, owner_id, wishlist_id))


def create_wishlist(session: Session, owner_id: int, name: str) -> WishlistResponse:
    name = normalize_name(name)
    logger.info(f"Adding new wishlist '{name}' for user ID: {owner_id}")

    with transaction(session):
        if not directory.resolve_owner(session, owner_id):
            raise OwnerNotFound(owner_id)

        if _name_taken(session, owner_id, name):
            raise WishlistAlreadyExists(name)

        wishlist = Wishlist(user_id=owner_id, name=name)
        session.add(wishlist)
        session.flush()

        logger.info(f"Created wishlist with ID: {wishlist.id} for user ID: {owner_id}")
        return to_response(session, wishlist)


def rename_wishlist(session: Session, owner_id: int, wishlist_id: int, name: str) -> WishlistResponse:
    name = normalize_name(name)

    with transaction(session):
        wishlist = find_wishlist(session, owner_id, wishlist_id, for_update=True)
        old_name = wishlist.name

        if _name_taken(session, owner_id, name, exclude_id=wishlist.id):
            raise WishlistAlreadyExists(name)

        wishlist.name = name
        wishlist.updated_at = utcnow()
        session.add(wishlist)
        session.flush()

        logger.info(f"Renamed wishlist {wishlist_id} from '{old_name}' to '{name}'")
        return to_response(session, wishlist)


def delete_wishlist(session: Session, owner_id: int, wishlist_id: int) -> None:
    # repeatable read: a concurrent rename must not slip between lookup and delete
    with transaction(session, REPEATABLE_READ):
        wishlist = find_wishlist(session, owner_id, wishlist_id, for_update=True)
        name = wishlist.name
        session.delete(wishlist)
        session.flush()

    logger.info(f"Deleted wishlist with ID: {wishlist_id} and name '{name}' for user ID: {owner_id}")


def add_book_to_wishlist(session: Session, owner_id: int, wishlist_id: int, book_id: int) -> WishlistResponse:
    with transaction(session):
        wishlist = find_wishlist(session, owner_id, wishlist_id, for_update=True)
        catalog.lookup_book(session, book_id)

        if wishlist.has_book(book_id):
            raise BookAlreadyInWishlist(book_id, wishlist_id)

        wishlist.add_book(book_id)
        session.add(wishlist)
        session.flush()

        logger.info(f"Added book ID: {book_id} to wishlist {wishlist_id}")
        return to_response(session, wishlist)


def remove_book_from_wishlist(session: Session, owner_id: int, wishlist_id: int, book_id: int) -> WishlistResponse:
    with transaction(session):
        wishlist = find_wishlist(session, owner_id, wishlist_id, for_update=True)
        catalog.lookup_book(session, book_id)

        if not wishlist.has_book(book_id):
            raise BookNotInWishlist(book_id, wishlist_id)

        wishlist.remove_book(book_id)
        session.add(wishlist)
        session.flush()

        logger.info(f"Removed book ID: {book_id} from wishlist {wishlist_id}")
        return to_response(session, wishlist)


def wishlist_stats(session: Session, owner_id: int, wishlist_id: int) -> WishlistStatsResponse:
    with transaction(session):
        wishlist = find_wishlist(session, owner_id, wishlist_id)
        today = utcnow().date()

        return WishlistStatsResponse(
            wishlist_id=wishlist.id,
            wishlist_name=wishlist.name,
            total_books=len(wishlist.books),
            books_added_today=sum(1 for entry in wishlist.books if entry.added_at.date() == today),
            last_modified=wishlist.updated_at,
            recently_added=_book_views(session, wishlist, newest_first=True, limit=RECENTLY_ADDED_LIMIT),
        )
