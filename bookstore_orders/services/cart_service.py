# bookstore_orders/services/cart_service.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from bookstore_orders.database import transaction
from bookstore_orders.exceptions import (
    CartAlreadyCheckedOut,
    CartNotFound,
    InvalidRequest,
    ItemNotInCart,
    OwnerNotFound,
)
from bookstore_orders.models.cart import Cart
from bookstore_orders.schemas.cart_schemas import CartView
from bookstore_orders.services import catalog, directory

logger = logging.getLogger(__name__)


def require_positive_quantity(quantity: int) -> None:
    if quantity is None or quantity < 1:
        raise InvalidRequest("Quantity must be at least 1")


# -------- aggregate --------

def find_cart(session: Session, owner_id: int, for_update: bool = False) -> Optional[Cart]:
    statement = select(Cart).where(Cart.user_id == owner_id)
    if for_update:
        # serialises concurrent read-modify-write on the same cart
        statement = statement.with_for_update()
    return session.exec(statement).first()


def load_cart(session: Session, owner_id: int, for_update: bool = False) -> Cart:
    cart = find_cart(session, owner_id, for_update=for_update)
    if not cart:
        raise CartNotFound(owner_id)
    return cart


def get_or_create_cart(session: Session, owner_id: int) -> Cart:
    cart = find_cart(session, owner_id, for_update=True)
    if cart:
        return cart

    if not directory.resolve_owner(session, owner_id):
        raise OwnerNotFound(owner_id)

    logger.info(f"Creating new cart for user ID: {owner_id}")
    cart = Cart(user_id=owner_id)
    try:
        with session.begin_nested():
            session.add(cart)
            session.flush()
    except IntegrityError:
        # a concurrent first add created the cart between our select and insert
        logger.info(f"Cart for user ID: {owner_id} was created concurrently, reusing it")
        cart = find_cart(session, owner_id, for_update=True)
        if not cart:
            raise
    return cart


def _ensure_open(cart: Cart) -> None:
    if cart.checked_out:
        raise CartAlreadyCheckedOut(cart.id)


def _require_item(cart: Cart, book_id: int) -> None:
    if not cart.find_item(book_id):
        raise ItemNotInCart(book_id, cart.id)


def add_item(session: Session, cart: Cart, book_id: int, quantity: int = 1) -> Cart:
    require_positive_quantity(quantity)
    _ensure_open(cart)

    book = catalog.lookup_book(session, book_id)

    existing = cart.find_item(book_id)
    cart.add_book(book.book_id, quantity, price=book.price, title=book.title)

    if existing:
        logger.info(
            f"Updated quantity for book ID: {book_id} in cart {cart.id}. New qty: {existing.quantity}"
        )
    else:
        logger.info(f"Added new book ID: {book_id} to cart {cart.id} at {book.price}")

    session.add(cart)
    session.flush()
    return cart


def update_item_quantity(session: Session, cart: Cart, book_id: int, quantity: int) -> Cart:
    require_positive_quantity(quantity)
    _ensure_open(cart)
    _require_item(cart, book_id)

    cart.set_quantity(book_id, quantity)
    session.add(cart)
    session.flush()
    return cart


def remove_item(session: Session, cart: Cart, book_id: int) -> Cart:
    _ensure_open(cart)
    _require_item(cart, book_id)

    cart.remove_book(book_id)
    session.add(cart)
    session.flush()
    return cart


def clear(session: Session, cart: Cart) -> Cart:
    cart.clear()
    session.add(cart)
    session.flush()
    return cart


# -------- public operations --------

def get_cart(session: Session, owner_id: int) -> CartView:
    with transaction(session):
        cart = load_cart(session, owner_id)
        return CartView.from_cart(cart)


def add_to_cart(session: Session, owner_id: int, book_id: int, quantity: int = 1) -> CartView:
    require_positive_quantity(quantity)
    logger.info(f"Adding book ID: {book_id} (qty: {quantity}) to cart for user ID: {owner_id}")

    with transaction(session):
        cart = get_or_create_cart(session, owner_id)
        add_item(session, cart, book_id, quantity)
        return CartView.from_cart(cart)


def update_cart_item(session: Session, owner_id: int, book_id: int, quantity: int) -> CartView:
    require_positive_quantity(quantity)
    logger.info(f"Updating book ID: {book_id} to qty: {quantity} in cart for user ID: {owner_id}")

    with transaction(session):
        cart = load_cart(session, owner_id, for_update=True)
        update_item_quantity(session, cart, book_id, quantity)
        return CartView.from_cart(cart)


def remove_from_cart(session: Session, owner_id: int, book_id: int) -> CartView:
    logger.info(f"Removing book ID: {book_id} from cart for user ID: {owner_id}")

    with transaction(session):
        cart = load_cart(session, owner_id, for_update=True)
        remove_item(session, cart, book_id)
        return CartView.from_cart(cart)


def clear_cart(session: Session, owner_id: int) -> CartView:
    logger.info(f"Clearing cart for user ID: {owner_id}")

    with transaction(session):
        cart = load_cart(session, owner_id, for_update=True)
        clear(session, cart)
        return CartView.from_cart(cart)
