# bookstore_orders/services/checkout_service.py
import logging
from datetime import timedelta

from sqlmodel import Session

from bookstore_orders.config import settings
from bookstore_orders.database import REPEATABLE_READ, transaction
from bookstore_orders.exceptions import CartAlreadyCheckedOut, CartEmpty, CartNotFound
from bookstore_orders.schemas.checkout_schemas import CheckoutResponse
from bookstore_orders.services import cart_service, order_service

logger = logging.getLogger(__name__)


def checkout(session: Session, owner_id: int, shipping_address: str) -> CheckoutResponse:
    """
    Convert the owner's cart into a PENDING order.

    Loading the cart, creating the order and clearing the cart happen in one
    transaction: if anything fails no order exists and the cart keeps every
    line it had. The cart itself is kept for the next order; only its lines
    are removed and ``checked_out`` stays False, so checking out again right
    away fails with CartEmpty.
    """
    logger.info(f"Checking out cart for user ID: {owner_id}")

    with transaction(session, REPEATABLE_READ):
        cart = cart_service.find_cart(session, owner_id, for_update=True)
        if not cart:
            raise CartNotFound(owner_id)

        if cart.checked_out:
            logger.warning(f"Cart already checked out for user ID: {owner_id}")
            raise CartAlreadyCheckedOut(cart.id)

        if not cart.items:
            logger.warning(f"Cannot checkout an empty cart for user ID: {owner_id}")
            raise CartEmpty(owner_id)

        order = order_service.create_order_from_cart(session, cart, shipping_address)

        cart_service.clear(session, cart)
        logger.info(f"Cart ID: {cart.id} cleared after checkout for user ID: {owner_id}")

        estimated_delivery = order.created_at.date() + timedelta(days=settings.estimated_delivery_days)

        return CheckoutResponse(
            success=True,
            message="Checkout successful! Your order has been placed.",
            order_id=order.id,
            total_amount=order.total_amount,
            estimated_delivery_date=estimated_delivery,
        )
