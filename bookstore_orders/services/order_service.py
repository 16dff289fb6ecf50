# bookstore_orders/services/order_service.py
import logging
from typing import List, Optional

from sqlmodel import Session, select

from bookstore_orders.constants.order_status import OrderStatus, can_transition
from bookstore_orders.database import transaction
from bookstore_orders.exceptions import (
    InvalidOrderState,
    InvalidOrderStatus,
    NotOrderOwner,
    OrderNotFound,
)
from bookstore_orders.models.base import utcnow
from bookstore_orders.models.cart import Cart
from bookstore_orders.models.order import Order
from bookstore_orders.models.order_event import OrderEventType
from bookstore_orders.models.order_item import OrderItem
from bookstore_orders.schemas.orders_schemas import OrderEventView, OrderPage, OrderResponse
from bookstore_orders.services.order_event_service import list_order_events, log_order_event
from bookstore_orders.utils.pagination import paginate

logger = logging.getLogger(__name__)


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus.parse(value)
    except ValueError:
        logger.error(f"Invalid order status: {value}")
        raise InvalidOrderStatus(value, [status.value for status in OrderStatus])


def create_order_from_cart(session: Session, cart: Cart, shipping_address: str) -> Order:
    """
    Build a PENDING order from the cart lines.

    Each order line keeps the price the cart snapshotted, not the current
    catalog price. Runs inside the caller's transaction.
    """
    logger.info(f"Creating order from cart ID: {cart.id} for user ID: {cart.user_id}")

    items = [
        OrderItem(
            book_id=line.book_id,
            book_title=line.book_title,
            price=line.price,
            quantity=line.quantity,
        )
        for line in cart.items
    ]

    order = Order(
        user_id=cart.user_id,
        shipping_address=shipping_address,
        total_amount=Order.total_of(items),
        status=OrderStatus.PENDING.value,
    )
    for item in items:
        order.items.append(item)

    session.add(order)
    session.flush()

    log_order_event(
        session,
        order_id=order.id,
        event_type=OrderEventType.ORDER_PLACED,
        label="Order placed",
        created_by="customer",
        meta={"total_amount": str(order.total_amount), "items": len(items)},
    )

    logger.info(f"Order created successfully with ID: {order.id} for user ID: {order.user_id}")
    return order


def _load_order(session: Session, order_id: int, for_update: bool = False) -> Order:
    statement = select(Order).where(Order.id == order_id)
    if for_update:
        statement = statement.with_for_update()

    order = session.exec(statement).first()
    if not order:
        raise OrderNotFound(order_id)
    return order


def _load_owned_order(session: Session, order_id: int, owner_id: int, for_update: bool = False) -> Order:
    order = _load_order(session, order_id, for_update=for_update)
    if order.user_id != owner_id:
        raise NotOrderOwner(order_id, owner_id)
    return order


def _change_status(
    session: Session,
    order: Order,
    new_status: OrderStatus,
    created_by: str,
    event_type: str = OrderEventType.STATUS_CHANGED,
) -> None:
    old_status = order.status
    order.status = new_status.value
    order.updated_at = utcnow()
    session.add(order)

    log_order_event(
        session,
        order_id=order.id,
        event_type=event_type,
        label=f"Status changed from {old_status} to {new_status.value}",
        created_by=created_by,
        meta={"from": old_status, "to": new_status.value},
    )
    session.flush()


# -------- public operations --------

def get_order(session: Session, owner_id: int, order_id: int) -> OrderResponse:
    logger.info(f"Fetching order with ID: {order_id} for user ID: {owner_id}")

    with transaction(session):
        order = _load_owned_order(session, order_id, owner_id)
        return OrderResponse.from_order(order)


def list_orders(session: Session, owner_id: int, status: Optional[str] = None) -> List[OrderResponse]:
    wanted = parse_status(status) if status else None

    with transaction(session):
        statement = select(Order).where(Order.user_id == owner_id)
        if wanted:
            statement = statement.where(Order.status == wanted.value)
        statement = statement.order_by(Order.created_at.desc(), Order.id.desc())

        orders = session.exec(statement).all()
        logger.info(f"Found {len(orders)} orders for user ID: {owner_id} with status: {status}")
        return [OrderResponse.from_order(order) for order in orders]


def list_all_orders(
    session: Session,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> OrderPage:
    wanted = parse_status(status) if status else None

    with transaction(session):
        query = select(Order)
        if wanted:
            query = query.where(Order.status == wanted.value)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())

        data = paginate(session=session, query=query, page=page, limit=limit)
        data["results"] = [OrderResponse.from_order(order) for order in data["results"]]
        return OrderPage(**data)


def cancel_order(session: Session, order_id: int, owner_id: int) -> OrderResponse:
    logger.info(f"Cancelling order {order_id} for user ID: {owner_id}")

    with transaction(session):
        order = _load_owned_order(session, order_id, owner_id, for_update=True)

        if order.order_status is not OrderStatus.PENDING:
            logger.warning(f"Order {order_id} cannot be cancelled in status {order.status}")
            raise InvalidOrderState(order_id, order.status)

        _change_status(
            session,
            order,
            OrderStatus.CANCELLED,
            created_by="customer",
            event_type=OrderEventType.ORDER_CANCELLED,
        )
        return OrderResponse.from_order(order)


def admin_set_order_status(session: Session, order_id: int, new_status: str) -> OrderResponse:
    """
    Administrative override: any recognised status may be set from any state.
    """
    status = parse_status(new_status)
    logger.info(f"Updating status of order ID: {order_id} to {status.value}")

    with transaction(session):
        order = _load_order(session, order_id, for_update=True)
        if not can_transition(order.order_status, status):
            logger.warning(
                f"Admin override moves order {order_id} from {order.status} to {status.value}"
            )
        _change_status(session, order, status, created_by="admin")
        return OrderResponse.from_order(order)


def get_order_timeline(
    session: Session, order_id: int, owner_id: Optional[int] = None
) -> List[OrderEventView]:
    with transaction(session):
        if owner_id is None:
            _load_order(session, order_id)
        else:
            _load_owned_order(session, order_id, owner_id)

        return [OrderEventView.from_event(event) for event in list_order_events(session, order_id)]
