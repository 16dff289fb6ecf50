from sqlmodel import Session

from bookstore_orders.models.user import User


def resolve_owner(session: Session, owner_id: int) -> bool:
    """True when the user exists and may log in."""
    user = session.get(User, owner_id)
    return user is not None and user.can_login
