from typing import Optional

from fastapi import Header, HTTPException, status


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> int:
    """Caller id forwarded by the upstream authentication layer."""
    try:
        user_id = int(x_user_id)
    except (TypeError, ValueError):
        user_id = None

    if user_id is None or user_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return user_id


def get_current_role(x_user_role: Optional[str] = Header(default=None)) -> str:
    return (x_user_role or "user").strip().lower()
