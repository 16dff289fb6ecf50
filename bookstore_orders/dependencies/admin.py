from fastapi import Depends, HTTPException

from bookstore_orders.dependencies.identity import get_current_role, get_current_user_id


def require_admin(
    user_id: int = Depends(get_current_user_id),
    role: str = Depends(get_current_role),
) -> int:
    if role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user_id
