# app/deps/admin.py
from fastapi import Depends, HTTPException, status

from app.models.user_model import User, UserRole
from app.utils.token_utils import get_current_user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    Requires the authenticated user to have role=admin.
    Raises 403 if not an admin.
    """
    if getattr(user, "role", UserRole.USER.value) != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user
