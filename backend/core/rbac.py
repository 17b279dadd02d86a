"""
Zap Manager — Role-based access control dependencies.

Routes declare the roles allowed to call them; anything else is refused.
"""

from fastapi import Depends, HTTPException

from core.base import UserRole
from core.dependencies import get_current_user

ALL_ROLES = (UserRole.ADMINISTRATOR.value, UserRole.OPERATOR.value)


def require_role(*allowed_roles: str):
    """FastAPI dependency that checks the caller's role is in the allow-list.

    Usage:
        @router.delete("/things/{id}")
        async def delete_thing(current_user: dict = Depends(require_role("administrator"))):
            ...

    Called with no roles, any authenticated user is accepted.
    """
    roles = allowed_roles or ALL_ROLES

    async def role_checker(current_user: dict = Depends(get_current_user)):
        if not current_user:
            raise HTTPException(
                status_code=401,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if current_user["role"] not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current_user
    return role_checker


require_admin = require_role(UserRole.ADMINISTRATOR.value)
require_user = require_role()
