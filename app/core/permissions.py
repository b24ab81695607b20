from fastapi import Depends, HTTPException, status

from app.schemas import AccessClaims, UserRole
from .security import get_current_user


def is_allowed(requester: AccessClaims, resource_owner_id: int) -> bool:
    """Un recurso es accesible por su dueño o por cualquier ADMIN."""
    if requester.role == UserRole.ADMIN:
        return True
    return requester.id == resource_owner_id


def require_role(*roles: UserRole):
    async def checker(current_user: AccessClaims = Depends(get_current_user)) -> AccessClaims:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Prohibido: rol insuficiente.",
            )
        return current_user

    return checker
