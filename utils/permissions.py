"""
Request-time access gates.

``require_permission`` resolves the caller's role against the live role
access table; ``require_role`` checks the role claim of the session token.
Both return the session payload so routes can use it.
"""

from typing import Any, Callable, Coroutine, Dict

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from constants.role_permission_defaults import ACCESS_FIELDS
from core.logging_config import get_logger
from db.sessions.database import get_db
from services.role_access_service import get_page_access
from utils.auth import get_current_user

logger = get_logger(__name__)

CurrentUser = Dict[str, Any]


def require_permission(
    page: str, *actions: str, require_all: bool = False
) -> Callable[..., Coroutine[Any, Any, CurrentUser]]:
    """
    Dependency factory: the caller must hold ``actions`` (``canView``,
    ``canAdd``, ``canEdit``, ``canDelete``) on ``page``. Any one of them is
    enough unless ``require_all=True``.
    """
    unknown = [action for action in actions if action not in ACCESS_FIELDS]
    if unknown:
        raise ValueError(f"Unknown access actions: {', '.join(unknown)}")
    actions = actions or ("canView",)

    async def dependency(
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ) -> CurrentUser:
        access = await get_page_access(db, current_user["role"], page)
        granted = [getattr(access, ACCESS_FIELDS[action]) for action in actions]
        allowed = all(granted) if require_all else any(granted)
        if not allowed:
            logger.warning(
                f"Permission denied: user={current_user.get('user_id')} "
                f"role={current_user['role']} page={page} actions={list(actions)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency


def require_role(*roles: str) -> Callable[..., Coroutine[Any, Any, CurrentUser]]:
    allowed_roles = {getattr(role, "value", role) for role in roles}

    async def dependency(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if current_user["role"] not in allowed_roles:
            logger.warning(
                f"Role denied: user={current_user.get('user_id')} "
                f"role={current_user['role']} required={sorted(allowed_roles)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency
