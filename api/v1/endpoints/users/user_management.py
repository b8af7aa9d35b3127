"""
User management endpoints: listing for the admin page, the caller's profile,
and role assignment.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from constants.role_permission_defaults import ADMIN_PAGE, Role
from core.api_response import api_response
from db.sessions.database import get_db
from schemas.users import UserListResponse, UserOut, UserRoleUpdate
from services.user_service import (
    get_all_users,
    get_profile,
    summarize_users,
    update_user_role,
)
from utils.auth import get_current_user
from utils.exception_handlers import exception_handler
from utils.permissions import require_permission, require_role

router = APIRouter()


@router.get(
    "",
    response_model=UserListResponse,
    status_code=status.HTTP_200_OK,
)
@exception_handler
async def list_users(
    current_user: Dict[str, Any] = Depends(require_permission(ADMIN_PAGE, "canView")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    users = await get_all_users(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Users retrieved successfully.",
        data={"users": users, "stats": summarize_users(users)},
    )


@router.get("/me", status_code=status.HTTP_200_OK)
@exception_handler
async def my_profile(
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Profile of the signed-in user.

    The role shown is the stored one; it may differ from the session's role
    until the user signs in again.
    """
    profile = await get_profile(db, current_user["user_id"])
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Profile retrieved successfully.",
        data={"profile": profile},
    )


@router.put("/{user_id}/role", status_code=status.HTTP_200_OK)
@exception_handler
async def change_user_role(
    role_data: UserRoleUpdate,
    user_id: str = Path(..., description="User ID whose role changes"),
    current_user: Dict[str, Any] = Depends(require_role(Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Assign a new role (viewer, editor or admin) to a user.

    Existing sessions of that user are not touched.
    """
    user = await update_user_role(db, user_id, role_data.role)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="User role updated successfully.",
        data={"user": UserOut.model_validate(user)},
    )
