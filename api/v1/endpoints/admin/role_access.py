"""
Role access endpoints behind the admin page's permission grid.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from constants.role_permission_defaults import ADMIN_PAGE
from core.api_response import api_response
from db.sessions.database import get_db
from schemas.role_access import RoleAccessListResponse, RoleAccessUpdate
from services.role_access_service import (
    get_page_access,
    get_role_access_table,
    update_access,
)
from utils.auth import get_current_user
from utils.exception_handlers import exception_handler
from utils.permissions import require_permission

router = APIRouter()


@router.get(
    "",
    response_model=RoleAccessListResponse,
    status_code=status.HTTP_200_OK,
)
@exception_handler
async def get_role_access(
    current_user: Dict[str, Any] = Depends(require_permission(ADMIN_PAGE, "canView")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Full access grid for every role and registered page.

    Missing rows are filled with defaults, so every role has an entry for
    every page.
    """
    role_access, pages = await get_role_access_table(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Role access retrieved successfully.",
        data={"roleAccess": role_access, "pages": pages},
    )


@router.put("", status_code=status.HTTP_200_OK)
@exception_handler
async def update_role_access(
    update_data: RoleAccessUpdate,
    current_user: Dict[str, Any] = Depends(require_permission(ADMIN_PAGE, "canEdit")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Change one or more access flags of a (role, page) entry.

    The admin role cannot be changed. The stored row always holds all four
    flags; clients should re-fetch the grid afterwards.
    """
    access = await update_access(
        db, update_data.role, update_data.page, update_data.changes()
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Role access updated successfully.",
        data={"role": update_data.role, "page": update_data.page, "access": access},
    )


@router.get("/me", status_code=status.HTTP_200_OK)
@exception_handler
async def get_my_page_access(
    page: str = Query(..., min_length=1, description="Route path of the page"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    access = await get_page_access(db, current_user["role"], page)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Page access retrieved successfully.",
        data={"page": page, "role": current_user["role"], "access": access},
    )
