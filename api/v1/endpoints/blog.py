from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from constants.role_permission_defaults import BLOG_PAGE
from core.api_response import api_response
from db.sessions.database import get_db
from schemas.blog import BlogPostCreate, BlogPostOut, BlogPostUpdate
from services.blog_service import (
    create_post,
    delete_post,
    get_post_by_id,
    list_posts,
    update_post,
)
from utils.exception_handlers import exception_handler
from utils.permissions import require_permission

router = APIRouter()


@router.get("", summary="List blog posts")
@exception_handler
async def get_posts(
    published: Optional[bool] = Query(None, description="Filter by publication flag"),
    current_user: Dict[str, Any] = Depends(require_permission(BLOG_PAGE, "canView")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    posts = await list_posts(db, published=published)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Posts fetched successfully",
        data={"posts": posts},
    )


@router.post("", summary="Create a blog post", status_code=status.HTTP_201_CREATED)
@exception_handler
async def create_blog_post(
    post_data: BlogPostCreate,
    current_user: Dict[str, Any] = Depends(require_permission(BLOG_PAGE, "canAdd")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    post = await create_post(db, post_data, author=current_user)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Post created successfully",
        data={"post": post},
    )


@router.get("/{post_id}", summary="Get a blog post by ID")
@exception_handler
async def get_blog_post(
    post_id: str = Path(..., description="Blog post ID"),
    current_user: Dict[str, Any] = Depends(require_permission(BLOG_PAGE, "canView")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    post = await get_post_by_id(db, post_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Post fetched successfully",
        data={"post": BlogPostOut.model_validate(post)},
    )


@router.put("/{post_id}", summary="Update a blog post")
@exception_handler
async def update_blog_post(
    update_data: BlogPostUpdate,
    post_id: str = Path(..., description="Blog post ID"),
    current_user: Dict[str, Any] = Depends(require_permission(BLOG_PAGE, "canEdit")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Update title, content and/or published flag.

    Only provided fields are changed. Non-admins may only edit their own posts.
    """
    post = await update_post(db, post_id, update_data, current_user)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Post updated successfully",
        data={"post": post},
    )


@router.delete("/{post_id}", summary="Delete a blog post")
@exception_handler
async def delete_blog_post(
    post_id: str = Path(..., description="Blog post ID"),
    current_user: Dict[str, Any] = Depends(require_permission(BLOG_PAGE, "canDelete")),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Non-admins may only delete their own posts."""
    await delete_post(db, post_id, current_user)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Post deleted successfully",
    )
