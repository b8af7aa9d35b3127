"""
blog_service.py

Blog post persistence and the author check applied to edits and deletes.
"""

from typing import Any, Dict, List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from constants.role_permission_defaults import Role
from core.exceptions import NotFoundError, StoreUnavailableError, ValidationRejectedError
from core.logging_config import get_logger
from db.models.general import BlogPost
from schemas.blog import BlogPostCreate, BlogPostOut, BlogPostUpdate
from utils.id_generators import generate_digits_lowercase

logger = get_logger(__name__)


async def get_post_by_id(db: AsyncSession, post_id: str) -> BlogPost:
    try:
        result = await db.execute(select(BlogPost).where(BlogPost.post_id == post_id))
    except SQLAlchemyError as exc:
        logger.error(f"Failed to read blog post {post_id}: {exc}")
        raise StoreUnavailableError("Failed to read blog post.") from exc
    post = result.scalar_one_or_none()
    if not post:
        raise NotFoundError("Post not found")
    return post


async def list_posts(
    db: AsyncSession, published: Optional[bool] = None
) -> List[BlogPostOut]:
    query = select(BlogPost).order_by(BlogPost.created_at.desc())
    if published is not None:
        query = query.where(BlogPost.published == published)
    try:
        result = await db.execute(query)
    except SQLAlchemyError as exc:
        logger.error(f"Failed to list blog posts: {exc}")
        raise StoreUnavailableError("Failed to read blog posts.") from exc
    return [BlogPostOut.model_validate(post) for post in result.scalars().all()]


async def create_post(
    db: AsyncSession, data: BlogPostCreate, author: Dict[str, Any]
) -> BlogPostOut:
    post = BlogPost(
        post_id=generate_digits_lowercase(12),
        title=data.title,
        content=data.content,
        published=data.published,
        author_id=author["user_id"],
        author_name=author.get("name"),
        author_email=author.get("email"),
    )
    db.add(post)
    try:
        await db.commit()
        await db.refresh(post)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to create blog post: {exc}")
        raise StoreUnavailableError("Failed to create blog post.") from exc
    logger.info(f"Blog post {post.post_id} created by {post.author_id}")
    return BlogPostOut.model_validate(post)


def ensure_can_modify(post: BlogPost, current_user: Dict[str, Any], action: str) -> None:
    """Only the author may edit or delete a post; admins may touch any post."""
    if current_user.get("role") == Role.ADMIN.value:
        return
    if str(post.author_id) != str(current_user.get("user_id")):
        raise ValidationRejectedError(
            f"You can only {action} your own posts",
            status_code=status.HTTP_403_FORBIDDEN,
        )


async def update_post(
    db: AsyncSession,
    post_id: str,
    update_data: BlogPostUpdate,
    current_user: Dict[str, Any],
) -> BlogPostOut:
    """Apply only the fields present in ``update_data``."""
    post = await get_post_by_id(db, post_id)
    ensure_can_modify(post, current_user, "edit")

    update_fields = {
        key: value
        for key, value in update_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if not update_fields:
        raise ValidationRejectedError("At least one field must be provided for update.")

    for key, value in update_fields.items():
        setattr(post, key, value)

    try:
        await db.commit()
        await db.refresh(post)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to update blog post {post_id}: {exc}")
        raise StoreUnavailableError("Failed to update blog post.") from exc

    logger.info(f"Blog post {post_id} updated: fields={sorted(update_fields)}")
    return BlogPostOut.model_validate(post)


async def delete_post(
    db: AsyncSession, post_id: str, current_user: Dict[str, Any]
) -> None:
    post = await get_post_by_id(db, post_id)
    ensure_can_modify(post, current_user, "delete")
    try:
        await db.delete(post)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to delete blog post {post_id}: {exc}")
        raise StoreUnavailableError("Failed to delete blog post.") from exc
    logger.info(f"Blog post {post_id} deleted")
