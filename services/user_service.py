"""
user_service.py

Service functions for user listing, profiles and role assignment.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from constants.role_permission_defaults import PROFILE_PAGE, ROLE_NAMES, Role
from core.exceptions import NotFoundError, StoreUnavailableError, ValidationRejectedError
from core.logging_config import get_logger
from db.models.general import User
from schemas.users import ProfileOut, UserOut, UserStats
from services.role_access_service import get_page_access
from utils.id_generators import generate_digits_lowercase

logger = get_logger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: str) -> User:
    """
    Find a user by ID.

    Raises:
        NotFoundError: no user with this ID.
        StoreUnavailableError: the read failed.
    """
    try:
        result = await db.execute(select(User).where(User.user_id == user_id))
    except SQLAlchemyError as exc:
        logger.error(f"Failed to read user {user_id}: {exc}")
        raise StoreUnavailableError("Failed to read user.") from exc
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User not found.")
    return user


async def get_all_users(db: AsyncSession) -> List[UserOut]:
    try:
        result = await db.execute(select(User).order_by(User.created_at, User.email))
    except SQLAlchemyError as exc:
        logger.error(f"Failed to list users: {exc}")
        raise StoreUnavailableError("Failed to read users.") from exc
    return [UserOut.model_validate(user) for user in result.scalars().all()]


def summarize_users(users: List[UserOut]) -> UserStats:
    counts = {role: 0 for role in ROLE_NAMES}
    for user in users:
        if user.role in counts:
            counts[user.role] += 1
    return UserStats(
        total_users=len(users),
        admin_users=counts[Role.ADMIN.value],
        editor_users=counts[Role.EDITOR.value],
        viewer_users=counts[Role.VIEWER.value],
    )


async def create_user(
    db: AsyncSession, email: str, name: Optional[str] = None, role: str = Role.VIEWER.value
) -> User:
    if role not in ROLE_NAMES:
        raise ValidationRejectedError(f"Invalid role '{role}'.")
    user = User(
        user_id=generate_digits_lowercase(12),
        email=email.strip().lower(),
        name=name,
        role=role,
    )
    db.add(user)
    try:
        await db.commit()
        await db.refresh(user)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to create user {email}: {exc}")
        raise StoreUnavailableError("Failed to create user.") from exc
    return user


async def update_user_role(db: AsyncSession, user_id: str, new_role: str) -> User:
    """
    Assign ``new_role`` to a user.

    Sessions already issued to the user keep their old role until the auth
    provider issues new credentials.
    """
    if new_role not in ROLE_NAMES:
        raise ValidationRejectedError(
            f"Invalid role '{new_role}'. Allowed roles: {', '.join(ROLE_NAMES)}."
        )

    user = await get_user_by_id(db, user_id)
    previous_role = user.role
    user.role = new_role
    try:
        await db.commit()
        await db.refresh(user)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to update role for user {user_id}: {exc}")
        raise StoreUnavailableError("Failed to update user role.") from exc

    logger.info(f"User {user_id} role changed from {previous_role} to {new_role}")
    return user


def profile_initials(name: Optional[str], email: Optional[str]) -> str:
    """First letters of the first and last word, or the first two characters."""
    display = (name or email or "U").strip() or "U"
    parts = display.split()
    if len(parts) >= 2:
        return (parts[0][0] + parts[-1][0]).upper()
    return display[:2].upper()


async def get_profile(db: AsyncSession, user_id: str) -> ProfileOut:
    user = await get_user_by_id(db, user_id)
    access = await get_page_access(db, user.role, PROFILE_PAGE)
    return ProfileOut(
        id=user.user_id,
        email=user.email,
        name=user.name,
        role=user.role,
        initials=profile_initials(user.name, user.email),
        member_since=user.created_at,
        access=access,
    )
