from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from constants.role_permission_defaults import ACCESS_FIELDS, PAGES
from core.exceptions import StoreUnavailableError
from core.logging_config import get_logger
from db.models.superadmin import RoleAccess
from schemas.role_access import PageAccess, PageInfo, RoleAccessTable
from services.permission_resolver import (
    AccessSnapshot,
    merge_access_update,
    page_name_for,
    resolve_access,
    resolve_all_access,
    single_entry_snapshot,
    validate_mutable_role,
)
from utils.execution_time import measure_execution_time

logger = get_logger(__name__)


def registered_pages() -> List[PageInfo]:
    return [PageInfo(**page) for page in PAGES]


def _row_access(row: RoleAccess) -> PageAccess:
    return PageAccess.model_validate(row)


async def load_role_access(
    db: AsyncSession, role: Optional[str] = None
) -> Dict[Tuple[str, str], PageAccess]:
    """Read every stored row, optionally for a single role, as a snapshot."""
    query = select(RoleAccess)
    if role is not None:
        query = query.where(RoleAccess.role == role)
    try:
        result = await db.execute(query)
    except SQLAlchemyError as exc:
        logger.error(f"Failed to read role access table: {exc}")
        raise StoreUnavailableError("Failed to read role access.") from exc
    return {(row.role, row.page): _row_access(row) for row in result.scalars().all()}


async def _fetch_row(db: AsyncSession, role: str, page: str) -> Optional[RoleAccess]:
    result = await db.execute(
        select(RoleAccess)
        .where(RoleAccess.role == role, RoleAccess.page == page)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def _upsert_statement(dialect_name: str, values: Dict[str, Any]):
    """INSERT ... ON CONFLICT (role, page) DO UPDATE for the session's dialect."""
    insert = postgresql_insert if dialect_name == "postgresql" else sqlite_insert
    statement = insert(RoleAccess).values(**values)
    return statement.on_conflict_do_update(
        index_elements=[RoleAccess.role, RoleAccess.page],
        set_={
            **{attribute: statement.excluded[attribute] for attribute in ACCESS_FIELDS.values()},
            "updated_at": func.now(),
        },
    )


async def get_page_access(db: AsyncSession, role: Any, page: str) -> PageAccess:
    """What can ``role`` do on ``page``, against a fresh read of the store."""
    role_value = getattr(role, "value", role)
    try:
        row = await _fetch_row(db, role_value, page)
    except SQLAlchemyError as exc:
        logger.error(f"Failed to read role access for {role_value} on {page}: {exc}")
        raise StoreUnavailableError("Failed to read role access.") from exc
    stored = _row_access(row) if row is not None else None
    return resolve_access(single_entry_snapshot(role_value, page, stored), role_value, page)


@measure_execution_time
async def get_role_access_table(
    db: AsyncSession, pages: Optional[Iterable[PageInfo]] = None
) -> Tuple[RoleAccessTable, List[PageInfo]]:
    pages = list(pages) if pages is not None else registered_pages()
    snapshot: AccessSnapshot = await load_role_access(db)
    return resolve_all_access(snapshot, pages), pages


async def update_access(
    db: AsyncSession,
    role: Any,
    page: str,
    changes: Mapping[str, bool],
) -> PageAccess:
    """
    Merge ``changes`` into the (role, page) entry and persist the full record.

    The row is written with a single upsert, so concurrent writers to the same
    entry never collide on the unique key: the last commit wins. The returned
    access is re-resolved from the store after the commit.
    """
    role_value = validate_mutable_role(role)
    try:
        row = await _fetch_row(db, role_value, page)
        stored = _row_access(row) if row is not None else None
        merged = merge_access_update(
            single_entry_snapshot(role_value, page, stored), role_value, page, changes
        )

        values = {
            "role": role_value,
            "page": page,
            "page_name": page_name_for(page, registered_pages()),
            **{attribute: getattr(merged, attribute) for attribute in ACCESS_FIELDS.values()},
        }
        await db.execute(_upsert_statement(db.get_bind().dialect.name, values))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to store role access for {role_value} on {page}: {exc}")
        raise StoreUnavailableError("Failed to update role access.") from exc

    logger.info(f"Role access updated: role={role_value}, page={page}, changes={dict(changes)}")
    return await get_page_access(db, role_value, page)


async def update_access_field(
    db: AsyncSession, role: Any, page: str, field: str, value: bool
) -> PageAccess:
    return await update_access(db, role, page, {field: value})
