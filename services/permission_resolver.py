"""
Role/page access resolution over a snapshot of the role access table.

Rules:
    * the admin role has full access to every page and its rows are immutable
    * the profile page grants full access to every role
    * a (role, page) pair with no stored row is view-only
    * a stored row is returned verbatim, so ``can_view`` may be explicitly off
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple

from fastapi import status

from constants.role_permission_defaults import (
    ACCESS_FIELDS,
    MUTABLE_ROLES,
    PROFILE_PAGE,
    ROLE_NAMES,
    Role,
)
from core.exceptions import ValidationRejectedError
from schemas.role_access import PageAccess, PageInfo, RoleAccessEntry, RoleAccessTable

AccessSnapshot = Mapping[Tuple[str, str], PageAccess]

FULL_ACCESS = PageAccess(can_view=True, can_add=True, can_edit=True, can_delete=True)
VIEW_ONLY_ACCESS = PageAccess(
    can_view=True, can_add=False, can_edit=False, can_delete=False
)


def _role_value(role: object) -> str:
    return role.value if isinstance(role, Role) else str(role)


def resolve_access(snapshot: AccessSnapshot, role: object, page: str) -> PageAccess:
    role = _role_value(role)
    if role == Role.ADMIN.value or page == PROFILE_PAGE:
        return FULL_ACCESS
    stored = snapshot.get((role, page))
    if stored is None:
        return VIEW_ONLY_ACCESS
    return PageAccess(
        can_view=stored.can_view,
        can_add=stored.can_add,
        can_edit=stored.can_edit,
        can_delete=stored.can_delete,
    )


def resolve_all_access(
    snapshot: AccessSnapshot, pages: Iterable[PageInfo]
) -> RoleAccessTable:
    """Build the complete role x page grid; every pair is present."""
    pages = list(pages)
    table: RoleAccessTable = {}
    for role in ROLE_NAMES:
        table[role] = {}
        for page in pages:
            access = resolve_access(snapshot, role, page.path)
            table[role][page.path] = RoleAccessEntry(
                page=page.path,
                page_name=page.name,
                **access.model_dump(),
            )
    return table


def validate_mutable_role(role: object) -> str:
    role = _role_value(role)
    if role == Role.ADMIN.value:
        raise ValidationRejectedError(
            "Admin role access cannot be modified.",
            status_code=status.HTTP_403_FORBIDDEN,
        )
    if role not in MUTABLE_ROLES:
        raise ValidationRejectedError(
            f"Invalid role '{role}'. Allowed roles: {', '.join(sorted(MUTABLE_ROLES))}."
        )
    return role


def normalize_changes(changes: Mapping[str, bool]) -> Dict[str, bool]:
    """Map wire or attribute field names to PageAccess attributes."""
    if not changes:
        raise ValidationRejectedError("At least one access field must be provided.")

    attributes = set(ACCESS_FIELDS.values())
    normalized: Dict[str, bool] = {}
    for field, value in changes.items():
        attribute = ACCESS_FIELDS.get(field, field)
        if attribute not in attributes:
            raise ValidationRejectedError(
                f"Unknown access field '{field}'. "
                f"Allowed fields: {', '.join(ACCESS_FIELDS)}."
            )
        if not isinstance(value, bool):
            raise ValidationRejectedError(f"Access field '{field}' must be a boolean.")
        normalized[attribute] = value
    return normalized


def merge_access_update(
    snapshot: AccessSnapshot,
    role: object,
    page: str,
    changes: Mapping[str, bool],
) -> PageAccess:
    """
    Apply ``changes`` on top of the currently resolved access for (role, page).

    The result is always a complete four-flag record, ready to be stored.
    Raises ValidationRejectedError for the admin role, unknown roles and
    unknown or empty field changes.
    """
    role = validate_mutable_role(role)
    if not page:
        raise ValidationRejectedError("Page is required.")
    normalized = normalize_changes(changes)
    current = resolve_access(snapshot, role, page)
    return current.model_copy(update=normalized)


def page_name_for(page: str, pages: Iterable[PageInfo]) -> str:
    for info in pages:
        if info.path == page:
            return info.name
    return page


def single_entry_snapshot(
    role: str, page: str, stored: Optional[PageAccess]
) -> AccessSnapshot:
    if stored is None:
        return {}
    return {(role, page): stored}
