from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from schemas.role_access import CamelModel, PageAccess


class UserOut(CamelModel):
    id: str = Field(..., validation_alias="user_id", serialization_alias="id")
    email: str
    name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class UserRoleUpdate(CamelModel):
    role: str = Field(..., title="Role", description="New role for the user.")

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Role must be a string.")
        return value.strip().lower()


class UserStats(CamelModel):
    total_users: int
    admin_users: int
    editor_users: int
    viewer_users: int


class UserListResponse(CamelModel):
    success: bool
    message: str
    timestamp: datetime
    users: List[UserOut]
    stats: UserStats


class ProfileOut(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
    initials: str
    member_since: Optional[datetime] = None
    access: PageAccess
