from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageAccess(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    can_view: bool = Field(..., title="Can View", description="Page may be opened.")
    can_add: bool = Field(..., title="Can Add", description="Records may be created.")
    can_edit: bool = Field(..., title="Can Edit", description="Records may be changed.")
    can_delete: bool = Field(
        ..., title="Can Delete", description="Records may be removed."
    )


class PageInfo(CamelModel):
    path: str = Field(..., title="Path", description="Route path of the page.")
    name: str = Field(..., title="Name", description="Display name of the page.")


class RoleAccessEntry(PageAccess):
    page: str = Field(..., title="Page", description="Route path of the page.")
    page_name: str = Field(..., title="Page Name", description="Display name.")


# role -> page -> entry
RoleAccessTable = Dict[str, Dict[str, RoleAccessEntry]]


class RoleAccessUpdate(CamelModel):
    role: str = Field(..., title="Role", description="Role whose access changes.")
    page: str = Field(..., title="Page", description="Route path of the page.")
    can_view: Optional[bool] = None
    can_add: Optional[bool] = None
    can_edit: Optional[bool] = None
    can_delete: Optional[bool] = None

    @field_validator("role", "page", mode="before")
    @classmethod
    def strip_value(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Must be a string.")
        value = value.strip()
        if not value:
            raise ValueError("Cannot be empty.")
        return value

    def changes(self) -> Dict[str, bool]:
        """Flags present in the request, keyed by wire name."""
        return {
            to_camel(name): value
            for name, value in self.model_dump(
                include={"can_view", "can_add", "can_edit", "can_delete"}
            ).items()
            if value is not None
        }


class RoleAccessListResponse(CamelModel):
    success: bool
    message: str
    timestamp: datetime
    role_access: RoleAccessTable
    pages: List[PageInfo]
