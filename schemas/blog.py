from datetime import datetime
from typing import Any, Optional

from pydantic import Field, ValidationInfo, field_validator

from schemas.role_access import CamelModel


def _clean_text(value: Any, field_name: str) -> Any:
    if value is None:
        return value
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")
    return value.strip()


class BlogPostCreate(CamelModel):
    title: str = Field(..., title="Title", max_length=255)
    content: str = Field("", title="Content")
    published: bool = Field(False, title="Published")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> str:
        value = _clean_text(value, "Title")
        if not value:
            raise ValueError("Title cannot be empty.")
        return value


class BlogPostUpdate(CamelModel):
    title: Optional[str] = Field(
        None, title="Title", max_length=255, description="Updated post title."
    )
    content: Optional[str] = Field(
        None, title="Content", description="Updated post body."
    )
    published: Optional[bool] = Field(
        None, title="Published", description="Updated publication flag."
    )

    @field_validator("title", "content", mode="before")
    @classmethod
    def validate_text(cls, value: Any, info: ValidationInfo) -> Optional[str]:
        value = _clean_text(value, info.field_name.capitalize())
        if value == "":
            # Blank strings are treated as not provided
            return None
        return value


class BlogPostOut(CamelModel):
    id: str = Field(..., validation_alias="post_id", serialization_alias="id")
    title: str
    content: str = ""
    author_id: str
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("author_name", mode="after")
    @classmethod
    def default_author_name(cls, value: Optional[str]) -> str:
        return value or "Unknown"
