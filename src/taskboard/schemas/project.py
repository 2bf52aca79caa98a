"""Project and membership schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.taskboard.schemas.user import UserRead


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=4000)

    @field_validator("title", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty or whitespace only")
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=4000)

    @field_validator("title", "description")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Value cannot be empty or whitespace only")
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: int
    title: str
    description: str
    organizer_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberAdd(BaseModel):
    """Add a member by user name or email."""

    identifier: str = Field(min_length=1, max_length=255)


class MemberRead(BaseModel):
    user: UserRead
    is_organizer: bool
    joined_at: datetime | None = None

    model_config = {"from_attributes": True}
