"""User model - read-only mirror of the external identity directory."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now


class User(SQLModel, table=True):
    """Directory user.

    Rows are written by the directory sync; the tracker only reads them.
    Admin rights are not stored here - they arrive as token roles per request.
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_name: str = Field(max_length=100, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return f"{self.full_name} ({self.user_name})"
