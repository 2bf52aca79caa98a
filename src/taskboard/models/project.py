"""Project and membership models."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now


class Project(SQLModel, table=True):
    """Project owned by exactly one organizer.

    ``organizer_id`` never changes after creation. ``is_active`` is a one-way
    soft-delete flag: once False the project is invisible to every operation.
    """

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: str = Field(max_length=4000)
    organizer_id: UUID = Field(foreign_key="users.id", index=True)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Membership of a user in a project, unique per (project, user)."""

    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    is_active: bool = Field(default=True)
    joined_at: datetime = Field(default_factory=utc_now)
