"""Task, assignment ledger and comment models."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import MediaType, TaskStatus


class Task(SQLModel, table=True):
    """Task belonging to exactly one project.

    Tasks have no assignee column: the current assignee is derived
    from the ``task_assignments`` ledger.
    """

    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str = Field(max_length=2000)
    status: str = Field(default=TaskStatus.NOT_STARTED.value, max_length=20, index=True)
    start_date: date
    end_date: date = Field(index=True)
    media_type: str = Field(default=MediaType.TEXT.value, max_length=10)
    media_content: str = Field(default="", max_length=4000)
    created_by_id: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> TaskStatus:
        """Get status as TaskStatus enum."""
        return TaskStatus(self.status)

    @property
    def media_type_enum(self) -> MediaType:
        """Get media type as MediaType enum."""
        return MediaType(self.media_type)


class TaskAssignment(SQLModel, table=True):
    """Append-only assignment record.

    Rows are never updated. They are only removed together with their task.
    """

    __tablename__ = "task_assignments"
    __table_args__ = (
        Index("ix_task_assignments_task_order", "task_id", "assigned_at", "id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id")
    user_id: UUID = Field(foreign_key="users.id", index=True)
    assigned_by_id: UUID = Field(foreign_key="users.id")
    assigned_at: datetime = Field(default_factory=utc_now)


class Comment(SQLModel, table=True):
    """Comment on a task. Deletion is soft (``is_deleted``)."""

    __tablename__ = "comments"

    id: int | None = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", index=True)
    user_id: UUID = Field(foreign_key="users.id")
    text: str = Field(max_length=4000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default=None)
    is_deleted: bool = Field(default=False)
