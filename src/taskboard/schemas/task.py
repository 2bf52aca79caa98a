"""Task, assignment and comment schemas for API request/response."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.taskboard.models import MediaType, TaskStatus
from src.taskboard.schemas.user import UserRead


class TaskWrite(BaseModel):
    """Schema for creating or replacing a task.

    Date ordering is checked by the service so the rule lives in one place.
    """

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    status: TaskStatus = TaskStatus.NOT_STARTED
    start_date: date
    end_date: date
    media_type: MediaType = MediaType.TEXT
    media_content: str = Field(default="", max_length=4000)


class TaskRead(BaseModel):
    id: int
    project_id: int
    title: str
    description: str
    status: TaskStatus
    start_date: date
    end_date: date
    media_type: MediaType
    media_content: str
    created_by_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StatusChange(BaseModel):
    status: str = Field(description="One of not_started, in_progress, completed")


class AssignRequest(BaseModel):
    user_id: UUID


class AssignmentRead(BaseModel):
    id: int
    task_id: int
    user_id: UUID
    assigned_by_id: UUID
    assigned_at: datetime

    model_config = {"from_attributes": True}


class CommentWrite(BaseModel):
    text: str = Field(max_length=4000)


class CommentRead(BaseModel):
    id: int
    task_id: int
    user_id: UUID
    author: UserRead | None = None
    text: str
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class TaskDetailsRead(BaseModel):
    task: TaskRead
    assignee: UserRead | None
    can_modify: bool
    can_change_status: bool
    comments: list[CommentRead]
