"""Dashboard schemas."""

from pydantic import BaseModel

from src.taskboard.models import TaskStatus
from src.taskboard.schemas.task import TaskRead


class DashboardProjectRead(BaseModel):
    id: int
    title: str
    is_organizer: bool


class DashboardTaskRead(BaseModel):
    task: TaskRead
    project_title: str
    days_until_due: int


class DashboardRead(BaseModel):
    projects: list[DashboardProjectRead]
    due_in_days: int
    tasks: list[DashboardTaskRead]
    tasks_by_status: dict[TaskStatus, list[DashboardTaskRead]]
    upcoming_deadlines: list[DashboardTaskRead]
