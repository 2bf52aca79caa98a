"""Personal dashboard endpoint."""

from typing import Annotated

from fastapi import APIRouter, Query

from src.taskboard.api.dependencies import CurrentCaller, DashboardServiceDep
from src.taskboard.api.results import unwrap
from src.taskboard.schemas.dashboard import (
    DashboardProjectRead,
    DashboardRead,
    DashboardTaskRead,
)
from src.taskboard.schemas.task import TaskRead
from src.taskboard.services.dashboard_service import DashboardTask

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _task_read(entry: DashboardTask) -> DashboardTaskRead:
    return DashboardTaskRead(
        task=TaskRead.model_validate(entry.task),
        project_title=entry.project.title,
        days_until_due=entry.days_until_due,
    )


@router.get(
    "",
    response_model=DashboardRead,
    summary="My dashboard",
    description="Tasks currently assigned to the caller across their active projects.",
    responses={
        401: {"description": "Not authenticated"},
        422: {"description": "Unknown status filter"},
    },
)
async def get_dashboard(
    caller: CurrentCaller,
    dashboard: DashboardServiceDep,
    project_id: Annotated[int | None, Query(description="Only tasks of this project")] = None,
    task_status: Annotated[
        str | None, Query(alias="status", description="Only tasks with this status")
    ] = None,
    due_soon: Annotated[bool, Query(description="Only tasks due within the window")] = False,
    due_in_days: Annotated[int | None, Query(description="Size of the due window")] = None,
) -> DashboardRead:
    result = unwrap(
        await dashboard.my_assigned_tasks(
            caller,
            project_id=project_id,
            status=task_status,
            due_soon_only=due_soon,
            due_in_days=due_in_days,
        )
    )
    return DashboardRead(
        projects=[
            DashboardProjectRead(
                id=entry.project.id,  # type: ignore[arg-type]
                title=entry.project.title,
                is_organizer=entry.is_organizer,
            )
            for entry in result.projects
        ],
        due_in_days=result.due_in_days,
        tasks=[_task_read(entry) for entry in result.tasks],
        tasks_by_status={
            status: [_task_read(entry) for entry in entries]
            for status, entries in result.tasks_by_status.items()
        },
        upcoming_deadlines=[_task_read(entry) for entry in result.upcoming_deadlines],
    )
