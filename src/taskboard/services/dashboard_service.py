"""Personal dashboard - tasks currently assigned to the caller."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from src.taskboard.core.config import get_settings
from src.taskboard.core.results import Ok, Result, unauthenticated, validation_failed
from src.taskboard.models import Project, Task, TaskStatus
from src.taskboard.models.base import utc_today
from src.taskboard.policies import Caller, is_organizer
from src.taskboard.repositories import AssignmentRepository, ProjectRepository, TaskRepository
from src.taskboard.services.task_service import parse_status


@dataclass(frozen=True)
class DashboardProject:
    project: Project
    is_organizer: bool


@dataclass(frozen=True)
class DashboardTask:
    task: Task
    project: Project
    days_until_due: int


@dataclass
class Dashboard:
    projects: list[DashboardProject]
    due_in_days: int
    tasks: list[DashboardTask] = field(default_factory=list)
    tasks_by_status: dict[TaskStatus, list[DashboardTask]] = field(default_factory=dict)
    upcoming_deadlines: list[DashboardTask] = field(default_factory=list)


def _due_within(task: Task, today: date, limit: date) -> bool:
    return task.status_enum is not TaskStatus.COMPLETED and today <= task.end_date <= limit


class DashboardService:
    """Builds the caller's view of the tasks they currently hold.

    "Held" is derived from the ledger: a task appears only while the caller
    is its current assignee, in an active project the caller belongs to.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        assignment_repo: AssignmentRepository,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.assignment_repo = assignment_repo

    async def my_assigned_tasks(
        self,
        caller: Caller,
        project_id: int | None = None,
        status: TaskStatus | str | None = None,
        due_soon_only: bool = False,
        due_in_days: int | None = None,
        today: date | None = None,
    ) -> Result[Dashboard]:
        if not caller.is_authenticated:
            return unauthenticated()

        status_filter: TaskStatus | None = None
        if status is not None:
            status_filter = parse_status(status)
            if status_filter is None:
                return validation_failed("invalid_status", f"Unknown status '{status}'")

        settings = get_settings()
        days = settings.dashboard_default_due_days
        if due_in_days is not None and due_in_days > 0:
            days = due_in_days
        today = today or utc_today()
        limit = today + timedelta(days=days)

        projects = await self.project_repo.list_all_for_user(caller.user_id)  # type: ignore[arg-type]
        dashboard = Dashboard(
            projects=[DashboardProject(p, is_organizer(p, caller.user_id)) for p in projects],
            due_in_days=days,
        )
        if not projects:
            return Ok(dashboard)

        by_id = {p.id: p for p in projects}
        task_ids = await self.task_repo.list_ids_for_projects(by_id)
        current = await self.assignment_repo.current_for_tasks(task_ids)
        mine = [tid for tid, record in current.items() if record.user_id == caller.user_id]

        tasks = await self.task_repo.list_by_ids(
            mine,
            project_id=project_id,
            status=status_filter.value if status_filter else None,
        )
        if due_soon_only:
            tasks = [t for t in tasks if _due_within(t, today, limit)]

        for task in tasks:
            entry = DashboardTask(
                task=task,
                project=by_id[task.project_id],
                days_until_due=(task.end_date - today).days,
            )
            dashboard.tasks.append(entry)
            dashboard.tasks_by_status.setdefault(task.status_enum, []).append(entry)

        dashboard.upcoming_deadlines = [
            entry for entry in dashboard.tasks if _due_within(entry.task, today, limit)
        ][: settings.dashboard_upcoming_limit]
        return Ok(dashboard)
