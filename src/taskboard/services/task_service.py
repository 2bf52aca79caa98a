"""Task lifecycle - CRUD, status changes and cascading deletion."""

from dataclasses import dataclass, field
from datetime import date, datetime
from urllib.parse import urlparse
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.logging import get_logger
from src.taskboard.core.results import (
    Failure,
    Ok,
    Result,
    forbidden,
    not_found,
    unauthenticated,
    validation_failed,
)
from src.taskboard.models import Comment, MediaType, Project, Task, TaskStatus, User
from src.taskboard.models.base import utc_now
from src.taskboard.policies import Caller
from src.taskboard.repositories import (
    AssignmentRepository,
    CommentRepository,
    TaskRepository,
    UserRepository,
)
from src.taskboard.services.access_service import AccessService
from src.taskboard.services.membership_service import MembershipService

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000


@dataclass(frozen=True)
class TaskFields:
    """Editable task fields as submitted by the caller."""

    title: str
    description: str
    start_date: date | datetime
    end_date: date | datetime
    status: TaskStatus | str = TaskStatus.NOT_STARTED
    media_type: MediaType | str = MediaType.TEXT
    media_content: str = ""


@dataclass
class TaskDetails:
    """A task with its derived assignee, comments and the caller's rights."""

    project: Project
    task: Task
    assignee: User | None
    can_modify: bool
    can_change_status: bool
    comments: list[Comment] = field(default_factory=list)
    authors: dict[UUID, User] = field(default_factory=dict)


def _as_date(value: date | datetime) -> date:
    """Strip time of day; datetime is a subclass of date so check it first."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_status(value: TaskStatus | str) -> TaskStatus | None:
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def _validate_media(media_type: MediaType, content: str) -> Failure | None:
    if media_type is MediaType.TEXT and not content:
        return validation_failed("invalid_media", "Please add text content")
    if media_type is MediaType.VIDEO:
        if not content:
            return validation_failed("invalid_media", "Please add a video URL")
        parsed = urlparse(content)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return validation_failed("invalid_media", "The video URL is not valid")
    if media_type is MediaType.IMAGE and not content:
        return validation_failed("invalid_media", "Please upload an image")
    return None


def normalize_fields(fields: TaskFields) -> dict[str, object] | Failure:
    """Validate and normalize submitted task fields.

    Dates are compared as calendar dates and the end date must be strictly
    after the start date.
    """
    title = fields.title.strip()
    description = fields.description.strip()
    if not title or len(title) > MAX_TITLE_LENGTH:
        return validation_failed("invalid_title", "Title is required (max 200 characters)")
    if not description or len(description) > MAX_DESCRIPTION_LENGTH:
        return validation_failed(
            "invalid_description", "Description is required (max 2000 characters)"
        )

    start = _as_date(fields.start_date)
    end = _as_date(fields.end_date)
    if end <= start:
        return validation_failed("invalid_dates", "End date must be after start date")

    status = parse_status(fields.status)
    if status is None:
        return validation_failed("invalid_status", f"Unknown status '{fields.status}'")

    try:
        media_type = MediaType(fields.media_type)
    except ValueError:
        return validation_failed("invalid_media", f"Unknown media type '{fields.media_type}'")
    media_content = fields.media_content.strip()
    media_error = _validate_media(media_type, media_content)
    if media_error is not None:
        return media_error

    return {
        "title": title,
        "description": description,
        "start_date": start,
        "end_date": end,
        "status": status.value,
        "media_type": media_type.value,
        "media_content": media_content,
    }


class TaskService:
    """Task CRUD gated by modify rights, and the status state machine.

    Status may move between any two values in any order; the only gate is
    ``can_change_status``. Date rules apply on create and edit only.
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        assignment_repo: AssignmentRepository,
        comment_repo: CommentRepository,
        user_repo: UserRepository,
        membership: MembershipService,
        access: AccessService,
        session: AsyncSession,
    ):
        self.task_repo = task_repo
        self.assignment_repo = assignment_repo
        self.comment_repo = comment_repo
        self.user_repo = user_repo
        self.membership = membership
        self.access = access
        self.session = session

    async def load_project(self, caller: Caller, project_id: int) -> Result[Project]:
        """Resolve an active project for an authenticated caller, without checking rights."""
        if not caller.is_authenticated:
            return unauthenticated()
        return await self.membership.get_active_project(project_id)

    async def load_task(
        self, caller: Caller, project_id: int, task_id: int
    ) -> Result[tuple[Project, Task]]:
        """Resolve a (project, task) pair without checking rights.

        Missing projects, soft-deleted projects and tasks of other projects
        are all reported as not_found.
        """
        loaded = await self.load_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        task = await self.task_repo.get_in_project(project_id, task_id)
        if task is None:
            return not_found("task_not_found")
        return Ok((loaded.value, task))

    async def create_task(
        self, caller: Caller, project: Project, fields: TaskFields
    ) -> Result[Task]:
        if not caller.is_authenticated:
            return unauthenticated()
        if not await self.access.can_view(caller, project):
            return not_found("project_not_found")
        if not self.access.can_modify(caller, project):
            return forbidden()

        values = normalize_fields(fields)
        if isinstance(values, Failure):
            return values

        task = Task(
            project_id=project.id,  # type: ignore[arg-type]
            created_by_id=caller.user_id,  # type: ignore[arg-type]
            **values,  # type: ignore[arg-type]
        )
        try:
            self.task_repo.add(task)
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task created", task_id=task.id, project_id=project.id)
        return Ok(task)

    async def update_task(
        self, caller: Caller, project: Project, task: Task, fields: TaskFields
    ) -> Result[Task]:
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        if not self.access.can_modify(caller, project):
            return forbidden()

        values = normalize_fields(fields)
        if isinstance(values, Failure):
            return values

        try:
            for name, value in values.items():
                setattr(task, name, value)
            task.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task updated", task_id=task.id, project_id=project.id)
        return Ok(task)

    async def delete_task(self, caller: Caller, project: Project, task: Task) -> Result[None]:
        """Delete a task with its assignment ledger and comments in one transaction."""
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        if not self.access.can_modify(caller, project):
            return forbidden()

        task_id = task.id
        try:
            await self.assignment_repo.delete_for_task(task_id)  # type: ignore[arg-type]
            await self.comment_repo.delete_for_task(task_id)  # type: ignore[arg-type]
            await self.session.delete(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task deleted", task_id=task_id, project_id=project.id)
        return Ok(None)

    async def change_status(
        self,
        task: Task,
        project: Project,
        new_status: TaskStatus | str,
        caller: Caller,
    ) -> Result[Task]:
        """Set the task status. Any transition is allowed when authorized."""
        if not project.is_active or task.project_id != project.id:
            return not_found("task_not_found")
        if not caller.is_authenticated:
            return unauthenticated()
        if not await self.access.can_change_status(caller, project, task):
            logger.info("Status change denied", task_id=task.id, project_id=project.id)
            return forbidden()

        status = parse_status(new_status)
        if status is None:
            return validation_failed("invalid_status", f"Unknown status '{new_status}'")

        previous = task.status
        try:
            task.status = status.value
            task.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Task status changed",
            task_id=task.id,
            project_id=project.id,
            from_status=previous,
            to_status=status.value,
        )
        return Ok(task)

    async def get_task_details(
        self, caller: Caller, project: Project, task: Task
    ) -> Result[TaskDetails]:
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")

        record = await self.assignment_repo.current_for_task(task.id)  # type: ignore[arg-type]
        comments = await self.comment_repo.list_for_task(task.id)  # type: ignore[arg-type]

        user_ids = {c.user_id for c in comments}
        if record is not None:
            user_ids.add(record.user_id)
        users = await self.user_repo.get_many(user_ids)

        can_modify = self.access.can_modify(caller, project)
        holds_task = record is not None and record.user_id == caller.user_id
        return Ok(
            TaskDetails(
                project=project,
                task=task,
                assignee=users.get(record.user_id) if record else None,
                can_modify=can_modify,
                can_change_status=can_modify or holds_task,
                comments=comments,
                authors=users,
            )
        )

    async def list_tasks(
        self,
        caller: Caller,
        project_id: int,
        cursor: str | None = None,
        limit: int = 50,
    ) -> Result[tuple[list[Task], str | None, bool]]:
        if not caller.is_authenticated:
            return unauthenticated()
        loaded = await self.membership.get_active_project(project_id)
        if isinstance(loaded, Failure):
            return loaded
        if not await self.access.can_view(caller, loaded.value):
            return not_found("project_not_found")
        return Ok(await self.task_repo.list_for_project(project_id, cursor, limit))
