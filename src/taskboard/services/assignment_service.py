"""Assignment ledger - append-only task assignment history."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.logging import get_logger
from src.taskboard.core.results import (
    Ok,
    Result,
    forbidden,
    not_found,
    unauthenticated,
    validation_failed,
)
from src.taskboard.models import Project, Task, TaskAssignment
from src.taskboard.policies import Caller
from src.taskboard.repositories import AssignmentRepository
from src.taskboard.services.access_service import AccessService

logger = get_logger(__name__)


class AssignmentService:
    """Derives current assignees and appends assignment records.

    Records are never updated or deduplicated: assigning a task to the user who
    already holds it still appends a new row.
    """

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        access: AccessService,
        session: AsyncSession,
    ):
        self.assignment_repo = assignment_repo
        self.access = access
        self.session = session

    async def current_assignee(self, task_id: int) -> UUID | None:
        """User holding the task: the record with the greatest (assigned_at, id)."""
        return await self.access.current_assignee(task_id)

    async def assign(
        self,
        task: Task,
        project: Project,
        target_user_id: UUID,
        caller: Caller,
    ) -> Result[TaskAssignment]:
        """Append an assignment of ``task`` to ``target_user_id``.

        The target's membership is re-checked here, not only when the
        candidate list was rendered.
        """
        if not project.is_active:
            return not_found("project_not_found")
        if task.project_id != project.id:
            return not_found("task_not_found")
        if not caller.is_authenticated:
            return unauthenticated()
        if not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        if not self.access.can_assign(caller, project):
            logger.info("Assignment denied", task_id=task.id, project_id=project.id)
            return forbidden()
        if not await self.access.is_valid_assignee_candidate(project, target_user_id):
            return validation_failed(
                "invalid_assignee", "Assignee must be the organizer or an active project member"
            )

        try:
            record = self.assignment_repo.append(
                task_id=task.id,  # type: ignore[arg-type]
                user_id=target_user_id,
                assigned_by_id=caller.user_id,  # type: ignore[arg-type]
            )
            await self.session.commit()
            await self.session.refresh(record)
        except Exception:
            # Appends are never retried
            await self.session.rollback()
            raise

        logger.info(
            "Task assigned",
            task_id=task.id,
            project_id=project.id,
            assignee_id=str(target_user_id),
            assignment_id=record.id,
        )
        return Ok(record)

    async def history(
        self, caller: Caller, project: Project, task: Task
    ) -> Result[list[TaskAssignment]]:
        """Full ledger of a task, newest first. Requires view access."""
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        return Ok(await self.assignment_repo.history(task.id))  # type: ignore[arg-type]
