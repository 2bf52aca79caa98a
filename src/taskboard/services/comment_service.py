"""Task comments, gated by the same project access policy."""

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
from src.taskboard.models import Comment, Project, Task
from src.taskboard.models.base import utc_now
from src.taskboard.policies import Caller, can_manage_comment
from src.taskboard.repositories import CommentRepository, TaskRepository
from src.taskboard.services.access_service import AccessService
from src.taskboard.services.membership_service import MembershipService

logger = get_logger(__name__)

MAX_COMMENT_LENGTH = 4000


def _clean_comment(text: str | None) -> str | Failure:
    cleaned = (text or "").strip()
    if not cleaned:
        return validation_failed("empty_comment", "Comment text cannot be empty")
    if len(cleaned) > MAX_COMMENT_LENGTH:
        return validation_failed("comment_too_long", "Comment text is too long")
    return cleaned


class CommentService:
    """Add, edit, soft-delete and list comments on tasks."""

    def __init__(
        self,
        comment_repo: CommentRepository,
        task_repo: TaskRepository,
        membership: MembershipService,
        access: AccessService,
        session: AsyncSession,
    ):
        self.comment_repo = comment_repo
        self.task_repo = task_repo
        self.membership = membership
        self.access = access
        self.session = session

    async def add_comment(
        self, caller: Caller, project: Project, task: Task, text: str
    ) -> Result[Comment]:
        """Any caller who can view the project may comment."""
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        cleaned = _clean_comment(text)
        if isinstance(cleaned, Failure):
            return cleaned

        comment = Comment(task_id=task.id, user_id=caller.user_id, text=cleaned)  # type: ignore[arg-type]
        try:
            self.comment_repo.add(comment)
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment added", comment_id=comment.id, task_id=task.id)
        return Ok(comment)

    async def list_comments(
        self, caller: Caller, project: Project, task: Task
    ) -> Result[list[Comment]]:
        if not caller.is_authenticated:
            return unauthenticated()
        if task.project_id != project.id or not await self.access.can_view(caller, project):
            return not_found("task_not_found")
        return Ok(await self.comment_repo.list_for_task(task.id))  # type: ignore[arg-type]

    async def _load_managed(self, caller: Caller, comment_id: int) -> Result[Comment]:
        """Load a live comment the caller may edit or delete."""
        if not caller.is_authenticated:
            return unauthenticated()
        comment = await self.comment_repo.get_live(comment_id)
        if comment is None:
            return not_found("comment_not_found")
        task = await self.task_repo.get_by_id(comment.task_id)
        if task is None:
            return not_found("comment_not_found")
        loaded = await self.membership.get_active_project(task.project_id)
        if isinstance(loaded, Failure):
            return not_found("comment_not_found")
        project = loaded.value

        if not await self.access.can_view(caller, project):
            return not_found("comment_not_found")
        is_member = await self.membership.is_active_member(project, caller.user_id)
        if not can_manage_comment(caller, project, comment, is_member=is_member):
            return forbidden()
        return Ok(comment)

    async def edit_comment(self, caller: Caller, comment_id: int, text: str) -> Result[Comment]:
        """Only the author or an admin may edit."""
        loaded = await self._load_managed(caller, comment_id)
        if isinstance(loaded, Failure):
            return loaded
        cleaned = _clean_comment(text)
        if isinstance(cleaned, Failure):
            return cleaned

        comment = loaded.value
        try:
            comment.text = cleaned
            comment.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment edited", comment_id=comment.id, task_id=comment.task_id)
        return Ok(comment)

    async def delete_comment(self, caller: Caller, comment_id: int) -> Result[None]:
        """Soft-delete. Only the author or an admin may delete."""
        loaded = await self._load_managed(caller, comment_id)
        if isinstance(loaded, Failure):
            return loaded

        comment = loaded.value
        try:
            comment.is_deleted = True
            comment.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment deleted", comment_id=comment.id, task_id=comment.task_id)
        return Ok(None)
