"""Membership store - projects, members and organizer relationships."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.logging import get_logger
from src.taskboard.core.results import Ok, Result, conflict, not_found
from src.taskboard.models import Project, ProjectMember
from src.taskboard.models.base import utc_now
from src.taskboard.policies import is_organizer
from src.taskboard.repositories import ProjectMemberRepository, ProjectRepository

logger = get_logger(__name__)


class MembershipService:
    """Answers membership questions and applies membership mutations.

    Operates on already-loaded projects and performs no caller checks;
    callers gate these operations with the access policy first.
    An inactive project has no members, and no membership can change on it.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: ProjectMemberRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.session = session

    async def get_active_project(self, project_id: int) -> Result[Project]:
        """Load a project; missing and soft-deleted projects are both not_found."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None or not project.is_active:
            return not_found("project_not_found")
        return Ok(project)

    @staticmethod
    def is_organizer(project: Project, user_id: UUID | None) -> bool:
        return is_organizer(project, user_id)

    async def is_active_member(self, project: Project, user_id: UUID | None) -> bool:
        if user_id is None or not project.is_active:
            return False
        return await self.member_repo.has_active_membership(project.id, user_id)  # type: ignore[arg-type]

    async def add_member(self, project: Project, user_id: UUID) -> Result[ProjectMember]:
        """Add a membership row.

        Fails with conflict/already_member when any row exists for the pair,
        including an inactive one: re-adding never silently reactivates.
        """
        if not project.is_active:
            return not_found("project_inactive")

        existing = await self.member_repo.get_membership(project.id, user_id)  # type: ignore[arg-type]
        if existing is not None:
            return conflict("already_member", "User is already a member of this project")

        try:
            membership = self.member_repo.create_membership(project.id, user_id)  # type: ignore[arg-type]
            await self.session.commit()
            await self.session.refresh(membership)
        except IntegrityError:
            # Unique (project_id, user_id) lost a race with a concurrent add
            await self.session.rollback()
            return conflict("already_member", "User is already a member of this project")
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Member added", project_id=project.id, member_id=str(user_id))
        return Ok(membership)

    async def remove_member(self, project: Project, user_id: UUID) -> Result[None]:
        """Hard-delete a membership row. The organizer can never be removed."""
        if is_organizer(project, user_id):
            return conflict("is_organizer", "The organizer cannot be removed from the project")
        if not project.is_active:
            return not_found("project_inactive")

        membership = await self.member_repo.get_membership(project.id, user_id)  # type: ignore[arg-type]
        if membership is None:
            return not_found("membership_not_found")

        try:
            await self.member_repo.delete_membership(membership)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Member removed", project_id=project.id, member_id=str(user_id))
        return Ok(None)

    async def soft_delete_project(self, project: Project) -> Result[None]:
        """Mark a project inactive. Idempotent; there is no way back."""
        if not project.is_active:
            return Ok(None)

        try:
            project.is_active = False
            project.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project soft-deleted", project_id=project.id)
        return Ok(None)
