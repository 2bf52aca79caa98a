"""Caller-facing project operations: lifecycle and membership management."""

from dataclasses import dataclass
from datetime import datetime
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
from src.taskboard.models import Project, ProjectMember, User
from src.taskboard.models.base import utc_now
from src.taskboard.policies import Caller, is_organizer
from src.taskboard.repositories import (
    ProjectMemberRepository,
    ProjectRepository,
    UserRepository,
)
from src.taskboard.services.access_service import AccessService
from src.taskboard.services.membership_service import MembershipService

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 200


@dataclass(frozen=True)
class MemberEntry:
    """A project member as shown in the member list."""

    user: User
    is_organizer: bool
    joined_at: datetime | None = None


def _clean_text(title: str, description: str) -> tuple[str, str] | Failure:
    title = title.strip()
    description = description.strip()
    if not title or len(title) > MAX_TITLE_LENGTH:
        return validation_failed("invalid_title", "Title is required (max 200 characters)")
    if not description:
        return validation_failed("invalid_description", "Description is required")
    return title, description


class ProjectService:
    """Project CRUD and membership management with access checks."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: ProjectMemberRepository,
        user_repo: UserRepository,
        membership: MembershipService,
        access: AccessService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.user_repo = user_repo
        self.membership = membership
        self.access = access
        self.session = session

    async def _load_for(self, caller: Caller, project_id: int) -> Result[Project]:
        if not caller.is_authenticated:
            return unauthenticated()
        return await self.membership.get_active_project(project_id)

    async def create_project(
        self, caller: Caller, title: str, description: str
    ) -> Result[Project]:
        """Create a project organized by the caller.

        The organizer's own membership row is written in the same transaction.
        """
        if not caller.is_authenticated:
            return unauthenticated()
        cleaned = _clean_text(title, description)
        if isinstance(cleaned, Failure):
            return cleaned

        project = Project(
            title=cleaned[0],
            description=cleaned[1],
            organizer_id=caller.user_id,  # type: ignore[arg-type]
        )
        try:
            self.project_repo.add(project)
            await self.session.flush()
            self.member_repo.create_membership(project.id, caller.user_id)  # type: ignore[arg-type]
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=project.id)
        return Ok(project)

    async def get_project(self, caller: Caller, project_id: int) -> Result[Project]:
        """Active project the caller can view; anything else is not_found."""
        loaded = await self._load_for(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        if not await self.access.can_view(caller, loaded.value):
            return not_found("project_not_found")
        return loaded

    async def list_my_projects(
        self, caller: Caller, cursor: str | None = None, limit: int = 50
    ) -> Result[tuple[list[Project], str | None, bool]]:
        if not caller.is_authenticated:
            return unauthenticated()
        page = await self.project_repo.list_for_user(caller.user_id, cursor, limit)  # type: ignore[arg-type]
        return Ok(page)

    async def update_project(
        self,
        caller: Caller,
        project_id: int,
        title: str | None = None,
        description: str | None = None,
    ) -> Result[Project]:
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        project = loaded.value
        if not self.access.can_modify(caller, project):
            return forbidden()

        cleaned = _clean_text(
            title if title is not None else project.title,
            description if description is not None else project.description,
        )
        if isinstance(cleaned, Failure):
            return cleaned

        try:
            project.title, project.description = cleaned
            project.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project updated", project_id=project.id)
        return Ok(project)

    async def delete_project(self, caller: Caller, project_id: int) -> Result[None]:
        """Soft-delete a project. Its tasks and history stay in storage."""
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        if not self.access.can_modify(caller, loaded.value):
            return forbidden()
        return await self.membership.soft_delete_project(loaded.value)

    async def add_member(
        self, caller: Caller, project_id: int, identifier: str
    ) -> Result[ProjectMember]:
        """Add a user, found by user name or email, to the project."""
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        if not self.access.can_modify(caller, loaded.value):
            return forbidden()

        user = await self.user_repo.find_by_identifier(identifier)
        if user is None:
            return validation_failed("user_not_found", "User not found (check email/username)")
        return await self.membership.add_member(loaded.value, user.id)

    async def remove_member(
        self, caller: Caller, project_id: int, user_id: UUID
    ) -> Result[None]:
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        project = loaded.value
        # Organizer removal is a conflict regardless of modify rights
        if is_organizer(project, user_id):
            return await self.membership.remove_member(project, user_id)
        if not self.access.can_modify(caller, project):
            return forbidden()
        return await self.membership.remove_member(project, user_id)

    async def list_members(self, caller: Caller, project_id: int) -> Result[list[MemberEntry]]:
        """Organizer first, then active members by full name."""
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        project = loaded.value

        entries: list[MemberEntry] = []
        seen: set[UUID] = set()
        organizer = await self.user_repo.get_by_id(project.organizer_id)
        if organizer is not None:
            entries.append(MemberEntry(user=organizer, is_organizer=True))
            seen.add(organizer.id)

        rows = await self.member_repo.list_active_with_users(project.id)  # type: ignore[arg-type]
        for membership, user in rows:
            if user.id in seen:
                continue
            entries.append(
                MemberEntry(
                    user=user,
                    is_organizer=is_organizer(project, user.id),
                    joined_at=membership.joined_at,
                )
            )
            seen.add(user.id)
        return Ok(entries)

    async def assignee_candidates(self, caller: Caller, project_id: int) -> Result[list[User]]:
        """Users a task of this project may be assigned to.

        For display only: assignment re-validates the chosen user.
        """
        loaded = await self.get_project(caller, project_id)
        if isinstance(loaded, Failure):
            return loaded
        if not self.access.can_assign(caller, loaded.value):
            return forbidden()
        members = await self.list_members(caller, project_id)
        if isinstance(members, Failure):
            return members
        return Ok([entry.user for entry in members.value])
