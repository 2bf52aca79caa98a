"""Repositories for Project and ProjectMember."""

from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select

from src.taskboard.models import Project, ProjectMember, User
from src.taskboard.repositories.base import BaseRepository


def _visible_to(user_id: UUID):  # type: ignore[no-untyped-def]
    """Active projects the user organizes or actively belongs to."""
    member_of = select(ProjectMember.project_id).where(
        ProjectMember.user_id == user_id,
        ProjectMember.is_active == True,  # noqa: E712
    )
    return select(Project).where(
        Project.is_active == True,  # noqa: E712
        or_(
            Project.organizer_id == user_id,
            Project.id.in_(member_of),  # type: ignore[union-attr]
        ),
    )


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_for_user(
        self,
        user_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List the user's active projects, newest first, with cursor pagination."""
        return await self.paginate(_visible_to(user_id), cursor, limit, Project.id)

    async def list_all_for_user(self, user_id: UUID) -> list[Project]:
        """All active projects the user organizes or belongs to, newest first."""
        result = await self.session.execute(
            _visible_to(user_id).order_by(Project.id.desc())  # type: ignore[union-attr]
        )
        return list(result.scalars().all())


class ProjectMemberRepository(BaseRepository[ProjectMember]):
    """Repository for project memberships."""

    model = ProjectMember

    async def get_membership(self, project_id: int, user_id: UUID) -> ProjectMember | None:
        """Get the membership row for a user in a project, active or not."""
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def has_active_membership(self, project_id: int, user_id: UUID) -> bool:
        result = await self.session.execute(
            select(ProjectMember.id).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
                ProjectMember.is_active == True,  # noqa: E712
            )
        )
        return result.first() is not None

    async def list_active_with_users(
        self, project_id: int
    ) -> list[tuple[ProjectMember, User]]:
        """Active memberships of a project joined with their users, by full name."""
        result = await self.session.execute(
            select(ProjectMember, User)
            .join(User, User.id == ProjectMember.user_id)  # type: ignore[arg-type]
            .where(
                ProjectMember.project_id == project_id,
                ProjectMember.is_active == True,  # noqa: E712
            )
            .order_by(User.full_name, User.user_name)
        )
        return [(member, user) for member, user in result.all()]

    def create_membership(self, project_id: int, user_id: UUID) -> ProjectMember:
        """Create a new membership (add to session, no commit)."""
        membership = ProjectMember(project_id=project_id, user_id=user_id)
        self.session.add(membership)
        return membership

    async def delete_membership(self, membership: ProjectMember) -> None:
        """Hard-delete a membership row (no commit)."""
        await self.session.delete(membership)
