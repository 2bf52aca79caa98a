"""Test helper functions for common data creation patterns."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.api.dependencies.services import (
    get_access_service,
    get_assignment_service,
    get_comment_service,
    get_dashboard_service,
    get_membership_service,
    get_project_service,
    get_task_service,
)
from src.taskboard.core.security import create_access_token
from src.taskboard.models import Project, ProjectMember, Task, User
from src.taskboard.policies import Caller
from src.taskboard.services import (
    AccessService,
    AssignmentService,
    CommentService,
    DashboardService,
    MembershipService,
    ProjectService,
    TaskService,
)
from tests.factories import ProjectFactory, ProjectMemberFactory, TaskFactory, UserFactory


@dataclass
class Services:
    membership: MembershipService
    access: AccessService
    projects: ProjectService
    tasks: TaskService
    assignments: AssignmentService
    comments: CommentService
    dashboard: DashboardService


def build_services(session: AsyncSession) -> Services:
    """Wire the same service graph the API builds per request."""
    membership = get_membership_service(session)
    access = get_access_service(session, membership)
    return Services(
        membership=membership,
        access=access,
        projects=get_project_service(session, membership, access),
        tasks=get_task_service(session, membership, access),
        assignments=get_assignment_service(session, access),
        comments=get_comment_service(session, membership, access),
        dashboard=get_dashboard_service(session),
    )


def as_caller(user: User, is_admin: bool = False) -> Caller:
    return Caller(user_id=user.id, is_admin=is_admin)


def auth_headers(user: User, *roles: str) -> dict[str, str]:
    token = create_access_token(user.id, roles=list(roles))
    return {"Authorization": f"Bearer {token}"}


async def create_user(session: AsyncSession, **kwargs) -> User:
    user = UserFactory.build(**kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_project(
    session: AsyncSession,
    organizer: User,
    members: list[User] | None = None,
    **kwargs,
) -> Project:
    """Create a project with its organizer's membership and optional members.

    Args:
        session: Database session
        organizer: User organizing the project
        members: Additional active members
        **kwargs: Additional args passed to ProjectFactory

    Returns:
        The committed project
    """
    project = ProjectFactory.build(organizer_id=organizer.id, **kwargs)
    session.add(project)
    await session.flush()

    for user in [organizer, *(members or [])]:
        session.add(ProjectMemberFactory.build(project_id=project.id, user_id=user.id))
    await session.commit()
    return project


async def add_membership(
    session: AsyncSession, project: Project, user: User, is_active: bool = True
) -> ProjectMember:
    membership = ProjectMemberFactory.build(
        project_id=project.id, user_id=user.id, is_active=is_active
    )
    session.add(membership)
    await session.commit()
    return membership


async def create_task(session: AsyncSession, project: Project, **kwargs) -> Task:
    task = TaskFactory.build(
        project_id=project.id, created_by_id=project.organizer_id, **kwargs
    )
    session.add(task)
    await session.commit()
    return task
