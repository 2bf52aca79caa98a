"""Service dependencies - one instance graph per request session."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.db import DBSession
from src.taskboard.repositories import (
    AssignmentRepository,
    CommentRepository,
    ProjectMemberRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)
from src.taskboard.services import (
    AccessService,
    AssignmentService,
    CommentService,
    DashboardService,
    MembershipService,
    ProjectService,
    TaskService,
)


def get_membership_service(session: DBSession) -> MembershipService:
    return MembershipService(ProjectRepository(session), ProjectMemberRepository(session), session)


MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]


def get_access_service(session: DBSession, membership: MembershipServiceDep) -> AccessService:
    return AccessService(membership, AssignmentRepository(session))


AccessServiceDep = Annotated[AccessService, Depends(get_access_service)]


def get_project_service(
    session: DBSession,
    membership: MembershipServiceDep,
    access: AccessServiceDep,
) -> ProjectService:
    return ProjectService(
        project_repo=ProjectRepository(session),
        member_repo=ProjectMemberRepository(session),
        user_repo=UserRepository(session),
        membership=membership,
        access=access,
        session=session,
    )


def get_task_service(
    session: DBSession,
    membership: MembershipServiceDep,
    access: AccessServiceDep,
) -> TaskService:
    return TaskService(
        task_repo=TaskRepository(session),
        assignment_repo=AssignmentRepository(session),
        comment_repo=CommentRepository(session),
        user_repo=UserRepository(session),
        membership=membership,
        access=access,
        session=session,
    )


def get_assignment_service(session: DBSession, access: AccessServiceDep) -> AssignmentService:
    return AssignmentService(AssignmentRepository(session), access, session)


def get_comment_service(
    session: DBSession,
    membership: MembershipServiceDep,
    access: AccessServiceDep,
) -> CommentService:
    return CommentService(
        comment_repo=CommentRepository(session),
        task_repo=TaskRepository(session),
        membership=membership,
        access=access,
        session=session,
    )


def get_dashboard_service(session: DBSession) -> DashboardService:
    return DashboardService(
        ProjectRepository(session),
        TaskRepository(session),
        AssignmentRepository(session),
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
