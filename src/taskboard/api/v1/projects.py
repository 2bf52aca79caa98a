"""Project and membership endpoints.

Visibility follows the access policy: projects the caller cannot see are
reported as 404, mutations on visible projects as 403.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.taskboard.api.dependencies import CurrentCaller, ProjectServiceDep
from src.taskboard.api.results import unwrap
from src.taskboard.schemas.pagination import PaginatedResponse
from src.taskboard.schemas.project import (
    MemberAdd,
    MemberRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.taskboard.schemas.user import UserRead

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List my projects",
    description="Active projects the caller organizes or is an active member of.",
    responses={
        200: {"description": "Paginated list of projects"},
        401: {"description": "Not authenticated"},
    },
)
async def list_projects(
    caller: CurrentCaller,
    projects: ProjectServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    items, next_cursor, has_more = unwrap(
        await projects.list_my_projects(caller, cursor=cursor, limit=limit)
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project organized by the caller.",
    responses={
        201: {"description": "Project created"},
        401: {"description": "Not authenticated"},
    },
)
async def create_project(
    request: ProjectCreate,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> ProjectRead:
    project = unwrap(await projects.create_project(caller, request.title, request.description))
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: int,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> ProjectRead:
    return ProjectRead.model_validate(unwrap(await projects.get_project(caller, project_id)))


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Only the organizer or an admin may update a project.",
    responses={
        200: {"description": "Project updated"},
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> ProjectRead:
    project = unwrap(
        await projects.update_project(
            caller, project_id, title=request.title, description=request.description
        )
    )
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Soft-delete a project. Tasks and history are retained.",
    responses={
        204: {"description": "Project deleted"},
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: int,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> None:
    unwrap(await projects.delete_project(caller, project_id))


@router.get(
    "/{project_id}/members",
    response_model=list[MemberRead],
    summary="List members",
    description="Organizer first, then active members.",
    responses={404: {"description": "Project not found"}},
)
async def list_members(
    project_id: int,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> list[MemberRead]:
    entries = unwrap(await projects.list_members(caller, project_id))
    return [MemberRead.model_validate(entry) for entry in entries]


@router.post(
    "/{project_id}/members",
    status_code=status.HTTP_201_CREATED,
    summary="Add member",
    description="Add a user, identified by user name or email, to the project.",
    responses={
        201: {"description": "Member added"},
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Project not found"},
        409: {"description": "User is already a member"},
        422: {"description": "User not found"},
    },
)
async def add_member(
    project_id: int,
    request: MemberAdd,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> dict[str, str]:
    membership = unwrap(await projects.add_member(caller, project_id, request.identifier))
    return {"user_id": str(membership.user_id)}


@router.delete(
    "/{project_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove member",
    responses={
        204: {"description": "Member removed"},
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Project or membership not found"},
        409: {"description": "The organizer cannot be removed"},
    },
)
async def remove_member(
    project_id: int,
    user_id: UUID,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> None:
    unwrap(await projects.remove_member(caller, project_id, user_id))


@router.get(
    "/{project_id}/assignee-candidates",
    response_model=list[UserRead],
    summary="List assignee candidates",
    description="Users a task may currently be assigned to. Informational only.",
    responses={
        403: {"description": "Not allowed to assign tasks"},
        404: {"description": "Project not found"},
    },
)
async def list_assignee_candidates(
    project_id: int,
    caller: CurrentCaller,
    projects: ProjectServiceDep,
) -> list[UserRead]:
    users = unwrap(await projects.assignee_candidates(caller, project_id))
    return [UserRead.model_validate(u) for u in users]
