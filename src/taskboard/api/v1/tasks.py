"""Task endpoints - CRUD, assignment, status and comments within a project."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.taskboard.api.dependencies import (
    AssignmentServiceDep,
    CommentServiceDep,
    CurrentCaller,
    TaskServiceDep,
)
from src.taskboard.api.results import unwrap
from src.taskboard.models import Comment, User
from src.taskboard.schemas.pagination import PaginatedResponse
from src.taskboard.schemas.task import (
    AssignmentRead,
    AssignRequest,
    CommentRead,
    CommentWrite,
    StatusChange,
    TaskDetailsRead,
    TaskRead,
    TaskWrite,
)
from src.taskboard.schemas.user import UserRead
from src.taskboard.services.task_service import TaskFields

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


def _fields(request: TaskWrite) -> TaskFields:
    return TaskFields(
        title=request.title,
        description=request.description,
        start_date=request.start_date,
        end_date=request.end_date,
        status=request.status,
        media_type=request.media_type,
        media_content=request.media_content,
    )


def _comment_read(comment: Comment, author: User | None) -> CommentRead:
    read = CommentRead.model_validate(comment)
    if author is not None:
        read.author = UserRead.model_validate(author)
    return read


@router.get(
    "",
    response_model=PaginatedResponse[TaskRead],
    summary="List tasks",
    responses={404: {"description": "Project not found"}},
)
async def list_tasks(
    project_id: int,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[TaskRead]:
    items, next_cursor, has_more = unwrap(
        await tasks.list_tasks(caller, project_id, cursor=cursor, limit=limit)
    )
    return PaginatedResponse(
        items=[TaskRead.model_validate(t) for t in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description="Only the organizer or an admin may create tasks.",
    responses={
        201: {"description": "Task created"},
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Project not found"},
        422: {"description": "Invalid task fields"},
    },
)
async def create_task(
    project_id: int,
    request: TaskWrite,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
) -> TaskRead:
    project = unwrap(await tasks.load_project(caller, project_id))
    task = unwrap(await tasks.create_task(caller, project, _fields(request)))
    return TaskRead.model_validate(task)


@router.get(
    "/{task_id}",
    response_model=TaskDetailsRead,
    summary="Get task",
    description="Task with its current assignee, live comments and the caller's rights.",
    responses={404: {"description": "Task not found"}},
)
async def get_task(
    project_id: int,
    task_id: int,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
) -> TaskDetailsRead:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    details = unwrap(await tasks.get_task_details(caller, project, task))
    return TaskDetailsRead(
        task=TaskRead.model_validate(details.task),
        assignee=UserRead.model_validate(details.assignee) if details.assignee else None,
        can_modify=details.can_modify,
        can_change_status=details.can_change_status,
        comments=[_comment_read(c, details.authors.get(c.user_id)) for c in details.comments],
    )


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    responses={
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Task not found"},
        422: {"description": "Invalid task fields"},
    },
)
async def update_task(
    project_id: int,
    task_id: int,
    request: TaskWrite,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
) -> TaskRead:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    updated = unwrap(await tasks.update_task(caller, project, task, _fields(request)))
    return TaskRead.model_validate(updated)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
    description="Deletes the task together with its assignment history and comments.",
    responses={
        403: {"description": "Not allowed to modify this project"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(
    project_id: int,
    task_id: int,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
) -> None:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    unwrap(await tasks.delete_task(caller, project, task))


@router.put(
    "/{task_id}/status",
    response_model=TaskRead,
    summary="Change task status",
    description="Allowed for the organizer, an admin, or the current assignee.",
    responses={
        403: {"description": "Not allowed to change this task's status"},
        404: {"description": "Task not found"},
        422: {"description": "Unknown status"},
    },
)
async def change_status(
    project_id: int,
    task_id: int,
    request: StatusChange,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
) -> TaskRead:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    updated = unwrap(await tasks.change_status(task, project, request.status, caller))
    return TaskRead.model_validate(updated)


@router.post(
    "/{task_id}/assignments",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Assign task",
    description="Append an assignment record. The newest record is the current assignee.",
    responses={
        403: {"description": "Not allowed to assign tasks"},
        404: {"description": "Task not found"},
        422: {"description": "Assignee is not the organizer or an active member"},
    },
)
async def assign_task(
    project_id: int,
    task_id: int,
    request: AssignRequest,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
    assignments: AssignmentServiceDep,
) -> AssignmentRead:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    record = unwrap(await assignments.assign(task, project, request.user_id, caller))
    return AssignmentRead.model_validate(record)


@router.get(
    "/{task_id}/assignments",
    response_model=list[AssignmentRead],
    summary="Assignment history",
    description="Every assignment record of the task, newest first.",
    responses={404: {"description": "Task not found"}},
)
async def assignment_history(
    project_id: int,
    task_id: int,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
    assignments: AssignmentServiceDep,
) -> list[AssignmentRead]:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    records = unwrap(await assignments.history(caller, project, task))
    return [AssignmentRead.model_validate(r) for r in records]


@router.get(
    "/{task_id}/comments",
    response_model=list[CommentRead],
    summary="List comments",
    responses={404: {"description": "Task not found"}},
)
async def list_comments(
    project_id: int,
    task_id: int,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
    comments: CommentServiceDep,
) -> list[CommentRead]:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    return [
        CommentRead.model_validate(c)
        for c in unwrap(await comments.list_comments(caller, project, task))
    ]


@router.post(
    "/{task_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
    responses={
        404: {"description": "Task not found"},
        422: {"description": "Empty or oversized comment"},
    },
)
async def add_comment(
    project_id: int,
    task_id: int,
    request: CommentWrite,
    caller: CurrentCaller,
    tasks: TaskServiceDep,
    comments: CommentServiceDep,
) -> CommentRead:
    project, task = unwrap(await tasks.load_task(caller, project_id, task_id))
    comment = unwrap(await comments.add_comment(caller, project, task, request.text))
    return CommentRead.model_validate(comment)
