from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CommentServiceDep, CurrentCaller
from src.taskboard.api.results import unwrap
from src.taskboard.schemas.task import CommentRead, CommentWrite

router = APIRouter(prefix="/comments", tags=["comments"])


@router.patch(
    "/{comment_id}",
    response_model=CommentRead,
    summary="Edit comment",
    description="Only the author or an admin may edit a comment.",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Comment not found"},
        422: {"description": "Empty or oversized comment"},
    },
)
async def edit_comment(
    comment_id: int,
    request: CommentWrite,
    caller: CurrentCaller,
    comments: CommentServiceDep,
) -> CommentRead:
    comment = unwrap(await comments.edit_comment(caller, comment_id, request.text))
    return CommentRead.model_validate(comment)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete comment",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Comment not found"},
    },
)
async def delete_comment(
    comment_id: int,
    caller: CurrentCaller,
    comments: CommentServiceDep,
) -> None:
    unwrap(await comments.delete_comment(caller, comment_id))
