from src.taskboard.schemas.dashboard import DashboardRead
from src.taskboard.schemas.pagination import PaginatedResponse
from src.taskboard.schemas.project import (
    MemberAdd,
    MemberRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
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

__all__ = [
    "AssignRequest",
    "AssignmentRead",
    "CommentRead",
    "CommentWrite",
    "DashboardRead",
    "MemberAdd",
    "MemberRead",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "StatusChange",
    "TaskDetailsRead",
    "TaskRead",
    "TaskWrite",
    "UserRead",
]
