from src.taskboard.services.access_service import AccessService
from src.taskboard.services.assignment_service import AssignmentService
from src.taskboard.services.comment_service import CommentService
from src.taskboard.services.dashboard_service import DashboardService
from src.taskboard.services.membership_service import MembershipService
from src.taskboard.services.project_service import ProjectService
from src.taskboard.services.task_service import TaskService

__all__ = [
    "AccessService",
    "AssignmentService",
    "CommentService",
    "DashboardService",
    "MembershipService",
    "ProjectService",
    "TaskService",
]
