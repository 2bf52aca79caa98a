"""Model exports.

Import from here: `from src.taskboard.models import Project, Task`
"""

# Enums
from src.taskboard.models.enums import MediaType, TaskStatus

# Tables
from src.taskboard.models.project import Project, ProjectMember
from src.taskboard.models.task import Comment, Task, TaskAssignment
from src.taskboard.models.user import User

__all__ = [
    # Enums
    "MediaType",
    "TaskStatus",
    # Tables
    "Comment",
    "Project",
    "ProjectMember",
    "Task",
    "TaskAssignment",
    "User",
]
