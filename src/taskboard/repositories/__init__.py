"""Repository layer - data access abstraction."""

from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.project import ProjectMemberRepository, ProjectRepository
from src.taskboard.repositories.task import (
    AssignmentRepository,
    CommentRepository,
    TaskRepository,
)
from src.taskboard.repositories.user import UserRepository

__all__ = [
    "AssignmentRepository",
    "BaseRepository",
    "CommentRepository",
    "ProjectMemberRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserRepository",
]
