"""FastAPI dependency injection definitions."""

from src.taskboard.api.dependencies.auth import CurrentCaller, caller_from_claims, get_caller
from src.taskboard.api.dependencies.db import DBSession, get_db_session
from src.taskboard.api.dependencies.services import (
    AccessServiceDep,
    AssignmentServiceDep,
    CommentServiceDep,
    DashboardServiceDep,
    MembershipServiceDep,
    ProjectServiceDep,
    TaskServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentCaller",
    "caller_from_claims",
    "get_caller",
    # Services
    "AccessServiceDep",
    "AssignmentServiceDep",
    "CommentServiceDep",
    "DashboardServiceDep",
    "MembershipServiceDep",
    "ProjectServiceDep",
    "TaskServiceDep",
]
