"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now, utc_today
from tests.factories.project import ProjectFactory, ProjectMemberFactory
from tests.factories.task import CommentFactory, TaskAssignmentFactory, TaskFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    "utc_today",
    # Directory
    "UserFactory",
    # Projects
    "ProjectFactory",
    "ProjectMemberFactory",
    # Tasks
    "CommentFactory",
    "TaskAssignmentFactory",
    "TaskFactory",
]
