"""Task, assignment and comment factories."""

from datetime import timedelta

from polyfactory import Use

from src.taskboard.models import Comment, MediaType, Task, TaskAssignment, TaskStatus
from tests.factories.base import BaseFactory, generate_uuid, utc_now, utc_today


class TaskFactory(BaseFactory):
    """Factory for generating Task test data.

    ``project_id`` and ``created_by_id`` must be set explicitly.
    """

    __model__ = Task

    id = None
    project_id = None
    title = Use(lambda: f"Task {generate_uuid().hex[-6:]}")
    description = "A task used in tests"
    status = TaskStatus.NOT_STARTED.value
    start_date = Use(utc_today)
    end_date = Use(lambda: utc_today() + timedelta(days=3))
    media_type = MediaType.TEXT.value
    media_content = "Plain text body"
    created_by_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TaskAssignmentFactory(BaseFactory):
    """Factory for ledger records, for tests that need explicit timestamps."""

    __model__ = TaskAssignment

    id = None
    task_id = None
    user_id = None
    assigned_by_id = None
    assigned_at = Use(utc_now)


class CommentFactory(BaseFactory):
    __model__ = Comment

    id = None
    task_id = None
    user_id = None
    text = "Looks good"
    created_at = Use(utc_now)
    updated_at = None
    is_deleted = False
