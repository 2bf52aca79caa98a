"""Shared enums for models."""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status.

    No transition graph is enforced: an authorized caller may move a task
    to any status from any status.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class MediaType(str, Enum):
    """Kind of content attached to a task."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
