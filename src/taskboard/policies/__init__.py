"""Access policy and caller identity."""

from src.taskboard.policies.access import (
    can_assign,
    can_change_status,
    can_manage_comment,
    can_modify,
    can_view,
    is_organizer,
    is_valid_assignee_candidate,
)
from src.taskboard.policies.identity import Caller

__all__ = [
    "Caller",
    "can_assign",
    "can_change_status",
    "can_manage_comment",
    "can_modify",
    "can_view",
    "is_organizer",
    "is_valid_assignee_candidate",
]
