"""Access policy - pure decision functions.

Every function is side-effect free and takes the facts it needs (membership,
current assignee) as arguments, so decisions can be evaluated concurrently
without coordination. Store lookups happen in the service layer.

Rules:
- An inactive project denies everything, even to its organizer or an admin.
- An anonymous caller is denied everything.
- View: organizer, active member, or admin.
- Modify / assign: organizer or admin. Membership alone is not enough.
- Status change: modify rights, or being the task's current assignee.
"""

from uuid import UUID

from src.taskboard.models import Comment, Project
from src.taskboard.policies.identity import Caller


def is_organizer(project: Project, user_id: UUID | None) -> bool:
    return user_id is not None and project.organizer_id == user_id


def can_view(caller: Caller, project: Project, *, is_member: bool) -> bool:
    if not caller.is_authenticated or not project.is_active:
        return False
    return is_organizer(project, caller.user_id) or is_member or caller.is_admin


def can_modify(caller: Caller, project: Project) -> bool:
    if not caller.is_authenticated or not project.is_active:
        return False
    return is_organizer(project, caller.user_id) or caller.is_admin


def can_assign(caller: Caller, project: Project) -> bool:
    return can_modify(caller, project)


def can_change_status(
    caller: Caller, project: Project, current_assignee_id: UUID | None
) -> bool:
    """Modify rights, or the caller currently holds the task.

    ``current_assignee_id`` must be read from the ledger at decision time;
    a reassignment revokes the previous holder's right immediately.
    """
    if can_modify(caller, project):
        return True
    if not caller.is_authenticated or not project.is_active:
        return False
    return current_assignee_id is not None and current_assignee_id == caller.user_id


def is_valid_assignee_candidate(project: Project, user_id: UUID, *, is_member: bool) -> bool:
    if not project.is_active:
        return False
    return is_organizer(project, user_id) or is_member


def can_manage_comment(
    caller: Caller, project: Project, comment: Comment, *, is_member: bool
) -> bool:
    """Edit/delete a comment: project view access plus authorship or admin."""
    if not can_view(caller, project, is_member=is_member):
        return False
    return comment.user_id == caller.user_id or caller.is_admin
