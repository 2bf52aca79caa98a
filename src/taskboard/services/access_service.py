"""Access decisions backed by live store lookups.

Thin async wrappers that gather the facts the pure policy functions need.
Nothing here mutates state or caches answers: the assignee and membership are
re-read on every decision.
"""

from uuid import UUID

from src.taskboard.models import Project, Task
from src.taskboard.policies import Caller, access
from src.taskboard.repositories import AssignmentRepository
from src.taskboard.services.membership_service import MembershipService


class AccessService:
    """View/modify/assign/status decisions for one caller at a time."""

    def __init__(self, membership: MembershipService, assignment_repo: AssignmentRepository):
        self.membership = membership
        self.assignment_repo = assignment_repo

    async def can_view(self, caller: Caller, project: Project) -> bool:
        if not caller.is_authenticated or not project.is_active:
            return False
        if access.is_organizer(project, caller.user_id) or caller.is_admin:
            return True
        is_member = await self.membership.is_active_member(project, caller.user_id)
        return access.can_view(caller, project, is_member=is_member)

    def can_modify(self, caller: Caller, project: Project) -> bool:
        return access.can_modify(caller, project)

    def can_assign(self, caller: Caller, project: Project) -> bool:
        return access.can_assign(caller, project)

    async def current_assignee(self, task_id: int) -> UUID | None:
        record = await self.assignment_repo.current_for_task(task_id)
        return record.user_id if record else None

    async def can_change_status(self, caller: Caller, project: Project, task: Task) -> bool:
        if access.can_modify(caller, project):
            return True
        if not caller.is_authenticated or not project.is_active:
            return False
        assignee = await self.current_assignee(task.id)  # type: ignore[arg-type]
        return access.can_change_status(caller, project, assignee)

    async def is_valid_assignee_candidate(self, project: Project, user_id: UUID) -> bool:
        if not project.is_active:
            return False
        if access.is_organizer(project, user_id):
            return True
        is_member = await self.membership.is_active_member(project, user_id)
        return access.is_valid_assignee_candidate(project, user_id, is_member=is_member)
