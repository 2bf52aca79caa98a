"""Repositories for tasks, the assignment ledger and comments."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.taskboard.models import Comment, Task, TaskAssignment
from src.taskboard.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for Task entity."""

    model = Task

    async def get_in_project(self, project_id: int, task_id: int) -> Task | None:
        """Get a task only if it belongs to the given project."""
        result = await self.session.execute(
            select(Task).where(Task.id == task_id, Task.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def list_for_project(
        self,
        project_id: int,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Task], str | None, bool]:
        """List a project's tasks, newest first, with cursor pagination."""
        query = select(Task).where(Task.project_id == project_id)
        return await self.paginate(query, cursor, limit, Task.id)

    async def list_by_ids(
        self,
        task_ids: Iterable[int],
        project_id: int | None = None,
        status: str | None = None,
    ) -> list[Task]:
        """Tasks among ``task_ids``, optionally filtered, ordered by end date."""
        id_list = list(task_ids)
        if not id_list:
            return []
        query = select(Task).where(Task.id.in_(id_list))  # type: ignore[union-attr]
        if project_id is not None:
            query = query.where(Task.project_id == project_id)
        if status is not None:
            query = query.where(Task.status == status)
        result = await self.session.execute(query.order_by(Task.end_date, Task.id))
        return list(result.scalars().all())

    async def list_ids_for_projects(self, project_ids: Iterable[int]) -> list[int]:
        id_list = list(project_ids)
        if not id_list:
            return []
        result = await self.session.execute(
            select(Task.id).where(Task.project_id.in_(id_list))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class AssignmentRepository(BaseRepository[TaskAssignment]):
    """Append-only assignment ledger.

    Ordering is total over (assigned_at, id): the latest timestamp wins,
    ties go to the highest id.
    """

    model = TaskAssignment

    @staticmethod
    def _newest_first():  # type: ignore[no-untyped-def]
        return (TaskAssignment.assigned_at.desc(), TaskAssignment.id.desc())  # type: ignore[attr-defined,union-attr]

    async def current_for_task(self, task_id: int) -> TaskAssignment | None:
        """Latest assignment record for a task, or None if never assigned."""
        result = await self.session.execute(
            select(TaskAssignment)
            .where(TaskAssignment.task_id == task_id)
            .order_by(*self._newest_first())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def current_for_tasks(self, task_ids: Iterable[int]) -> dict[int, TaskAssignment]:
        """Latest assignment record per task for a batch of tasks."""
        id_list = list(task_ids)
        if not id_list:
            return {}
        result = await self.session.execute(
            select(TaskAssignment)
            .where(TaskAssignment.task_id.in_(id_list))  # type: ignore[attr-defined]
            .order_by(*self._newest_first())
        )
        current: dict[int, TaskAssignment] = {}
        for record in result.scalars().all():
            current.setdefault(record.task_id, record)
        return current

    async def history(self, task_id: int) -> list[TaskAssignment]:
        """Full ledger for a task, newest first."""
        result = await self.session.execute(
            select(TaskAssignment)
            .where(TaskAssignment.task_id == task_id)
            .order_by(*self._newest_first())
        )
        return list(result.scalars().all())

    def append(self, task_id: int, user_id: UUID, assigned_by_id: UUID) -> TaskAssignment:
        """Append a new record (add to session, no commit)."""
        record = TaskAssignment(task_id=task_id, user_id=user_id, assigned_by_id=assigned_by_id)
        self.session.add(record)
        return record

    async def delete_for_task(self, task_id: int) -> None:
        """Remove a task's ledger. Only valid as part of deleting the task."""
        await self.session.execute(
            delete(TaskAssignment).where(TaskAssignment.task_id == task_id)  # type: ignore[arg-type]
        )


class CommentRepository(BaseRepository[Comment]):
    """Repository for task comments."""

    model = Comment

    async def get_live(self, comment_id: int) -> Comment | None:
        """Get a comment unless it was soft-deleted."""
        result = await self.session.execute(
            select(Comment).where(
                Comment.id == comment_id,
                Comment.is_deleted == False,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def list_for_task(self, task_id: int) -> list[Comment]:
        """Live comments for a task, oldest first."""
        result = await self.session.execute(
            select(Comment)
            .where(
                Comment.task_id == task_id,
                Comment.is_deleted == False,  # noqa: E712
            )
            .order_by(Comment.created_at, Comment.id)
        )
        return list(result.scalars().all())

    async def delete_for_task(self, task_id: int) -> None:
        """Physically remove every comment of a task, deleted or not."""
        await self.session.execute(
            delete(Comment).where(Comment.task_id == task_id)  # type: ignore[arg-type]
        )
