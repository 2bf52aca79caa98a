"""Repository for directory users (read-only)."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.taskboard.models import User
from src.taskboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Lookups against the directory mirror."""

    model = User

    async def find_by_identifier(self, identifier: str) -> User | None:
        """Find a user by user name or email, case-insensitively."""
        needle = identifier.strip().lower()
        if not needle:
            return None
        result = await self.session.execute(
            select(User).where(
                or_(
                    func.lower(User.user_name) == needle,
                    func.lower(User.email) == needle,
                )
            )
        )
        return result.scalars().first()

    async def get_many(self, ids: Iterable[UUID]) -> dict[UUID, User]:
        """Map user ids to users; unknown ids are omitted."""
        id_list = list(set(ids))
        if not id_list:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(id_list)))  # type: ignore[attr-defined]
        return {user.id: user for user in result.scalars().all()}
