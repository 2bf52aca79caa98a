"""Caller identity as resolved from the external directory."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Caller:
    """Immutable identity of the caller for one request.

    Attributes:
        user_id: Directory user id, or None when no identity could be resolved
        is_admin: Whether the directory granted the admin role
    """

    user_id: UUID | None
    is_admin: bool = False

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls(user_id=None, is_admin=False)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
