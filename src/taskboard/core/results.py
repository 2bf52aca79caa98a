"""Explicit operation results.

Every service operation returns either ``Ok`` carrying a value or a ``Failure``
naming exactly one ``ErrorKind``. Expected business-rule outcomes never raise;
exceptions are reserved for infrastructure faults such as an unavailable database.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every service operation."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying a value (``None`` for void operations)."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed result.

    Attributes:
        kind: The failure category the presentation layer maps to a response.
        code: The specific reason, e.g. ``already_member`` or ``is_organizer``.
        message: Human-readable detail. Only surfaced for validation and conflict kinds.
    """

    kind: ErrorKind
    code: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


type Result[T] = Ok[T] | Failure


def not_found(code: str = "not_found", message: str = "Not found") -> Failure:
    return Failure(ErrorKind.NOT_FOUND, code, message)


def forbidden(code: str = "forbidden", message: str = "Forbidden") -> Failure:
    return Failure(ErrorKind.FORBIDDEN, code, message)


def unauthenticated() -> Failure:
    return Failure(ErrorKind.UNAUTHENTICATED, "unauthenticated", "Not authenticated")


def validation_failed(code: str, message: str) -> Failure:
    return Failure(ErrorKind.VALIDATION_FAILED, code, message)


def conflict(code: str, message: str) -> Failure:
    return Failure(ErrorKind.CONFLICT, code, message)
