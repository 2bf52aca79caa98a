"""Unwrap service results at the HTTP boundary."""

from src.taskboard.core.exceptions import raise_for_failure
from src.taskboard.core.results import Failure, Result


def unwrap[T](result: Result[T]) -> T:
    """Return the success value or raise the matching HTTPException."""
    if isinstance(result, Failure):
        raise_for_failure(result)
    return result.value
