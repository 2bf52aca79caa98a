"""Directory user factory."""

from polyfactory import Use

from src.taskboard.models import User
from tests.factories.base import BaseFactory, generate_uuid, utc_now


def _handle() -> str:
    return f"user_{generate_uuid().hex[-8:]}"


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid)
    user_name = Use(_handle)
    email = Use(lambda: f"{_handle()}@example.com")
    full_name = "Test User"
    created_at = Use(utc_now)
