"""Bearer token handling for the external identity directory.

Tokens are issued by the directory; this service only decodes them.
``create_access_token`` mirrors the directory's format for local tooling and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from src.taskboard.core.config import get_settings


def create_access_token(
    subject: str | UUID,
    roles: list[str] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create JWT access token carrying the subject and its role names."""
    settings = get_settings()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(subject),
        "roles": list(roles or []),
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT token. Returns None if invalid or expired."""
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload
    except JWTError:
        return None
