"""Caller resolution from the identity directory's bearer token."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import bind_caller_context
from src.taskboard.core.security import decode_token
from src.taskboard.policies import Caller


def caller_from_claims(payload: dict[str, Any] | None) -> Caller:
    """Build a Caller from decoded token claims; anything unusable is anonymous."""
    if payload is None or payload.get("type") != "access":
        return Caller.anonymous()
    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        return Caller.anonymous()

    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        roles = []
    return Caller(user_id=user_id, is_admin=get_settings().admin_role_name in roles)


async def get_caller(
    authorization: Annotated[str | None, Header()] = None,
) -> Caller:
    """Resolve the caller once per request.

    Never raises: a missing or invalid token yields an anonymous caller, and
    services answer it with an unauthenticated result.
    """
    caller = Caller.anonymous()
    if authorization and authorization.startswith("Bearer "):
        caller = caller_from_claims(decode_token(authorization[7:]))
    bind_caller_context(caller.user_id, caller.is_admin)
    return caller


CurrentCaller = Annotated[Caller, Depends(get_caller)]
