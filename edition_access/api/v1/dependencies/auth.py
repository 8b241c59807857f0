"""Bearer principal dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from edition_access.application.dtos.user import UserResult
from edition_access.domain.exceptions import AuthenticationException
from edition_access.infrastructure.persistence.repositories import UserRepository
from edition_access.infrastructure.security.jwt import verify_token

from . import db as db_deps

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the user id (sub) from the bearer JWT; raise 401 if missing or invalid."""
    if not credentials:
        raise AuthenticationException("Authentication required")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from None
    return str(payload["sub"])


async def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
) -> UserResult:
    """Return the authenticated user; raise 401 if unknown or deactivated."""
    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise AuthenticationException("User not found or inactive")
    return user
