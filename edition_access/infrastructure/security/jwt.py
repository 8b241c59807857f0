"""HS256 bearer tokens.

``sub`` holds the user id. Which role the user acts as is deliberately absent:
it is read from the user's active role pointer on every request, so switching
roles never requires a new token.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from edition_access.core.config import get_settings


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Sign a token for subject; sub and exp always override extra_claims."""
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**(extra_claims or {}), "sub": subject, "exp": datetime.now(UTC) + ttl}
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode token and return its claims.

    Raises:
        ValueError: Bad signature, malformed, expired, or without sub/exp.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Invalid token: empty sub")
    return payload
