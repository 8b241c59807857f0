"""Security: bearer JWT creation and verification."""

from edition_access.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "create_access_token",
    "verify_token",
]
