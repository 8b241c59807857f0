"""Domain exceptions for the access engine.

Permission denials are values (PermissionResult), not exceptions. The
exceptions here cover failed route guards, missing records, invalid grant
operations, and invariant violations that must never default to grant or
deny. The HTTP layer maps them to responses in exception handlers.
"""

from typing import Any


class EditionAccessException(Exception):
    """Base exception for all edition access errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable error body (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EditionAccessException):
    """Raised when input validation fails (e.g. grant missing its context)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EditionAccessException):
    """Raised when the bearer principal is missing or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class PermissionDeniedException(EditionAccessException):
    """Raised by route guards when a permission check denies access."""

    def __init__(
        self,
        reason: str | None = None,
        permission: str | None = None,
    ) -> None:
        """Initialize with the denial reason and the permission checked.

        Args:
            reason: Denial reason from PermissionResult; defaults to a generic message.
            permission: Optional permission value (e.g. 'read:user').
        """
        details: dict[str, Any] = {}
        if permission:
            details["permission"] = permission
        super().__init__(reason or "Insufficient permissions", "PERMISSION_DENIED", details)


class ResourceNotFoundException(EditionAccessException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'role_grant').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateAssignmentException(EditionAccessException):
    """Raised when a role grant or delegate grant already exists (unique constraint)."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description.
            assignment_type: 'user_role' or 'delegate_access'.
            details_extra: Optional extra keys (e.g. user_id, role_id).
        """
        details = details_extra or {}
        details["assignment_type"] = assignment_type
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class InvalidRoleGrantException(EditionAccessException):
    """Raised when a role grant cannot become the active role (foreign, inactive, revoked, expired)."""

    def __init__(self, grant_id: str, reason: str) -> None:
        super().__init__(
            reason,
            "INVALID_ROLE_GRANT",
            {"grant_id": grant_id},
        )


class ActiveRoleRequiredException(EditionAccessException):
    """Raised when a request needs an active role and the user has none (or it was just cleared)."""

    def __init__(self, message: str, cleared: bool = False) -> None:
        super().__init__(message, "ACTIVE_ROLE_REQUIRED", {"cleared": cleared})


class SelfDelegationException(EditionAccessException):
    """Raised when a delegate grant names the same user as delegator and delegate."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            "Delegator and delegate cannot be the same person",
            "SELF_DELEGATION",
            {"user_id": user_id},
        )


class UnknownRoleException(EditionAccessException):
    """Raised when a role token is outside the catalog (programming error)."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"Unknown role: {role}",
            "UNKNOWN_ROLE",
            {"role": role},
        )


class UnknownAccessScopeException(EditionAccessException):
    """Raised when a role carries a scope the evaluator does not handle."""

    def __init__(self, scope: str) -> None:
        super().__init__(
            "Unknown access scope",
            "UNKNOWN_ACCESS_SCOPE",
            {"scope": scope},
        )


class SqlNotConfiguredException(EditionAccessException):
    """Raised when an operation requires the SQL database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
