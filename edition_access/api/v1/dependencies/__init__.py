"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, services, the bearer principal,
and route guards. Routes depend only on these, not on infrastructure directly.
"""

from edition_access.api.v1.dependencies.access import (
    CurrentAccess,
    get_current_access,
    require_delegate_access,
    require_permission,
)
from edition_access.api.v1.dependencies.auth import get_current_user, get_current_user_id
from edition_access.api.v1.dependencies.db import (
    get_channel_repo,
    get_company_repo,
    get_delegate_repo,
    get_role_grant_repo,
    get_role_repo,
    get_user_repo,
)
from edition_access.api.v1.dependencies.services import (
    get_access_context_service,
    get_active_role_service,
    get_delegate_access_service,
    get_permission_evaluator,
    get_resource_filter_builder,
    get_role_grant_service,
)

__all__ = [
    "CurrentAccess",
    "get_access_context_service",
    "get_active_role_service",
    "get_channel_repo",
    "get_company_repo",
    "get_current_access",
    "get_current_user",
    "get_current_user_id",
    "get_delegate_access_service",
    "get_delegate_repo",
    "get_permission_evaluator",
    "get_resource_filter_builder",
    "get_role_grant_repo",
    "get_role_grant_service",
    "get_role_repo",
    "get_user_repo",
    "require_delegate_access",
    "require_permission",
]
