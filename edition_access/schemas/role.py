"""Role, role grant, and active role API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from edition_access.domain.enums import AccessScope, Permission, RoleName


class RoleDefinitionResponse(BaseModel):
    """Catalog entry for GET /roles."""

    model_config = ConfigDict(from_attributes=True)

    name: RoleName
    display_name: str
    scope: AccessScope
    permissions: list[Permission]
    description: str


class RoleGrantResponse(BaseModel):
    """A role grant (user_role row) as seen by its user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    role_id: str
    role_name: RoleName
    system_edition_id: str | None
    company_id: str | None
    channel_id: str | None
    is_active: bool
    granted_at: datetime
    expires_at: datetime | None
    revoked_at: datetime | None


class RoleContextResponse(BaseModel):
    """Context derived from the active role grant (all null when none is active)."""

    model_config = ConfigDict(from_attributes=True)

    role_grant_id: str | None = None
    role_id: str | None = None
    role_name: RoleName | None = None
    system_edition_id: str | None = None
    company_id: str | None = None
    channel_id: str | None = None


class SetActiveRoleRequest(BaseModel):
    """Request body for POST /user-roles/active and POST /user-roles/switch."""

    user_role_id: str = Field(..., min_length=1)


class ActiveRoleResponse(BaseModel):
    """Response for GET/POST /user-roles/active."""

    active_role: RoleGrantResponse | None
    context: RoleContextResponse
    has_active_role: bool


class ActiveRoleValidationResponse(BaseModel):
    """Response for GET /user-roles/active/validate."""

    is_valid: bool
    has_active_role: bool
    message: str


class RoleSwitchResponse(BaseModel):
    """Response for POST /user-roles/switch."""

    previous_role: RoleName | None
    new_role: RoleName
    context: RoleContextResponse


class RoleGrantCreate(BaseModel):
    """Request body for POST /user-roles/grants."""

    user_id: str = Field(..., min_length=1)
    role_name: RoleName
    system_edition_id: str | None = None
    company_id: str | None = None
    channel_id: str | None = None
    expires_at: datetime | None = None
