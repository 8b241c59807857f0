"""Delegate access API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from edition_access.domain.enums import Permission


class DelegateAccessCreate(BaseModel):
    """Request body for POST /delegates."""

    system_edition_id: str = Field(..., min_length=1)
    delegator_id: str = Field(..., min_length=1)
    delegate_id: str = Field(..., min_length=1)
    permissions: list[Permission] = Field(default_factory=list, max_length=64)
    expiration_date: datetime | None = None


class DelegateAccessResponse(BaseModel):
    """Delegate grant list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    system_edition_id: str
    delegator_id: str
    delegate_id: str
    permissions: list[Permission]
    is_active: bool
    expiration_date: datetime | None


class DelegateCheckResponse(BaseModel):
    """Response for GET /delegates/on-behalf/{user_id}/check/{permission}."""

    granted: bool
    reason: str | None = None
