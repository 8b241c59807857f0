"""User and company API schemas."""

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """User list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    system_edition_id: str | None
    company_id: str | None
    is_active: bool


class CompanyResponse(BaseModel):
    """Company list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    system_edition_id: str
