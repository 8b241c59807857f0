"""DTOs for company use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompanyResult:
    """Company read-model. Every company belongs to one system edition."""

    id: str
    name: str
    system_edition_id: str


@dataclass(frozen=True)
class ChannelResult:
    """Channel read-model; channels also belong to one system edition."""

    id: str
    name: str
    system_edition_id: str
