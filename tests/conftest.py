"""Pytest configuration and fixtures for edition access.

Unit tests use the in-memory repositories below. HTTP tests use
edition_access.main.create_app() with the repository dependencies overridden,
so no database is needed. Integration tests build their own SQLite engine.
"""

import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-edition-access")

import pytest
from httpx import ASGITransport, AsyncClient

from edition_access.api.v1.dependencies import (
    get_channel_repo,
    get_company_repo,
    get_delegate_repo,
    get_role_grant_repo,
    get_role_repo,
    get_user_repo,
)
from edition_access.application.dtos import (
    ChannelResult,
    CompanyResult,
    RoleResult,
    UserResult,
)
from edition_access.application.services import (
    AccessContextService,
    ActiveRoleService,
    DelegateAccessService,
    PermissionEvaluator,
    ResourceFilterBuilder,
    RoleGrantService,
)
from edition_access.core.config import get_settings
from edition_access.domain.entities import DelegateAccessEntity, RoleGrantEntity
from edition_access.domain.enums import Permission, RoleName
from edition_access.domain.value_objects import AnyOf, ByField, ById, FilterSpec, NoFilter
from edition_access.infrastructure.persistence.database import get_db_transactional
from edition_access.infrastructure.security.jwt import create_access_token
from edition_access.shared.utils.datetime import utc_now

get_settings.cache_clear()


def _matches(obj: object, spec: FilterSpec) -> bool:
    if isinstance(spec, NoFilter):
        return True
    if isinstance(spec, ById):
        return spec.id is not None and obj.id == spec.id
    if isinstance(spec, ByField):
        return spec.value is not None and getattr(obj, spec.name) == spec.value
    if isinstance(spec, AnyOf):
        return any(_matches(obj, s) for s in spec.specs)
    raise TypeError(spec)


class FakeUserRepository:
    def __init__(self) -> None:
        self.users: dict[str, UserResult] = {}
        self.reads: list[str] = []
        self.pointer_writes: list[tuple[str, str | None]] = []

    async def get_by_id(self, user_id: str) -> UserResult | None:
        self.reads.append(user_id)
        return self.users.get(user_id)

    async def set_active_user_role(self, user_id: str, grant_id: str | None) -> None:
        self.pointer_writes.append((user_id, grant_id))
        user = self.users.get(user_id)
        if user is not None:
            self.users[user_id] = replace(user, active_user_role_id=grant_id)

    async def list_users(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        users = sorted(self.users.values(), key=lambda u: u.id)
        return [u for u in users if _matches(u, spec)][skip : skip + limit]


class FakeCompanyRepository:
    def __init__(self) -> None:
        self.companies: dict[str, CompanyResult] = {}
        self.reads: list[str] = []

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        self.reads.append(company_id)
        return self.companies.get(company_id)

    async def list_companies(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[CompanyResult]:
        companies = sorted(self.companies.values(), key=lambda c: c.id)
        return [c for c in companies if _matches(c, spec)][skip : skip + limit]


class FakeChannelRepository:
    def __init__(self) -> None:
        self.channels: dict[str, ChannelResult] = {}

    async def get_by_id(self, channel_id: str) -> ChannelResult | None:
        return self.channels.get(channel_id)


class FakeSession:
    """Counts commits and rollbacks requested by the request dependencies."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class FakeRoleRepository:
    def __init__(self) -> None:
        self.roles: dict[str, RoleResult] = {
            f"role-{name.value}": RoleResult(
                id=f"role-{name.value}", name=name, description=None, is_active=True
            )
            for name in RoleName
        }

    async def get_by_name(self, name: RoleName) -> RoleResult | None:
        return self.roles.get(f"role-{RoleName(name).value}")

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        return self.roles.get(role_id)


class FakeRoleGrantRepository:
    def __init__(self) -> None:
        self.grants: dict[str, RoleGrantEntity] = {}
        self.saved: list[str] = []

    async def get_by_id(self, grant_id: str) -> RoleGrantEntity | None:
        return self.grants.get(grant_id)

    async def list_for_user(
        self,
        user_id: str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
        active_only: bool = False,
    ) -> list[RoleGrantEntity]:
        grants = [g for g in self.grants.values() if g.user_id == user_id]
        if system_edition_id is not None:
            grants = [g for g in grants if g.system_edition_id == system_edition_id]
        if company_id is not None:
            grants = [g for g in grants if g.company_id == company_id]
        if channel_id is not None:
            grants = [g for g in grants if g.channel_id == channel_id]
        if active_only:
            grants = [g for g in grants if g.is_active and g.revoked_at is None]
        return grants

    async def find_existing(
        self,
        user_id: str,
        role_id: str,
        system_edition_id: str | None,
        company_id: str | None,
        channel_id: str | None,
    ) -> RoleGrantEntity | None:
        for g in self.grants.values():
            if (g.user_id, g.role_id, g.system_edition_id, g.company_id, g.channel_id) == (
                user_id,
                role_id,
                system_edition_id,
                company_id,
                channel_id,
            ):
                return g
        return None

    async def create_grant(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        self.grants[grant.id] = grant
        return grant

    async def save(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        self.saved.append(grant.id)
        self.grants[grant.id] = grant
        return grant


class FakeDelegateAccessRepository:
    def __init__(self) -> None:
        self.grants: dict[str, DelegateAccessEntity] = {}
        self.deleted: set[str] = set()

    def _visible(self) -> list[DelegateAccessEntity]:
        return [g for g in self.grants.values() if g.id not in self.deleted]

    async def find_active_grant(
        self, delegate_id: str, delegator_id: str
    ) -> DelegateAccessEntity | None:
        for g in self._visible():
            if g.delegate_id == delegate_id and g.delegator_id == delegator_id and g.is_active:
                return g
        return None

    async def get_by_id(self, grant_id: str) -> DelegateAccessEntity | None:
        if grant_id in self.deleted:
            return None
        return self.grants.get(grant_id)

    async def exists(
        self, system_edition_id: str, delegator_id: str, delegate_id: str
    ) -> bool:
        return any(
            (g.system_edition_id, g.delegator_id, g.delegate_id)
            == (system_edition_id, delegator_id, delegate_id)
            for g in self._visible()
        )

    async def create_grant(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        self.grants[grant.id] = grant
        return grant

    async def save(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        self.grants[grant.id] = grant
        return grant

    async def soft_delete(self, grant_id: str) -> bool:
        if grant_id not in self.grants or grant_id in self.deleted:
            return False
        self.deleted.add(grant_id)
        self.grants[grant_id].is_active = False
        return True

    async def list_grants(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[DelegateAccessEntity]:
        grants = sorted(self._visible(), key=lambda g: g.id)
        return [g for g in grants if _matches(g, spec)][skip : skip + limit]


@dataclass
class AccessStore:
    """In-memory stand-in for the database, shared by services and the app."""

    users: FakeUserRepository = field(default_factory=FakeUserRepository)
    companies: FakeCompanyRepository = field(default_factory=FakeCompanyRepository)
    roles: FakeRoleRepository = field(default_factory=FakeRoleRepository)
    grants: FakeRoleGrantRepository = field(default_factory=FakeRoleGrantRepository)
    delegates: FakeDelegateAccessRepository = field(
        default_factory=FakeDelegateAccessRepository
    )
    channels: FakeChannelRepository = field(default_factory=FakeChannelRepository)
    session: FakeSession = field(default_factory=FakeSession)

    def add_user(
        self,
        user_id: str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        active_user_role_id: str | None = None,
        is_active: bool = True,
    ) -> UserResult:
        user = UserResult(
            id=user_id,
            email=f"{user_id}@example.com",
            system_edition_id=system_edition_id,
            company_id=company_id,
            active_user_role_id=active_user_role_id,
            is_active=is_active,
        )
        self.users.users[user_id] = user
        return user

    def add_company(self, company_id: str, system_edition_id: str) -> CompanyResult:
        company = CompanyResult(
            id=company_id, name=f"Company {company_id}", system_edition_id=system_edition_id
        )
        self.companies.companies[company_id] = company
        return company

    def add_channel(self, channel_id: str, system_edition_id: str) -> ChannelResult:
        channel = ChannelResult(
            id=channel_id, name=f"Channel {channel_id}", system_edition_id=system_edition_id
        )
        self.channels.channels[channel_id] = channel
        return channel

    def add_grant(
        self,
        grant_id: str,
        user_id: str,
        role_name: RoleName,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        is_active: bool = True,
        expires_at: datetime | None = None,
        revoked_at: datetime | None = None,
        activate: bool = False,
    ) -> RoleGrantEntity:
        grant = RoleGrantEntity(
            id=grant_id,
            user_id=user_id,
            role_id=f"role-{role_name.value}",
            role_name=role_name,
            granted_at=utc_now() - timedelta(days=1),
            system_edition_id=system_edition_id,
            company_id=company_id,
            is_active=is_active,
            expires_at=expires_at,
            revoked_at=revoked_at,
        )
        self.grants.grants[grant_id] = grant
        if activate:
            user = self.users.users[user_id]
            self.users.users[user_id] = replace(user, active_user_role_id=grant_id)
        return grant

    def add_delegate(
        self,
        grant_id: str,
        delegator_id: str,
        delegate_id: str,
        permissions: set[Permission],
        system_edition_id: str = "ed-1",
        is_active: bool = True,
        expiration_date: datetime | None = None,
    ) -> DelegateAccessEntity:
        grant = DelegateAccessEntity(
            id=grant_id,
            system_edition_id=system_edition_id,
            delegator_id=delegator_id,
            delegate_id=delegate_id,
            permissions=frozenset(permissions),
            is_active=is_active,
            expiration_date=expiration_date,
        )
        self.delegates.grants[grant_id] = grant
        return grant


@pytest.fixture
def store() -> AccessStore:
    return AccessStore()


@pytest.fixture
def evaluator(store: AccessStore) -> PermissionEvaluator:
    return PermissionEvaluator(store.users, store.companies, store.delegates)


@pytest.fixture
def active_role_svc(store: AccessStore) -> ActiveRoleService:
    return ActiveRoleService(store.users, store.grants)


@pytest.fixture
def filter_builder(store: AccessStore) -> ResourceFilterBuilder:
    return ResourceFilterBuilder(store.users)


@pytest.fixture
def role_grant_svc(store: AccessStore) -> RoleGrantService:
    return RoleGrantService(store.roles, store.grants, store.users)


@pytest.fixture
def access_context_svc(store: AccessStore) -> AccessContextService:
    return AccessContextService(store.companies, store.channels)


@pytest.fixture
def delegate_svc(store: AccessStore) -> DelegateAccessService:
    return DelegateAccessService(store.delegates, store.users)


@pytest.fixture
async def client(store: AccessStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by the in-memory store."""
    from edition_access.main import create_app

    app = create_app()
    app.dependency_overrides[get_user_repo] = lambda: store.users
    app.dependency_overrides[get_company_repo] = lambda: store.companies
    app.dependency_overrides[get_role_repo] = lambda: store.roles
    app.dependency_overrides[get_role_grant_repo] = lambda: store.grants
    app.dependency_overrides[get_delegate_repo] = lambda: store.delegates
    app.dependency_overrides[get_channel_repo] = lambda: store.channels
    app.dependency_overrides[get_db_transactional] = lambda: store.session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Return a function building bearer headers for a user id."""

    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
