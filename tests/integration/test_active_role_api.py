"""Active role validation through the HTTP app on a real SQLite session (aiosqlite)."""

import pytest

pytest.importorskip("aiosqlite")

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from edition_access.application.services import get_role_definition
from edition_access.application.services.active_role_service import (
    INVALID_ACTIVE_ROLE_MESSAGE,
    NO_ACTIVE_ROLE_MESSAGE,
)
from edition_access.domain.entities import RoleGrantEntity
from edition_access.domain.enums import RoleName
from edition_access.infrastructure.persistence import database
from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.models import Company, SystemEdition, User
from edition_access.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from edition_access.shared.utils.datetime import utc_now


@pytest.fixture
async def session_factory(monkeypatch):
    """App sessions on an in-memory schema where u1's active role points at revoked grant g1."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add(SystemEdition(id="E1", name="Edition One"))
        await session.flush()
        session.add(Company(id="C1", name="Acme", system_edition_id="E1"))
        await session.flush()
        session.add(
            User(id="u1", email="u1@example.com", system_edition_id="E1", company_id="C1")
        )
        await session.flush()
        role = await RoleRepository(session).create_role(
            RoleName.USER, get_role_definition(RoleName.USER).scope.value
        )
        now = utc_now()
        await UserRoleRepository(session).create_grant(
            RoleGrantEntity(
                id="g1",
                user_id="u1",
                role_id=role.id,
                role_name=RoleName.USER,
                granted_at=now,
                system_edition_id="E1",
                is_active=False,
                revoked_at=now,
            )
        )
        await UserRepository(session).set_active_user_role("u1", "g1")
        await session.commit()
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "AsyncSessionLocal", factory)
    yield factory
    await engine.dispose()


async def test_cleared_pointer_survives_the_failed_request(
    session_factory, auth_headers
) -> None:
    from edition_access.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        first = await client.get("/api/v1/users", headers=auth_headers("u1"))
        second = await client.get("/api/v1/users", headers=auth_headers("u1"))

    assert first.status_code == 400
    assert first.json()["message"] == INVALID_ACTIVE_ROLE_MESSAGE
    assert first.json()["details"] == {"cleared": True}
    assert second.status_code == 400
    assert second.json()["message"] == NO_ACTIVE_ROLE_MESSAGE
    assert second.json()["details"] == {"cleared": False}

    async with session_factory() as session:
        user = await UserRepository(session).get_by_id("u1")
    assert user.active_user_role_id is None
