"""User-roles API tests: active role selection, validation, switching, grant lifecycle."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from edition_access.application.services.active_role_service import NO_ACTIVE_ROLE_MESSAGE
from edition_access.domain.enums import RoleName
from edition_access.shared.utils.datetime import utc_now


@pytest.fixture
def org(store):
    """Edition E1 with company C1 (admin, alice) and C2 (bob)."""
    store.add_company("C1", "E1")
    store.add_company("C2", "E1")
    store.add_user("root")
    store.add_user("admin", system_edition_id="E1", company_id="C1")
    store.add_user("alice", system_edition_id="E1", company_id="C1")
    store.add_user("bob", system_edition_id="E1", company_id="C2")
    store.add_grant("g-root", "root", RoleName.SUPER_ADMIN, activate=True)
    store.add_grant(
        "g-admin", "admin", RoleName.COMPANY_ADMIN,
        system_edition_id="E1", company_id="C1", activate=True,
    )
    store.add_grant("g-alice-user", "alice", RoleName.USER, system_edition_id="E1")
    store.add_grant(
        "g-alice-admin", "alice", RoleName.COMPANY_ADMIN,
        system_edition_id="E1", company_id="C1",
    )
    store.add_grant("g-bob", "bob", RoleName.USER, system_edition_id="E1")
    return store


async def test_requires_authentication(client: AsyncClient, org) -> None:
    response = await client.get("/api/v1/user-roles/available")
    assert response.status_code == 401


async def test_inactive_user_rejected(client: AsyncClient, org, auth_headers) -> None:
    org.add_user("gone", is_active=False)
    response = await client.get("/api/v1/user-roles/available", headers=auth_headers("gone"))
    assert response.status_code == 401
    assert response.json()["message"] == "User not found or inactive"


async def test_list_available_roles(client: AsyncClient, org, auth_headers) -> None:
    org.add_grant(
        "g-alice-old", "alice", RoleName.EDITION_ADMIN, system_edition_id="E1",
        expires_at=utc_now() - timedelta(days=1),
    )
    response = await client.get("/api/v1/user-roles/available", headers=auth_headers("alice"))
    assert response.status_code == 200
    assert sorted(g["id"] for g in response.json()) == ["g-alice-admin", "g-alice-user"]


async def test_get_active_role_when_none(client: AsyncClient, org, auth_headers) -> None:
    response = await client.get("/api/v1/user-roles/active", headers=auth_headers("alice"))
    assert response.status_code == 200
    data = response.json()
    assert data["active_role"] is None
    assert data["has_active_role"] is False
    assert data["context"]["role_name"] is None


async def test_set_active_role(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/active",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-alice-admin"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["has_active_role"] is True
    assert data["active_role"]["id"] == "g-alice-admin"
    assert data["context"] == {
        "role_grant_id": "g-alice-admin",
        "role_id": "role-company_admin",
        "role_name": "company_admin",
        "system_edition_id": "E1",
        "company_id": "C1",
        "channel_id": None,
    }


async def test_set_active_role_foreign_grant(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/active",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-bob"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_ROLE_GRANT"
    assert body["message"] == "Role grant does not belong to this user"


async def test_set_active_role_body_validation(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/active", headers=auth_headers("alice"), json={}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_clear_active_role(client: AsyncClient, org, auth_headers) -> None:
    response = await client.delete("/api/v1/user-roles/active", headers=auth_headers("admin"))
    assert response.status_code == 204
    assert org.users.users["admin"].active_user_role_id is None


async def test_validate_active_role_clears_revoked(
    client: AsyncClient, org, auth_headers
) -> None:
    org.grants.grants["g-admin"].revoke("root")
    response = await client.get(
        "/api/v1/user-roles/active/validate", headers=auth_headers("admin")
    )
    assert response.status_code == 200
    assert response.json() == {
        "is_valid": False,
        "has_active_role": False,
        "message": "Active role is invalid or expired",
    }


async def test_switch_role(client: AsyncClient, org, auth_headers) -> None:
    await client.post(
        "/api/v1/user-roles/active",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-alice-user"},
    )
    response = await client.post(
        "/api/v1/user-roles/switch",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-alice-admin"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["previous_role"] == "user"
    assert data["new_role"] == "company_admin"
    assert data["context"]["company_id"] == "C1"


async def test_switch_to_unavailable_role(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/switch",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-bob"},
    )
    assert response.status_code == 404


async def test_company_admin_grants_user_role(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("admin"),
        json={"user_id": "alice", "role_name": "delegate", "company_id": "C1"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["role_name"] == "delegate"
    assert data["user_id"] == "alice"
    grant = org.grants.grants[data["id"]]
    assert grant.granted_by == "admin"


async def test_company_admin_cannot_grant_same_scope_role(
    client: AsyncClient, org, auth_headers
) -> None:
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("admin"),
        json={"user_id": "alice", "role_name": "company_admin", "company_id": "C1"},
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Role company_admin cannot grant role company_admin"


async def test_company_admin_cannot_grant_outside_company(
    client: AsyncClient, org, auth_headers
) -> None:
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("admin"),
        json={"user_id": "bob", "role_name": "user", "company_id": "C2"},
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Cannot access resources outside assigned company"


async def test_company_admin_cannot_grant_in_foreign_channel(
    client: AsyncClient, org, auth_headers
) -> None:
    org.add_channel("CH1", "E1")
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("admin"),
        json={
            "user_id": "alice",
            "role_name": "delegate",
            "company_id": "C1",
            "channel_id": "CH1",
        },
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Cannot grant roles in channel CH1"


async def test_edition_admin_grants_in_channels_of_own_edition(
    client: AsyncClient, org, auth_headers
) -> None:
    org.add_channel("CH1", "E1")
    org.add_channel("CH2", "E2")
    org.add_user("ed", system_edition_id="E1")
    org.add_grant(
        "g-ed", "ed", RoleName.EDITION_ADMIN, system_edition_id="E1", activate=True
    )
    body = {
        "user_id": "alice",
        "role_name": "company_admin",
        "system_edition_id": "E1",
        "company_id": "C1",
    }

    granted = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("ed"),
        json={**body, "channel_id": "CH1"},
    )
    assert granted.status_code == 201
    assert granted.json()["channel_id"] == "CH1"

    denied = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("ed"),
        json={**body, "channel_id": "CH2"},
    )
    assert denied.status_code == 403
    assert denied.json()["message"] == "Cannot grant roles in channel CH2"


async def test_grant_duplicate_conflict(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("root"),
        json={"user_id": "alice", "role_name": "user", "system_edition_id": "E1"},
    )
    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_ASSIGNMENT"


async def test_scoped_grant_without_context(client: AsyncClient, org, auth_headers) -> None:
    response = await client.post(
        "/api/v1/user-roles/grants",
        headers=auth_headers("root"),
        json={"user_id": "bob", "role_name": "edition_admin"},
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "system_edition_id"}


async def test_revoke_then_holder_loses_active_role(
    client: AsyncClient, org, auth_headers
) -> None:
    await client.post(
        "/api/v1/user-roles/active",
        headers=auth_headers("alice"),
        json={"user_role_id": "g-alice-user"},
    )
    response = await client.delete(
        "/api/v1/user-roles/grants/g-alice-user", headers=auth_headers("admin")
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert response.json()["revoked_at"] is not None

    listing = await client.get("/api/v1/users", headers=auth_headers("alice"))
    assert listing.status_code == 400
    assert listing.json()["error"] == "ACTIVE_ROLE_REQUIRED"
    assert listing.json()["details"] == {"cleared": True}
    assert org.session.commits == 1

    again = await client.get("/api/v1/users", headers=auth_headers("alice"))
    assert again.status_code == 400
    assert again.json()["message"] == NO_ACTIVE_ROLE_MESSAGE
    assert again.json()["details"] == {"cleared": False}
    assert org.session.commits == 1

    reactivated = await client.post(
        "/api/v1/user-roles/grants/g-alice-user/reactivate", headers=auth_headers("admin")
    )
    assert reactivated.status_code == 200
    assert reactivated.json()["is_active"] is True


async def test_revoke_grant_of_user_in_other_company(
    client: AsyncClient, org, auth_headers
) -> None:
    response = await client.delete(
        "/api/v1/user-roles/grants/g-bob", headers=auth_headers("admin")
    )
    assert response.status_code == 403
    assert org.grants.grants["g-bob"].is_active
