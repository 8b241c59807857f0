"""Unit tests for ResourceFilterBuilder (scope to FilterSpec, widening exceptions)."""

import pytest

from edition_access.application.services import (
    SCOPE_WIDENING_EXCEPTIONS,
    ResourceFilterBuilder,
)
from edition_access.domain.enums import AccessScope, ResourceType, RoleName
from edition_access.domain.exceptions import ResourceNotFoundException, ValidationException
from edition_access.domain.value_objects import AnyOf, ByField, ById, NoFilter


@pytest.fixture
def member(store):
    store.add_user("u1", system_edition_id="E1", company_id="C1")
    return store


@pytest.mark.parametrize("resource_type", list(ResourceType))
async def test_global_scope_has_no_filter(
    filter_builder: ResourceFilterBuilder, member, resource_type: ResourceType
) -> None:
    spec = await filter_builder.get_resource_filter(RoleName.SUPER_ADMIN, "u1", resource_type)
    assert spec == NoFilter()


@pytest.mark.parametrize(
    ("role", "resource_type", "expected"),
    [
        (RoleName.EDITION_ADMIN, ResourceType.USER, ByField("system_edition_id", "E1")),
        (RoleName.EDITION_ADMIN, ResourceType.COMPANY, ByField("system_edition_id", "E1")),
        (RoleName.EDITION_ADMIN, ResourceType.EDITION, ById("E1")),
        (RoleName.EDITION_ADMIN, ResourceType.TAG, ByField("system_edition_id", "E1")),
        (RoleName.EDITION_ADMIN, ResourceType.DELEGATE, ByField("system_edition_id", "E1")),
        (RoleName.COMPANY_ADMIN, ResourceType.USER, ByField("company_id", "C1")),
        (RoleName.COMPANY_ADMIN, ResourceType.COMPANY, ById("C1")),
        (RoleName.COMPANY_ADMIN, ResourceType.EDITION, ById("E1")),
        (RoleName.COMPANY_ADMIN, ResourceType.TAG, ByField("system_edition_id", "E1")),
        (RoleName.COMPANY_ADMIN, ResourceType.DELEGATE, ByField("system_edition_id", "E1")),
        (RoleName.USER, ResourceType.USER, ById("u1")),
        (RoleName.USER, ResourceType.COMPANY, ById("C1")),
        (RoleName.USER, ResourceType.EDITION, ById("E1")),
        (RoleName.USER, ResourceType.TAG, ByField("system_edition_id", "E1")),
        (
            RoleName.DELEGATE,
            ResourceType.DELEGATE,
            AnyOf((ByField("delegator_id", "u1"), ByField("delegate_id", "u1"))),
        ),
    ],
)
async def test_scoped_filters(
    filter_builder: ResourceFilterBuilder, member, role, resource_type, expected
) -> None:
    assert await filter_builder.get_resource_filter(role, "u1", resource_type) == expected


async def test_company_scope_delegate_filter_is_widened_to_edition(
    filter_builder: ResourceFilterBuilder, member
) -> None:
    assert (AccessScope.COMPANY, ResourceType.DELEGATE) in SCOPE_WIDENING_EXCEPTIONS
    assert (AccessScope.COMPANY, ResourceType.TAG) in SCOPE_WIDENING_EXCEPTIONS
    spec = await filter_builder.get_resource_filter(
        RoleName.COMPANY_ADMIN, "u1", ResourceType.DELEGATE
    )
    assert spec != ByField("company_id", "C1")


async def test_unassigned_membership_yields_none_values(
    filter_builder: ResourceFilterBuilder, store
) -> None:
    """A user without company gets a filter that matches nothing, not everything."""
    store.add_user("loner")
    spec = await filter_builder.get_resource_filter(
        RoleName.COMPANY_ADMIN, "loner", ResourceType.USER
    )
    assert spec == ByField("company_id", None)


async def test_accepts_resource_type_string(filter_builder: ResourceFilterBuilder, member) -> None:
    spec = await filter_builder.get_resource_filter(RoleName.USER, "u1", "user")
    assert spec == ById("u1")


async def test_unknown_resource_type(filter_builder: ResourceFilterBuilder, member) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await filter_builder.get_resource_filter(RoleName.USER, "u1", "invoice")
    assert exc_info.value.details == {"field": "resource_type"}


async def test_unresolvable_user_is_an_error(filter_builder: ResourceFilterBuilder) -> None:
    with pytest.raises(ResourceNotFoundException):
        await filter_builder.get_resource_filter(RoleName.SUPER_ADMIN, "ghost", ResourceType.USER)
