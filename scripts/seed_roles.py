"""Seed one role row per catalog role, optionally granting super_admin to a user.

Usage:
    python -m scripts.seed_roles [super_admin_user_id]
Existing role rows are left untouched. Requires DATABASE_URL with an async driver.
"""

import asyncio
import sys

from edition_access.application.services import RoleGrantService, list_role_definitions
from edition_access.core.config import get_settings
from edition_access.domain.enums import RoleName
from edition_access.domain.exceptions import DuplicateAssignmentException
from edition_access.infrastructure.persistence import database
from edition_access.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)


async def main() -> None:
    """Seed catalog roles and the optional bootstrap super admin grant."""
    super_admin_user_id = sys.argv[1] if len(sys.argv) > 1 else None

    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            role_repo = RoleRepository(session)
            for definition in list_role_definitions():
                if await role_repo.get_by_name(definition.name):
                    print(f"Role exists: {definition.name.value}")
                    continue
                await role_repo.create_role(
                    name=definition.name,
                    access_scope=definition.scope.value,
                    description=definition.description,
                )
                print(f"Created role: {definition.name.value}")

            if super_admin_user_id:
                grant_svc = RoleGrantService(
                    role_repo, UserRoleRepository(session), UserRepository(session)
                )
                try:
                    grant = await grant_svc.assign_role(
                        super_admin_user_id, RoleName.SUPER_ADMIN
                    )
                    print(f"Granted super_admin to {super_admin_user_id} ({grant.id})")
                except DuplicateAssignmentException:
                    print(f"User {super_admin_user_id} already has super_admin")

    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
