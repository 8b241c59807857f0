"""API v1 router: mounts endpoint routers under their prefixes."""

from fastapi import APIRouter

from edition_access.api.v1.endpoints import (
    companies,
    delegates,
    health,
    roles,
    user_roles,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(user_roles.router, prefix="/user-roles", tags=["user-roles"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(delegates.router, prefix="/delegates", tags=["delegates"])
