"""ASGI entry point: `uvicorn edition_access.main:app`.

Settings are read inside create_app(), so tests set DATABASE_URL and
SECRET_KEY before the first import.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edition_access.api.v1.router import api_router
from edition_access.core.config import get_settings
from edition_access.core.exception_handlers import register_exception_handlers
from edition_access.core.lifespan import create_lifespan


def create_app() -> FastAPI:
    """Build the API app: lifespan, error handlers, CORS and the /api/v1 routes."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
