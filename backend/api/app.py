"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .dependencies import get_container, reset_container
from .errors import register_error_handlers
from .routes import health, users
from modules.auth.routes import router as auth_router
from modules.verification.routes import router as phone_router
from modules.profiles.routes import router as profiles_router
from modules.groups.routes import router as groups_router
from modules.admin.routes import router as admin_router, hooks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the service container at startup and closes it at shutdown.
    """
    # Startup
    settings = get_settings()
    app.state.container = get_container()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    reset_container()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Bible study groups, membership and user management API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_error_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(phone_router, prefix="/api/auth/phone", tags=["auth"])
    app.include_router(profiles_router, prefix="/api/profiles", tags=["profiles"])
    app.include_router(groups_router, prefix="/api/groups", tags=["groups"])
    app.include_router(admin_router, prefix="/api/admin/users", tags=["admin"])
    app.include_router(hooks_router, prefix="/api/hooks", tags=["hooks"])

    return app


# Application instance for uvicorn
app = create_app()
