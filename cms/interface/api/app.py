"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cms.config import Settings
from cms.interface.api.middleware import rollback_on_error
from cms.interface.api.routes import auth, categories, health, posts, tags, users
from cms.util.di.container import create_container, setup_di
from cms.util.observability import instrument_fastapi

API_PREFIX = "/api/v1"


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it without cloud export.

    Args:
        container: DI container to use (defaults to the production container)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Blog CMS API",
        description="Content management API for blog posts, categories and tags",
        version=health.API_VERSION,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Added before setup_di so it runs inside the request container
    app_instance.middleware("http")(rollback_on_error)

    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router, prefix=API_PREFIX)
    app_instance.include_router(users.router, prefix=API_PREFIX)
    app_instance.include_router(posts.router, prefix=API_PREFIX)
    app_instance.include_router(categories.router, prefix=API_PREFIX)
    app_instance.include_router(tags.router, prefix=API_PREFIX)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
