"""Health check and service index routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from cms.config import Settings

API_VERSION = "1.0.0"

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str


class IndexResponse(BaseModel):
    """Service index listing the API entry points."""

    message: str
    version: str
    endpoints: dict[str, str]


@router.get("/", response_model=IndexResponse)
async def index() -> IndexResponse:
    """Describe the API."""
    return IndexResponse(
        message="Blog CMS API",
        version=API_VERSION,
        endpoints={
            "auth": "/api/v1/auth",
            "users": "/api/v1/users",
            "posts": "/api/v1/posts",
            "categories": "/api/v1/categories",
            "tags": "/api/v1/tags",
            "health": "/health",
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=API_VERSION,
        git_sha=settings.git_sha,
    )
