"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import os
from uuid import uuid4

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from httpx import ASGITransport, AsyncClient

from cms.config import AuthSettings
from cms.domain.model import User
from cms.domain.repository import UserRepository
from cms.domain.value import UserId, UserRole
from cms.interface.api.app import create_app
from cms.util.di import Component
from cms.util.jwt import create_token
from tests.di import build_test_container

# Postgres-backed tests run only when this is set
TEST_DATABASE_ENV = "TEST_DATABASE__URL"

requires_database = pytest.mark.skipif(
    not os.environ.get(TEST_DATABASE_ENV),
    reason=f"set {TEST_DATABASE_ENV} to run PostgreSQL integration tests",
)


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence against TEST_DATABASE__URL
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_reconcile(unit_env):
            tag_service = await unit_env.get(TagService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        if unmock and "persistence" in unmock:
            os.environ["DATABASE__URL"] = os.environ[TEST_DATABASE_ENV]

        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


class ApiEnv:
    """HTTP client bound to an app whose container the test can seed."""

    def __init__(self, client: AsyncClient, container: AsyncContainer) -> None:
        self.client = client
        self.container = container

    async def login_as(
        self, role: UserRole = UserRole.AUTHOR, name: str = "Test User"
    ) -> tuple[User, dict[str, str]]:
        """Store a user with the given role and return it with auth headers."""
        async with self.container() as request_container:
            user_repository = await request_container.get(UserRepository)
            settings = await request_container.get(AuthSettings)
            user = User(
                id=UserId(uuid4()),
                email=f"{role.value}-{uuid4().hex[:8]}@example.com",
                name=name,
                password_hash="not-a-real-hash",
                role=role,
            )
            await user_repository.save(user)

        token = create_token(str(user.id), user.email, user.role.value, settings)
        return user, {"Authorization": f"Bearer {token}"}


def create_api_fixture():
    """Factory for E2E fixtures serving the app over an in-memory transport.

    Usage:
        api = create_api_fixture()

        @pytest.mark.asyncio
        async def test_create_post(api):
            _, headers = await api.login_as(UserRole.AUTHOR)
            response = await api.client.post("/api/v1/posts", json=..., headers=headers)
    """

    @pytest_asyncio.fixture
    async def _api_environment():
        container = build_test_container()
        app = create_app(container)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield ApiEnv(client, container)

        await container.close()

    return _api_environment
