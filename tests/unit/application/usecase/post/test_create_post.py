"""Unit tests for CreatePostUseCase."""

from uuid import uuid4

import pytest

from cms.application.usecase.post import CreatePostRequest, CreatePostUseCase
from cms.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from cms.domain.repository import CategoryRepository, PostRepository, UserRepository
from cms.domain.value import PostStatus, UserRole
from tests.conftest import make_category, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for the create post flow."""

    @pytest.mark.asyncio
    async def test_creates_post_with_category_and_tags(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        author = await make_user(await unit_env.get(UserRepository), name="Jane")
        category = await make_category(await unit_env.get(CategoryRepository), "Tech")

        response = await use_case.execute(
            CreatePostRequest(
                author_id=author.id,
                title="Hello FastAPI",
                content="Body",
                status=PostStatus.PUBLISHED,
                category_id=category.id,
                tags=["Python", "python", " Web "],
                meta_title="Hello",
            )
        )

        assert response.slug == "hello-fastapi"
        assert response.status == PostStatus.PUBLISHED
        assert response.published_at is not None
        assert response.author.name == "Jane"
        assert response.category.slug == "tech"
        assert sorted(t.slug for t in response.tags) == ["python", "web"]
        assert response.meta_title == "Hello"

    @pytest.mark.asyncio
    async def test_defaults_to_draft_without_tags(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        author = await make_user(await unit_env.get(UserRepository))

        response = await use_case.execute(
            CreatePostRequest(author_id=author.id, title="Draft", content="Body")
        )

        assert response.status == PostStatus.DRAFT
        assert response.category is None
        assert response.tags == []

    @pytest.mark.asyncio
    async def test_unknown_category_creates_nothing(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreatePostRequest(
                    author_id=author.id,
                    title="Orphan",
                    content="Body",
                    category_id=uuid4(),
                )
            )

        assert await post_repo.count(status=None) == 0

    @pytest.mark.asyncio
    async def test_reader_cannot_create_posts(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        reader = await make_user(await unit_env.get(UserRepository), role=UserRole.READER)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                CreatePostRequest(author_id=reader.id, title="Nope", content="Body")
            )

    @pytest.mark.asyncio
    async def test_missing_content_raises(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        author = await make_user(await unit_env.get(UserRepository))

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreatePostRequest(author_id=author.id, title="Empty", content="")
            )
