"""Integration tests for per-request transactions against PostgreSQL."""

import os
from uuid import uuid4

import pytest
import pytest_asyncio

from cms.domain.error import ValidationError
from cms.domain.repository import TagRepository, UserRepository
from cms.domain.service import PostService, TagService, slugify
from cms.domain.value import Slug
from cms.persistence.transaction import TransactionState
from tests.conftest import make_user
from tests.di import build_test_container
from tests.harness import TEST_DATABASE_ENV, requires_database

pytestmark = requires_database


@pytest_asyncio.fixture
async def app_container():
    """App-scoped container so each test can open several request scopes."""
    os.environ["DATABASE__URL"] = os.environ[TEST_DATABASE_ENV]
    container = build_test_container(unmock={"persistence"})
    yield container
    await container.close()


def _unique(name: str) -> str:
    return f"{name} {uuid4().hex[:8]}"


async def _create_tagged_post(container, title: str, tag: str):
    async with container() as request_container:
        post_service = await request_container.get(PostService)
        tag_service = await request_container.get(TagService)
        author = await make_user(await request_container.get(UserRepository))
        post = await post_service.create_post(author, title, "Body")
        await tag_service.reconcile_tags(post.id, [tag])
    return post


async def _reload(container, post_id):
    async with container() as request_container:
        post_service = await request_container.get(PostService)
        return await post_service.get_post_by_id(post_id)


class TestRequestTransaction:
    """Writes from a failed request scope are rolled back."""

    @pytest.mark.asyncio
    async def test_failed_reconcile_keeps_title_and_edges(self, app_container):
        title, tag, fresh = _unique("Original"), _unique("kept"), _unique("fresh")
        post = await _create_tagged_post(app_container, title, tag)

        with pytest.raises(ValidationError):
            async with app_container() as request_container:
                post_service = await request_container.get(PostService)
                tag_service = await request_container.get(TagService)
                await post_service.update_post(post, title=_unique("Renamed"))
                await tag_service.reconcile_tags(post.id, [fresh, "!!!"])

        current = await _reload(app_container, post.id)
        assert current.title == title
        assert current.slug == post.slug
        assert [t.slug.root for t in current.tags] == [slugify(tag)]
        async with app_container() as request_container:
            tag_repo = await request_container.get(TagRepository)
            assert await tag_repo.find_by_slug(Slug(slugify(fresh))) is None

    @pytest.mark.asyncio
    async def test_marked_failure_discards_writes(self, app_container):
        title = _unique("Original")
        post = await _create_tagged_post(app_container, title, _unique("kept"))

        async with app_container() as request_container:
            post_service = await request_container.get(PostService)
            await post_service.update_post(post, title=_unique("Renamed"))
            (await request_container.get(TransactionState)).mark_failed("HTTP 400")

        assert (await _reload(app_container, post.id)).title == title
