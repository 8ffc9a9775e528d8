"""Integration tests for tag reconciliation, merge and category reassignment."""

from uuid import uuid4

import pytest

from cms.domain.repository import PostRepository, UserRepository
from cms.domain.service import CategoryService, TagService
from cms.domain.value import CategoryId
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture, requires_database

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})

pytestmark = requires_database


def _unique(name: str) -> str:
    return f"{name} {uuid4().hex[:8]}"


class TestTaxonomyIntegration:
    """Multi-statement flows against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_reconcile_then_merge(self, integration_env):
        tag_service = await integration_env.get(TagService)
        post_repo = await integration_env.get(PostRepository)
        author = await make_user(await integration_env.get(UserRepository))
        first = await make_post(post_repo, author, _unique("First"))
        second = await make_post(post_repo, author, _unique("Second"))
        js, javascript = _unique("js"), _unique("javascript")

        (source_id,) = await tag_service.reconcile_tags(first.id, [js, f" {js} "])
        target_ids = await tag_service.reconcile_tags(second.id, [js, javascript])
        (target_id,) = target_ids - {source_id}

        _, target, merged = await tag_service.merge_tag(source_id, target_id)

        assert merged == 2
        assert await tag_service.tag_repository.find_by_id(source_id) is None
        assert sorted(await tag_service.tag_repository.find_post_ids(target.id)) == sorted(
            [first.id, second.id]
        )

    @pytest.mark.asyncio
    async def test_reassign_moves_every_post(self, integration_env):
        category_service = await integration_env.get(CategoryService)
        post_repo = await integration_env.get(PostRepository)
        author = await make_user(await integration_env.get(UserRepository))
        old = await category_service.create_category(_unique("Old"))
        new = await category_service.create_category(_unique("New"))
        for title in ("A", "B", "C"):
            post = await make_post(post_repo, author, _unique(title))
            await category_service.set_post_category(post.id, CategoryId(old.id))

        _, moved = await category_service.reassign_category(old.id, new.id)

        assert moved == 3
        assert await category_service.category_repository.count_posts(old.id) == 0
        assert await category_service.category_repository.count_posts(new.id) == 3
