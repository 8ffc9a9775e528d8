"""Unit tests for ListTagsUseCase."""

import pytest

from cms.application.usecase.tag import ListTagsRequest, ListTagsUseCase
from cms.domain.repository import PostRepository, TagRepository, UserRepository
from cms.domain.service import TagService
from cms.domain.value import PostStatus
from tests.conftest import make_post, make_tag, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListTagsUseCase:
    """Tests for listing tags."""

    @pytest.mark.asyncio
    async def test_search_with_counts_and_posts(self, unit_env):
        use_case = await unit_env.get(ListTagsUseCase)
        tag_service = await unit_env.get(TagService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        live = await make_post(post_repo, author, "Live")
        draft = await make_post(post_repo, author, "Draft", status=PostStatus.DRAFT)
        await tag_service.reconcile_tags(live.id, ["Python", "Rust"])
        await tag_service.reconcile_tags(draft.id, ["Python"])

        response = await use_case.execute(
            ListTagsRequest(search="pyth", include_count=True, include_posts=True)
        )

        assert [t.name for t in response.tags] == ["Python"]
        assert response.tags[0].post_count == 1
        assert [p.title for p in response.tags[0].posts] == ["Live"]

    @pytest.mark.asyncio
    async def test_plain_listing_omits_counts(self, unit_env):
        use_case = await unit_env.get(ListTagsUseCase)
        tag_repo = await unit_env.get(TagRepository)
        await make_tag(tag_repo, "beta")
        await make_tag(tag_repo, "alpha")

        response = await use_case.execute(ListTagsRequest())

        assert [t.name for t in response.tags] == ["alpha", "beta"]
        assert response.tags[0].post_count is None
        assert response.tags[0].posts is None
