"""Unit tests for MergeTagsUseCase."""

import pytest

from cms.application.usecase.tag import MergeTagsRequest, MergeTagsUseCase
from cms.domain.error import InvalidMergeError
from cms.domain.repository import PostRepository, TagRepository, UserRepository
from cms.domain.service import TagService
from tests.conftest import make_post, make_tag, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestMergeTagsUseCase:
    """Tests for merging tags."""

    @pytest.mark.asyncio
    async def test_merge_response(self, unit_env):
        use_case = await unit_env.get(MergeTagsUseCase)
        tag_service = await unit_env.get(TagService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        first = await make_post(post_repo, author, "First")
        second = await make_post(post_repo, author, "Second")
        (source_id,) = await tag_service.reconcile_tags(first.id, ["js"])
        await tag_service.reconcile_tags(second.id, ["js", "JavaScript"])
        target = await tag_service.get_by_slug("javascript")

        response = await use_case.execute(
            MergeTagsRequest(tag_id=source_id, target_tag_id=target.id)
        )

        assert response.merged_posts == 2
        assert response.message == 'Tag "js" merged into "JavaScript"'
        assert response.target_tag.post_count == 2

    @pytest.mark.asyncio
    async def test_self_merge_rejected(self, unit_env):
        use_case = await unit_env.get(MergeTagsUseCase)
        tag = await make_tag(await unit_env.get(TagRepository), "solo")

        with pytest.raises(InvalidMergeError):
            await use_case.execute(MergeTagsRequest(tag_id=tag.id, target_tag_id=tag.id))
