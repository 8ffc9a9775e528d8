"""Unit tests for BulkPostActionUseCase."""

import pytest

from cms.application.usecase.post import BulkPostActionRequest, BulkPostActionUseCase
from cms.domain.error import ValidationError
from cms.domain.repository import PostRepository, UserRepository
from cms.domain.value import PostStatus
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestBulkPostActionUseCase:
    """Tests for admin bulk actions."""

    @pytest.mark.asyncio
    async def test_archive_reports_affected_count(self, unit_env):
        use_case = await unit_env.get(BulkPostActionUseCase)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        first = await make_post(post_repo, author, "First")
        second = await make_post(post_repo, author, "Second")

        response = await use_case.execute(
            BulkPostActionRequest(action="archive", post_ids=[first.id, second.id])
        )

        assert response.affected == 2
        assert response.message == "2 posts archived successfully"
        assert (await post_repo.find_by_id(first.id)).status == PostStatus.ARCHIVED

    @pytest.mark.asyncio
    async def test_unknown_action_is_a_validation_error(self, unit_env):
        use_case = await unit_env.get(BulkPostActionUseCase)

        with pytest.raises(ValidationError, match="Invalid action"):
            await use_case.execute(BulkPostActionRequest(action="explode", post_ids=[]))
