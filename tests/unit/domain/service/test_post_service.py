"""Unit tests for PostService."""

from datetime import datetime
from uuid import uuid4

import pytest

from cms.domain.error import (
    ConcurrencyConflictError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from cms.domain.repository import PostRepository, PostSortOrder, UserRepository
from cms.domain.service import PostService
from cms.domain.value import BulkAction, PostId, PostStatus, UserRole
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_draft_post(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository), name="Jane")

        post = await post_service.create_post(author, "Hello World", "Body")

        assert post.slug.root == "hello-world"
        assert post.status == PostStatus.DRAFT
        assert post.published_at is None
        assert post.author_id == author.id
        assert post.author_name == "Jane"

    @pytest.mark.asyncio
    async def test_create_published_post_sets_published_at(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))

        post = await post_service.create_post(
            author, "Live", "Body", status=PostStatus.PUBLISHED
        )

        assert post.published_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_titles_get_suffixes(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))

        first = await post_service.create_post(author, "Same Title", "Body")
        second = await post_service.create_post(author, "Same Title", "Body")
        third = await post_service.create_post(author, "Same Title", "Body")

        assert [p.slug.root for p in (first, second, third)] == [
            "same-title",
            "same-title-1",
            "same-title-2",
        ]

    @pytest.mark.asyncio
    async def test_title_without_slug_characters_uses_id_fallback(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))

        post = await post_service.create_post(author, "!!!", "Body")

        assert post.slug.root == f"post-{post.id.hex[:8]}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("title", "content"), [("", "Body"), ("Title", "  ")])
    async def test_missing_title_or_content_raises(self, unit_env, title, content):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))

        with pytest.raises(ValidationError, match="Title and content are required"):
            await post_service.create_post(author, title, content)


class TestUpdatePost:
    """Tests for update_post."""

    @pytest.mark.asyncio
    async def test_title_change_reslugs(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Old Title", "Body")

        updated = await post_service.update_post(post, title="New Title")

        assert updated.slug.root == "new-title"

    @pytest.mark.asyncio
    async def test_same_title_keeps_slug(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Title", "Body")

        updated = await post_service.update_post(post, title="Title", content="New")

        assert updated.slug.root == "title"
        assert updated.content == "New"

    @pytest.mark.asyncio
    async def test_retitle_to_own_slug_variant_is_not_a_collision(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "my title", "Body")

        updated = await post_service.update_post(post, title="My Title")

        assert updated.slug.root == "my-title"

    @pytest.mark.asyncio
    async def test_first_publish_sets_published_at_once(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Draft", "Body")

        published = await post_service.update_post(post, status=PostStatus.PUBLISHED)
        first_published_at = published.published_at
        archived = await post_service.update_post(published, status=PostStatus.ARCHIVED)
        republished = await post_service.update_post(
            archived, status=PostStatus.PUBLISHED
        )

        assert first_published_at is not None
        assert republished.published_at == first_published_at

    @pytest.mark.asyncio
    async def test_unknown_fields_are_ignored(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Title", "Body")

        updated = await post_service.update_post(post, author_name="Mallory")

        assert updated.author_name == post.author_name

    @pytest.mark.asyncio
    async def test_blank_title_raises(self, unit_env):
        post_service = await unit_env.get(PostService)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Title", "Body")

        with pytest.raises(ValidationError):
            await post_service.update_post(post, title="   ")

    @pytest.mark.asyncio
    async def test_concurrent_slug_clash_on_rename_is_retried_once(self, unit_env):
        post_service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Old Title", "Body")

        calls = []
        original_save = repo.save

        async def racing_save(saved_post):
            calls.append(saved_post.slug.root)
            if len(calls) == 1:
                # Another writer takes the slug between probe and update
                await original_save(
                    post.model_copy(
                        update={"id": PostId(uuid4()), "slug": saved_post.slug}
                    )
                )
                raise ConcurrencyConflictError("Conflicting post slug")
            return await original_save(saved_post)

        repo.save = racing_save

        updated = await post_service.update_post(post, title="New Title")

        assert calls == ["new-title", "new-title-1"]
        assert updated.slug.root == "new-title-1"

    @pytest.mark.asyncio
    async def test_clash_without_slug_change_is_not_retried(self, unit_env):
        post_service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        post = await post_service.create_post(author, "Title", "Body")

        calls = []

        async def always_conflict(saved_post):
            calls.append(saved_post.slug.root)
            raise ConcurrencyConflictError("Conflicting post slug")

        repo.save = always_conflict

        with pytest.raises(ConcurrencyConflictError):
            await post_service.update_post(post, content="New body")

        assert calls == ["title"]


class TestBulkAction:
    """Tests for bulk_action."""

    @pytest.mark.asyncio
    async def test_publish_keeps_existing_published_at(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        earlier = datetime(2024, 1, 1, 12, 0, 0)
        archived = await make_post(
            post_repo, author, "Archived", status=PostStatus.ARCHIVED, published_at=earlier
        )
        draft = await make_post(post_repo, author, "Draft", status=PostStatus.DRAFT)

        affected = await post_service.bulk_action(
            BulkAction.PUBLISH, [archived.id, draft.id]
        )

        assert affected == 2
        reloaded_archived = await post_repo.find_by_id(archived.id)
        reloaded_draft = await post_repo.find_by_id(draft.id)
        assert reloaded_archived.status == PostStatus.PUBLISHED
        assert reloaded_archived.published_at == earlier
        assert reloaded_draft.published_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("action", "expected"),
        [
            (BulkAction.UNPUBLISH, PostStatus.DRAFT),
            (BulkAction.ARCHIVE, PostStatus.ARCHIVED),
        ],
    )
    async def test_status_actions(self, unit_env, action, expected):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        post = await make_post(post_repo, author, "Live")

        affected = await post_service.bulk_action(action, [post.id])

        assert affected == 1
        assert (await post_repo.find_by_id(post.id)).status == expected

    @pytest.mark.asyncio
    async def test_delete_ignores_unknown_and_duplicate_ids(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        post = await make_post(post_repo, author, "Doomed")

        affected = await post_service.bulk_action(
            BulkAction.DELETE, [post.id, post.id, PostId(uuid4())]
        )

        assert affected == 1
        assert await post_repo.find_by_id(post.id) is None

    @pytest.mark.asyncio
    async def test_empty_id_list_raises(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(ValidationError):
            await post_service.bulk_action(BulkAction.PUBLISH, [])


class TestPermissions:
    """Tests for ensure_can_modify and can_view."""

    @pytest.mark.asyncio
    async def test_owner_and_admin_may_modify(self, unit_env):
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        owner = await make_user(user_repo)
        admin = await make_user(user_repo, role=UserRole.ADMIN)
        post = await make_post(await unit_env.get(PostRepository), owner)

        post_service.ensure_can_modify(post, owner)
        post_service.ensure_can_modify(post, admin)

    @pytest.mark.asyncio
    async def test_other_author_may_not_modify(self, unit_env):
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        owner = await make_user(user_repo)
        other = await make_user(user_repo)
        post = await make_post(await unit_env.get(PostRepository), owner)

        with pytest.raises(NotAuthorizedError, match="You can only delete your own posts"):
            post_service.ensure_can_modify(post, other, verb="delete")

    @pytest.mark.asyncio
    async def test_drafts_hidden_from_anonymous_and_other_authors(self, unit_env):
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        owner = await make_user(user_repo)
        other = await make_user(user_repo)
        admin = await make_user(user_repo, role=UserRole.SUPER_ADMIN)
        draft = await make_post(
            await unit_env.get(PostRepository), owner, status=PostStatus.DRAFT
        )

        assert not post_service.can_view(draft, None)
        assert not post_service.can_view(draft, other)
        assert post_service.can_view(draft, owner)
        assert post_service.can_view(draft, admin)


class TestListPosts:
    """Tests for list_posts and get_post_by_slug."""

    @pytest.mark.asyncio
    async def test_filters_and_counts(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        for i in range(3):
            await make_post(post_repo, author, f"Published {i}")
        await make_post(post_repo, author, "Hidden", status=PostStatus.DRAFT)

        posts, total = await post_service.list_posts(limit=2)
        everything, all_total = await post_service.list_posts(status=None, limit=10)

        assert len(posts) == 2
        assert total == 3
        assert all_total == 4
        assert len(everything) == 4

    @pytest.mark.asyncio
    async def test_published_sort_puts_newest_publication_first(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        await make_post(post_repo, author, "Older", published_at=datetime(2024, 1, 1))
        await make_post(post_repo, author, "Newer", published_at=datetime(2024, 6, 1))

        posts, _ = await post_service.list_posts(sort=PostSortOrder.PUBLISHED)

        assert [p.title for p in posts] == ["Newer", "Older"]

    @pytest.mark.asyncio
    async def test_malformed_tag_filter_returns_empty_page(self, unit_env):
        post_service = await unit_env.get(PostService)

        posts, total = await post_service.list_posts(tag_slug="Not A Slug")

        assert posts == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_search_matches_title(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await make_user(await unit_env.get(UserRepository))
        await make_post(post_repo, author, "Learning FastAPI")
        await make_post(post_repo, author, "Gardening")

        posts, total = await post_service.list_posts(search="fastapi")

        assert total == 1
        assert posts[0].title == "Learning FastAPI"

    @pytest.mark.asyncio
    async def test_get_post_by_unknown_slug_raises(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.get_post_by_slug("missing")
