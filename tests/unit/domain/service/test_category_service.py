"""Unit tests for CategoryService."""

from uuid import uuid4

import pytest

from cms.domain.error import (
    ConcurrencyConflictError,
    NotFoundError,
    ResourceInUseError,
    ValidationError,
)
from cms.domain.model import Category
from cms.domain.repository import (
    CategoryRepository,
    PostRepository,
    UserRepository,
)
from cms.domain.service import CategoryService
from cms.domain.value import CategoryId, PostStatus
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _post_in(env, category: Category, title: str, status=PostStatus.PUBLISHED):
    author = await make_user(await env.get(UserRepository))
    post = await make_post(await env.get(PostRepository), author, title, status=status)
    await (await env.get(CategoryRepository)).set_post_category(post.id, category.id)
    return post


class TestCreateCategory:
    """Tests for create_category."""

    @pytest.mark.asyncio
    async def test_create_trims_name_and_description(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        category = await category_service.create_category(
            "  Tech News  ", "  All about tech  "
        )

        assert category.name == "Tech News"
        assert category.slug.root == "tech-news"
        assert category.description == "All about tech"

    @pytest.mark.asyncio
    async def test_blank_description_becomes_none(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        category = await category_service.create_category("Tech", "   ")

        assert category.description is None

    @pytest.mark.asyncio
    async def test_slug_collision_gets_numeric_suffix(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        await category_service.create_category("News")
        await category_service.create_category("News!")

        third = await category_service.create_category("NEWS")

        assert third.slug.root == "news-2"

    @pytest.mark.asyncio
    async def test_blank_name_raises(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError, match="Category name is required"):
            await category_service.create_category("   ")

    @pytest.mark.asyncio
    async def test_name_without_slug_characters_raises(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError):
            await category_service.create_category("???")

    @pytest.mark.asyncio
    async def test_concurrent_slug_clash_is_retried_once(self, unit_env):
        """A unique-constraint clash after probing triggers one fresh resolve."""
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)

        calls = []
        original_save = repo.save

        async def racing_save(category):
            calls.append(category.slug.root)
            if len(calls) == 1:
                # Another writer takes the slug between probe and insert
                await original_save(
                    Category(id=CategoryId(uuid4()), name="News", slug=category.slug)
                )
                raise ConcurrencyConflictError("Conflicting category slug")
            return await original_save(category)

        repo.save = racing_save

        created = await category_service.create_category("News")

        assert calls == ["news", "news-1"]
        assert created.slug.root == "news-1"

    @pytest.mark.asyncio
    async def test_second_clash_propagates(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)

        async def always_conflict(category):
            raise ConcurrencyConflictError("Conflicting category slug")

        repo.save = always_conflict

        with pytest.raises(ConcurrencyConflictError):
            await category_service.create_category("News")


class TestUpdateCategory:
    """Tests for update_category."""

    @pytest.mark.asyncio
    async def test_rename_reslugs_excluding_itself(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Tech")

        updated = await category_service.update_category(category.id, name="TECH")

        assert updated.name == "TECH"
        assert updated.slug.root == "tech"

    @pytest.mark.asyncio
    async def test_rename_to_taken_slug_gets_suffix(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        await category_service.create_category("Science")
        category = await category_service.create_category("Tech")

        updated = await category_service.update_category(category.id, name="Science")

        assert updated.slug.root == "science-1"

    @pytest.mark.asyncio
    async def test_empty_name_raises(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Tech")

        with pytest.raises(ValidationError, match="Category name cannot be empty"):
            await category_service.update_category(category.id, name="  ")

    @pytest.mark.asyncio
    async def test_description_only_update_keeps_slug(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Tech", "old")

        updated = await category_service.update_category(
            category.id, description=" new "
        )

        assert updated.slug == category.slug
        assert updated.description == "new"

    @pytest.mark.asyncio
    async def test_clear_description(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Tech", "old")

        updated = await category_service.update_category(
            category.id, clear_description=True
        )

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_concurrent_slug_clash_on_rename_is_retried_once(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = await category_service.create_category("Tech")

        calls = []
        original_save = repo.save

        async def racing_save(saved):
            calls.append(saved.slug.root)
            if len(calls) == 1:
                await original_save(
                    Category(id=CategoryId(uuid4()), name="Science", slug=saved.slug)
                )
                raise ConcurrencyConflictError("Conflicting category slug")
            return await original_save(saved)

        repo.save = racing_save

        updated = await category_service.update_category(category.id, name="Science")

        assert calls == ["science", "science-1"]
        assert updated.slug.root == "science-1"

    @pytest.mark.asyncio
    async def test_description_update_clash_propagates(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = await category_service.create_category("Tech")

        async def always_conflict(saved):
            raise ConcurrencyConflictError("Conflicting category slug")

        repo.save = always_conflict

        with pytest.raises(ConcurrencyConflictError):
            await category_service.update_category(category.id, description="new")

    @pytest.mark.asyncio
    async def test_unknown_category_raises_not_found(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        with pytest.raises(NotFoundError):
            await category_service.update_category(CategoryId(uuid4()), name="X")


class TestDeleteCategory:
    """Tests for delete_category."""

    @pytest.mark.asyncio
    async def test_delete_with_posts_is_blocked(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = await category_service.create_category("Busy")
        await _post_in(unit_env, category, "Draft Post", status=PostStatus.DRAFT)

        with pytest.raises(ResourceInUseError) as exc_info:
            await category_service.delete_category(category.id)

        assert "Please reassign or delete posts first." in str(exc_info.value)
        assert await repo.find_by_id(category.id) is not None

    @pytest.mark.asyncio
    async def test_delete_empty_category(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = await category_service.create_category("Empty")

        await category_service.delete_category(category.id)

        assert await repo.find_by_id(category.id) is None


class TestReassignCategory:
    """Tests for reassign_category."""

    @pytest.mark.asyncio
    async def test_moves_every_post(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        old = await category_service.create_category("Old")
        new = await category_service.create_category("New")
        await _post_in(unit_env, old, "One")
        await _post_in(unit_env, old, "Two", status=PostStatus.DRAFT)
        await _post_in(unit_env, new, "Three")

        target, affected = await category_service.reassign_category(old.id, new.id)

        assert affected == 2
        assert target.id == new.id
        assert await repo.count_posts(old.id) == 0
        assert await repo.count_posts(new.id) == 3

    @pytest.mark.asyncio
    async def test_reassigned_posts_keep_a_single_category(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        old = await category_service.create_category("Old")
        new = await category_service.create_category("New")
        post = await _post_in(unit_env, old, "One")

        await category_service.reassign_category(old.id, new.id)

        reloaded = await (await unit_env.get(PostRepository)).find_by_id(post.id)
        assert reloaded.category.id == new.id

    @pytest.mark.asyncio
    async def test_same_category_raises(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Same")

        with pytest.raises(ValidationError):
            await category_service.reassign_category(category.id, category.id)

    @pytest.mark.asyncio
    async def test_missing_target_raises_not_found(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Old")

        with pytest.raises(NotFoundError):
            await category_service.reassign_category(category.id, CategoryId(uuid4()))

    @pytest.mark.asyncio
    async def test_published_counts(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        category = await category_service.create_category("Mixed")
        await _post_in(unit_env, category, "Live")
        await _post_in(unit_env, category, "Hidden", status=PostStatus.DRAFT)

        counts = await category_service.count_published_posts([category.id])

        assert counts == {category.id: 1}
