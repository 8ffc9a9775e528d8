"""End-to-end tests for the category and tag routes."""

import pytest

from cms.domain.value import UserRole
from tests.harness import create_api_fixture

# E2E test fixture
api = create_api_fixture()

CATEGORIES = "/api/v1/categories"
TAGS = "/api/v1/tags"


async def _post_with(api, headers, title, **fields):
    response = await api.client.post(
        "/api/v1/posts",
        json={"title": title, "content": "Body", "status": "published", **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCategories:
    """Category CRUD, deletion guard and reassignment."""

    @pytest.mark.asyncio
    async def test_same_name_gets_suffixed_slug(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)

        first = await api.client.post(CATEGORIES, json={"name": "News"}, headers=headers)
        second = await api.client.post(CATEGORIES, json={"name": "News!"}, headers=headers)

        assert first.status_code == 201
        assert first.json()["slug"] == "news"
        assert second.json()["slug"] == "news-1"

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)

        response = await api.client.post(CATEGORIES, json={"name": "   "}, headers=headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_blocked_then_reassign(self, api):
        _, author_headers = await api.login_as(UserRole.AUTHOR)
        _, admin_headers = await api.login_as(UserRole.ADMIN)
        old = (
            await api.client.post(CATEGORIES, json={"name": "Old"}, headers=author_headers)
        ).json()
        new = (
            await api.client.post(CATEGORIES, json={"name": "New"}, headers=author_headers)
        ).json()
        await _post_with(api, author_headers, "First", category_id=old["id"])
        await _post_with(api, author_headers, "Second", category_id=old["id"])

        blocked = await api.client.delete(f"{CATEGORIES}/{old['id']}", headers=admin_headers)
        assert blocked.status_code == 400
        assert blocked.json()["detail"].startswith(
            "Cannot delete category with existing posts."
        )

        reassigned = await api.client.post(
            f"{CATEGORIES}/{old['id']}/reassign",
            json={"new_category_id": new["id"]},
            headers=admin_headers,
        )
        assert reassigned.status_code == 200
        assert reassigned.json() == {"message": "2 posts reassigned to New", "affected": 2}

        deleted = await api.client.delete(f"{CATEGORIES}/{old['id']}", headers=admin_headers)
        assert deleted.status_code == 200

        listing = await api.client.get(CATEGORIES, params={"include_count": "true"})
        assert [(c["name"], c["post_count"]) for c in listing.json()["categories"]] == [
            ("New", 2)
        ]

    @pytest.mark.asyncio
    async def test_category_page(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        category = (
            await api.client.post(CATEGORIES, json={"name": "Tech"}, headers=headers)
        ).json()
        await _post_with(api, headers, "In Tech", category_id=category["id"])

        response = await api.client.get(f"{CATEGORIES}/tech")
        missing = await api.client.get(f"{CATEGORIES}/nope")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()["posts"]] == ["In Tech"]
        assert missing.status_code == 404


class TestTags:
    """Tag CRUD, popularity, removal and merge."""

    @pytest.mark.asyncio
    async def test_create_conflict(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)

        created = await api.client.post(TAGS, json={"name": "Python"}, headers=headers)
        duplicate = await api.client.post(TAGS, json={"name": "python"}, headers=headers)

        assert created.status_code == 201
        assert duplicate.status_code == 409

    @pytest.mark.asyncio
    async def test_popular_orders_by_published_posts(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        await api.client.post(TAGS, json={"name": "Unused"}, headers=headers)
        await _post_with(api, headers, "A", tags=["python", "web"])
        await _post_with(api, headers, "B", tags=["python"])

        response = await api.client.get(f"{TAGS}/popular")

        assert response.status_code == 200
        assert [(t["slug"], t["post_count"]) for t in response.json()["tags"]] == [
            ("python", 2),
            ("web", 1),
        ]

    @pytest.mark.asyncio
    async def test_delete_guard_and_remove_from_posts(self, api):
        _, author_headers = await api.login_as(UserRole.AUTHOR)
        _, admin_headers = await api.login_as(UserRole.ADMIN)
        await _post_with(api, author_headers, "Tagged", tags=["temp"])
        tag = (await api.client.get(f"{TAGS}/temp")).json()["tag"]

        blocked = await api.client.delete(f"{TAGS}/{tag['id']}", headers=admin_headers)
        removed = await api.client.post(
            f"{TAGS}/{tag['id']}/remove-from-posts", headers=admin_headers
        )
        deleted = await api.client.delete(f"{TAGS}/{tag['id']}", headers=admin_headers)

        assert blocked.status_code == 400
        assert removed.json() == {"message": "Tag removed from 1 posts", "affected": 1}
        assert deleted.status_code == 200

    @pytest.mark.asyncio
    async def test_merge(self, api):
        _, author_headers = await api.login_as(UserRole.AUTHOR)
        _, admin_headers = await api.login_as(UserRole.ADMIN)
        await _post_with(api, author_headers, "One", tags=["js"])
        await _post_with(api, author_headers, "Two", tags=["js", "javascript"])
        source = (await api.client.get(f"{TAGS}/js")).json()["tag"]
        target = (await api.client.get(f"{TAGS}/javascript")).json()["tag"]

        self_merge = await api.client.post(
            f"{TAGS}/{source['id']}/merge",
            json={"target_tag_id": source["id"]},
            headers=admin_headers,
        )
        merged = await api.client.post(
            f"{TAGS}/{source['id']}/merge",
            json={"target_tag_id": target["id"]},
            headers=admin_headers,
        )

        assert self_merge.status_code == 400
        assert merged.status_code == 200
        assert merged.json()["merged_posts"] == 2
        assert merged.json()["target_tag"]["post_count"] == 2
        assert (await api.client.get(f"{TAGS}/js")).status_code == 404

    @pytest.mark.asyncio
    async def test_tag_mutations_require_auth(self, api):
        response = await api.client.post(TAGS, json={"name": "anon"})

        assert response.status_code == 401
