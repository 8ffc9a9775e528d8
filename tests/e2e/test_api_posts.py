"""End-to-end tests for the post routes."""

import pytest

from cms.domain.value import UserRole
from tests.harness import create_api_fixture

# E2E test fixture
api = create_api_fixture()

POSTS = "/api/v1/posts"


async def _create_post(api, headers, **fields):
    payload = {"title": "Hello World", "content": "Body", **fields}
    response = await api.client.post(POSTS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestPostLifecycle:
    """Create, read, update and delete a post over HTTP."""

    @pytest.mark.asyncio
    async def test_create_then_read_published_post(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR, name="Jane")

        created = await _create_post(
            api, headers, status="published", tags=["Python", "FastAPI"]
        )

        assert created["slug"] == "hello-world"
        assert created["author"]["name"] == "Jane"

        response = await api.client.get(f"{POSTS}/hello-world")
        assert response.status_code == 200
        assert sorted(t["slug"] for t in response.json()["tags"]) == [
            "fastapi",
            "python",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_titles_get_suffixed_slugs(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)

        first = await _create_post(api, headers)
        second = await _create_post(api, headers)
        third = await _create_post(api, headers)

        assert [first["slug"], second["slug"], third["slug"]] == [
            "hello-world",
            "hello-world-1",
            "hello-world-2",
        ]

    @pytest.mark.asyncio
    async def test_reader_cannot_create(self, api):
        _, headers = await api.login_as(UserRole.READER)

        response = await api.client.post(
            POSTS, json={"title": "T", "content": "C"}, headers=headers
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Author access required"

    @pytest.mark.asyncio
    async def test_anonymous_cannot_create(self, api):
        response = await api.client.post(POSTS, json={"title": "T", "content": "C"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_replaces_tags_and_category(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        category = await api.client.post(
            "/api/v1/categories", json={"name": "Tech"}, headers=headers
        )
        created = await _create_post(
            api, headers, tags=["old"], category_id=category.json()["id"]
        )

        response = await api.client.put(
            f"{POSTS}/{created['id']}",
            json={"title": "Renamed", "tags": ["new"], "category_id": None},
            headers=headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "renamed"
        assert [t["slug"] for t in data["tags"]] == ["new"]
        assert data["category"] is None

    @pytest.mark.asyncio
    async def test_other_author_cannot_update_or_delete(self, api):
        _, owner_headers = await api.login_as(UserRole.AUTHOR)
        _, other_headers = await api.login_as(UserRole.AUTHOR)
        created = await _create_post(api, owner_headers)

        update = await api.client.put(
            f"{POSTS}/{created['id']}", json={"title": "Mine"}, headers=other_headers
        )
        delete = await api.client.delete(
            f"{POSTS}/{created['id']}", headers=other_headers
        )

        assert update.status_code == 403
        assert delete.status_code == 403
        assert delete.json()["detail"] == "You can only delete your own posts"

    @pytest.mark.asyncio
    async def test_owner_deletes_post(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        created = await _create_post(api, headers, status="published")

        response = await api.client.delete(f"{POSTS}/{created['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"
        assert (await api.client.get(f"{POSTS}/hello-world")).status_code == 404


class TestFailedWritesRollBack:
    """A request that ends in an error response leaves no partial writes."""

    @pytest.mark.asyncio
    async def test_rejected_update_keeps_title_and_tags(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        created = await _create_post(api, headers, status="published", tags=["Python"])

        response = await api.client.put(
            f"{POSTS}/{created['id']}",
            json={"title": "Renamed", "tags": ["Fresh", "!!!"]},
            headers=headers,
        )

        assert response.status_code == 400
        current = await api.client.get(f"{POSTS}/hello-world")
        assert current.status_code == 200
        assert current.json()["title"] == "Hello World"
        assert [t["slug"] for t in current.json()["tags"]] == ["python"]
        assert (await api.client.get(f"{POSTS}/renamed")).status_code == 404
        tags = await api.client.get("/api/v1/tags")
        assert [t["slug"] for t in tags.json()["tags"]] == ["python"]

    @pytest.mark.asyncio
    async def test_rejected_create_stores_nothing(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)

        response = await api.client.post(
            POSTS,
            json={"title": "Broken", "content": "Body", "tags": ["Fresh", "!!!"]},
            headers=headers,
        )

        assert response.status_code == 400
        listing = await api.client.get(POSTS, params={"status": "all"}, headers=headers)
        assert listing.json()["pagination"]["total"] == 0
        assert (await api.client.get("/api/v1/tags")).json()["tags"] == []


class TestPostListing:
    """Filtering and visibility of the post list."""

    @pytest.mark.asyncio
    async def test_public_list_only_shows_published(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        await _create_post(api, headers, title="Live", status="published")
        await _create_post(api, headers, title="Hidden")

        response = await api.client.get(POSTS)

        assert response.status_code == 200
        data = response.json()
        assert [p["title"] for p in data["posts"]] == ["Live"]
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}

    @pytest.mark.asyncio
    async def test_draft_listing_needs_author(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        await _create_post(api, headers, title="Hidden")

        anonymous = await api.client.get(POSTS, params={"status": "draft"})
        author = await api.client.get(
            POSTS, params={"status": "all"}, headers=headers
        )

        assert anonymous.status_code == 403
        assert author.status_code == 200
        assert author.json()["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_invalid_status_is_bad_request(self, api):
        response = await api.client.get(POSTS, params={"status": "bogus"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid status: bogus"

    @pytest.mark.asyncio
    async def test_draft_detail_hidden_from_public(self, api):
        _, headers = await api.login_as(UserRole.AUTHOR)
        await _create_post(api, headers, title="Secret Draft")

        public = await api.client.get(f"{POSTS}/secret-draft")
        owner = await api.client.get(f"{POSTS}/secret-draft", headers=headers)

        assert public.status_code == 404
        assert owner.status_code == 200


class TestBulkActions:
    """Admin bulk actions."""

    @pytest.mark.asyncio
    async def test_admin_bulk_publishes(self, api):
        _, author_headers = await api.login_as(UserRole.AUTHOR)
        _, admin_headers = await api.login_as(UserRole.ADMIN)
        first = await _create_post(api, author_headers, title="One")
        second = await _create_post(api, author_headers, title="Two")

        response = await api.client.post(
            f"{POSTS}/bulk",
            json={"action": "publish", "post_ids": [first["id"], second["id"]]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "2 posts published successfully",
            "affected": 2,
        }
        assert (await api.client.get(POSTS)).json()["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_bulk_requires_admin_and_valid_action(self, api):
        _, author_headers = await api.login_as(UserRole.AUTHOR)
        _, admin_headers = await api.login_as(UserRole.ADMIN)

        forbidden = await api.client.post(
            f"{POSTS}/bulk",
            json={"action": "publish", "post_ids": []},
            headers=author_headers,
        )
        invalid = await api.client.post(
            f"{POSTS}/bulk",
            json={"action": "explode", "post_ids": []},
            headers=admin_headers,
        )

        assert forbidden.status_code == 403
        assert invalid.status_code == 400
