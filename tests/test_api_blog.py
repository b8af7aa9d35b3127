"""HTTP tests for the blog post endpoints."""
from sqlalchemy import select

from db.models import BlogPost

API = "/api/v1/blog"


class TestGetPost:
    async def test_get_post(self, client, sample_users, sample_posts, auth_headers):
        response = await client.get(
            f"{API}/post00000001", headers=auth_headers(sample_users["viewer"])
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        post = body["post"]
        assert post["id"] == "post00000001"
        assert post["title"] == "Admin announcement"
        assert post["authorId"] == sample_users["admin"].user_id
        assert post["published"] is True
        assert post["createdAt"]

    async def test_missing_post_is_404(self, client, sample_users, auth_headers):
        response = await client.get(
            f"{API}/doesnotexist", headers=auth_headers(sample_users["viewer"])
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Post not found"

    async def test_requires_authentication(self, client, sample_posts):
        response = await client.get(f"{API}/post00000001")
        assert response.status_code == 401

    async def test_blog_hidden_from_role(self, client, sample_users, sample_posts, auth_headers, store_access):
        await store_access("viewer", "/blog", can_view=False)

        response = await client.get(
            f"{API}/post00000001", headers=auth_headers(sample_users["viewer"])
        )
        assert response.status_code == 403

    async def test_list_filters_published(self, client, sample_users, sample_posts, auth_headers):
        response = await client.get(
            API, params={"published": "true"}, headers=auth_headers(sample_users["viewer"])
        )

        assert response.status_code == 200
        assert [post["id"] for post in response.json()["posts"]] == ["post00000001"]


class TestCreatePost:
    async def test_viewer_cannot_create(self, client, sample_users, auth_headers):
        response = await client.post(
            API, json={"title": "Hi"}, headers=auth_headers(sample_users["viewer"])
        )
        assert response.status_code == 403

    async def test_grant_then_create(self, client, sample_users, auth_headers):
        """A grant made on the admin page takes effect on the next request."""
        await client.put(
            "/api/v1/role-access",
            json={"role": "editor", "page": "/blog", "canAdd": True},
            headers=auth_headers(sample_users["admin"]),
        )

        response = await client.post(
            API,
            json={"title": "  Fresh post  ", "content": "Body"},
            headers=auth_headers(sample_users["editor"]),
        )

        assert response.status_code == 201
        post = response.json()["post"]
        assert post["title"] == "Fresh post"
        assert post["authorId"] == sample_users["editor"].user_id
        assert post["authorName"] == "Ed Itor"
        assert post["published"] is False


class TestUpdatePost:
    async def test_partial_update(self, client, sample_users, sample_posts, auth_headers, session_factory):
        response = await client.put(
            f"{API}/post00000002",
            json={"published": True},
            headers=auth_headers(sample_users["admin"]),
        )

        assert response.status_code == 200
        post = response.json()["post"]
        assert post["published"] is True
        assert post["title"] == "Editor draft"
        assert post["content"] == "Work in progress."

        async with session_factory() as session:
            stored = (
                await session.execute(select(BlogPost).where(BlogPost.post_id == "post00000002"))
            ).scalar_one()
        assert stored.published is True
        assert stored.title == "Editor draft"

    async def test_missing_post_is_404(self, client, sample_users, auth_headers):
        response = await client.put(
            f"{API}/doesnotexist",
            json={"title": "x"},
            headers=auth_headers(sample_users["admin"]),
        )
        assert response.status_code == 404

    async def test_empty_update_rejected(self, client, sample_users, sample_posts, auth_headers):
        response = await client.put(
            f"{API}/post00000001", json={}, headers=auth_headers(sample_users["admin"])
        )
        assert response.status_code == 400

    async def test_editor_needs_edit_permission(self, client, sample_users, sample_posts, auth_headers):
        response = await client.put(
            f"{API}/post00000002",
            json={"title": "Mine"},
            headers=auth_headers(sample_users["editor"]),
        )
        assert response.status_code == 403

    async def test_editor_edits_own_post_only(self, client, sample_users, sample_posts, auth_headers, store_access):
        await store_access("editor", "/blog", can_edit=True)
        headers = auth_headers(sample_users["editor"])

        own = await client.put(f"{API}/post00000002", json={"title": "Mine"}, headers=headers)
        other = await client.put(f"{API}/post00000001", json={"title": "Hijack"}, headers=headers)

        assert own.status_code == 200
        assert own.json()["post"]["title"] == "Mine"
        assert other.status_code == 403
        assert other.json()["error"] == "You can only edit your own posts"


class TestDeletePost:
    async def test_admin_deletes_any_post(self, client, sample_users, sample_posts, auth_headers, session_factory):
        response = await client.delete(
            f"{API}/post00000002", headers=auth_headers(sample_users["admin"])
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        async with session_factory() as session:
            remaining = (await session.execute(select(BlogPost))).scalars().all()
        assert [post.post_id for post in remaining] == ["post00000001"]

    async def test_missing_post_is_404(self, client, sample_users, auth_headers):
        response = await client.delete(
            f"{API}/doesnotexist", headers=auth_headers(sample_users["admin"])
        )
        assert response.status_code == 404

    async def test_viewer_cannot_delete(self, client, sample_users, sample_posts, auth_headers):
        response = await client.delete(
            f"{API}/post00000001", headers=auth_headers(sample_users["viewer"])
        )
        assert response.status_code == 403

    async def test_editor_cannot_delete_others_post(self, client, sample_users, sample_posts, auth_headers, store_access):
        await store_access("editor", "/blog", can_delete=True)

        response = await client.delete(
            f"{API}/post00000001", headers=auth_headers(sample_users["editor"])
        )
        assert response.status_code == 403
