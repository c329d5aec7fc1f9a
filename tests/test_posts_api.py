"""HTTP tests for posts: ownership-gated mutation, drafts, views, search and likes."""

import unittest

from app.models import Post
from tests.support import ApiTestCase


class TestDeletePostOwnership(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner_id = self.create_user(name="Owner", email="owner@x.com")
        self.other_id = self.create_user(name="Other", email="other@x.com")
        self.admin_id = self.create_admin()
        self.post_id = self.create_post(self.owner_id)

    def _post_exists(self) -> bool:
        with self.Session() as db:
            return db.get(Post, self.post_id) is not None

    def test_owner_deletes_own_post(self) -> None:
        resp = self.client.delete(
            self.url(f"/posts/{self.post_id}"), headers=self.headers_for(self.owner_id)
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertFalse(self._post_exists())

    def test_non_owner_cannot_delete(self) -> None:
        resp = self.client.delete(
            self.url(f"/posts/{self.post_id}"), headers=self.headers_for(self.other_id)
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(
            resp.json(),
            {"success": False, "message": "You can only delete your own posts"},
        )
        self.assertTrue(self._post_exists())

    def test_admin_deletes_any_post(self) -> None:
        resp = self.client.delete(
            self.url(f"/posts/{self.post_id}"), headers=self.headers_for(self.admin_id)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(self._post_exists())

    def test_anonymous_cannot_delete(self) -> None:
        resp = self.client.delete(self.url(f"/posts/{self.post_id}"))
        self.assertEqual(resp.status_code, 401)
        self.assertTrue(self._post_exists())

    def test_missing_post_is_404(self) -> None:
        resp = self.client.delete(
            self.url("/posts/nope"), headers=self.headers_for(self.owner_id)
        )
        self.assertEqual(resp.status_code, 404)


class TestCreateAndUpdatePost(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner_id = self.create_user(name="Owner", email="owner@x.com")
        self.other_id = self.create_user(name="Other", email="other@x.com")

    def test_create_sets_author_from_token(self) -> None:
        resp = self.client.post(
            self.url("/posts"),
            json={
                "title": "First post",
                "content": "This is the body of the post.",
                "category": "React",
                "tags": ["hooks", " state "],
                "published": True,
            },
            headers=self.headers_for(self.owner_id),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        self.assertEqual(data["author"]["id"], self.owner_id)
        self.assertEqual(data["author"]["name"], "Owner")
        self.assertEqual(data["tags"], ["hooks", "state"])
        self.assertEqual(data["likesCount"], 0)
        self.assertEqual(data["views"], 0)

    def test_create_requires_auth_and_valid_body(self) -> None:
        body = {"title": "T", "content": "long enough content"}
        self.assertEqual(self.client.post(self.url("/posts"), json=body).status_code, 401)
        resp = self.client.post(
            self.url("/posts"),
            json={"title": "T", "content": "short", "category": "Cooking"},
            headers=self.headers_for(self.owner_id),
        )
        self.assertEqual(resp.status_code, 422)

    def test_owner_updates_only_given_fields(self) -> None:
        post_id = self.create_post(self.owner_id, title="Old title")
        resp = self.client.put(
            self.url(f"/posts/{post_id}"),
            json={"title": "New title"},
            headers=self.headers_for(self.owner_id),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()["data"]
        self.assertEqual(data["title"], "New title")
        self.assertEqual(data["content"], "Some long enough content.")

    def test_non_owner_cannot_update(self) -> None:
        post_id = self.create_post(self.owner_id, title="Old title")
        resp = self.client.put(
            self.url(f"/posts/{post_id}"),
            json={"title": "Hijacked"},
            headers=self.headers_for(self.other_id),
        )
        self.assertEqual(resp.status_code, 403)
        with self.Session() as db:
            self.assertEqual(db.get(Post, post_id).title, "Old title")

    def test_admin_updates_any_post(self) -> None:
        admin_id = self.create_admin()
        post_id = self.create_post(self.owner_id, title="Old title")
        resp = self.client.put(
            self.url(f"/posts/{post_id}"),
            json={"title": "Moderated title", "published": False},
            headers=self.headers_for(admin_id),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()["data"]
        self.assertEqual(data["title"], "Moderated title")
        self.assertFalse(data["published"])
        self.assertEqual(data["author"]["id"], self.owner_id)
        with self.Session() as db:
            self.assertEqual(db.get(Post, post_id).title, "Moderated title")


class TestReadingPosts(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.author_id = self.create_user(name="Author", email="author@x.com")
        self.reader_id = self.create_user(name="Reader", email="reader@x.com")
        self.published_id = self.create_post(
            self.author_id, title="Styling with CSS grid", category="CSS"
        )
        self.draft_id = self.create_post(
            self.author_id, title="Unfinished draft", published=False
        )

    def _titles(self, resp) -> set[str]:
        return {p["title"] for p in resp.json()["data"]}

    def test_anonymous_sees_published_only(self) -> None:
        resp = self.client.get(self.url("/posts"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self._titles(resp), {"Styling with CSS grid"})

    def test_author_sees_own_drafts(self) -> None:
        resp = self.client.get(self.url("/posts"), headers=self.headers_for(self.author_id))
        self.assertEqual(self._titles(resp), {"Styling with CSS grid", "Unfinished draft"})
        resp = self.client.get(
            self.url("/posts?published=false"), headers=self.headers_for(self.author_id)
        )
        self.assertEqual(self._titles(resp), {"Unfinished draft"})

    def test_draft_detail_hidden_from_others(self) -> None:
        self.assertEqual(self.client.get(self.url(f"/posts/{self.draft_id}")).status_code, 404)
        resp = self.client.get(
            self.url(f"/posts/{self.draft_id}"), headers=self.headers_for(self.reader_id)
        )
        self.assertEqual(resp.status_code, 404)
        resp = self.client.get(
            self.url(f"/posts/{self.draft_id}"), headers=self.headers_for(self.author_id)
        )
        self.assertEqual(resp.status_code, 200)

    def test_detail_counts_views(self) -> None:
        self.client.get(self.url(f"/posts/{self.published_id}"))
        resp = self.client.get(self.url(f"/posts/{self.published_id}"))
        self.assertEqual(resp.json()["data"]["views"], 2)

    def test_search_is_case_insensitive(self) -> None:
        resp = self.client.get(self.url("/posts"), params={"search": "css GRID"})
        self.assertEqual(self._titles(resp), {"Styling with CSS grid"})
        resp = self.client.get(self.url("/posts"), params={"search": "100%"})
        self.assertEqual(resp.json()["count"], 0)

    def test_category_filters(self) -> None:
        resp = self.client.get(self.url("/posts/category/CSS"))
        self.assertEqual(self._titles(resp), {"Styling with CSS grid"})
        resp = self.client.get(self.url("/posts/category/Other"))
        self.assertEqual(resp.json()["count"], 0)
        self.assertEqual(self.client.get(self.url("/posts/category/Cooking")).status_code, 422)

    def test_bad_token_on_public_route_reads_as_anonymous(self) -> None:
        resp = self.client.get(self.url("/posts"), headers={"Authorization": "Bearer junk"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self._titles(resp), {"Styling with CSS grid"})


class TestLikes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.author_id = self.create_user(name="Author", email="author@x.com")
        self.reader_id = self.create_user(name="Reader", email="reader@x.com")
        self.post_id = self.create_post(self.author_id)
        self.headers = self.headers_for(self.reader_id)

    def test_like_then_unlike(self) -> None:
        resp = self.client.post(self.url(f"/posts/{self.post_id}/like"), headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["data"], {"likesCount": 1})

        resp = self.client.get(self.url(f"/posts/{self.post_id}"))
        self.assertEqual(resp.json()["data"]["likes"], [self.reader_id])

        resp = self.client.delete(self.url(f"/posts/{self.post_id}/like"), headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"], {"likesCount": 0})

    def test_double_like_is_rejected(self) -> None:
        self.client.post(self.url(f"/posts/{self.post_id}/like"), headers=self.headers)
        resp = self.client.post(self.url(f"/posts/{self.post_id}/like"), headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "You already liked this post")

    def test_unlike_without_like_is_rejected(self) -> None:
        resp = self.client.delete(self.url(f"/posts/{self.post_id}/like"), headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_like_requires_auth(self) -> None:
        resp = self.client.post(self.url(f"/posts/{self.post_id}/like"))
        self.assertEqual(resp.status_code, 401)


if __name__ == "__main__":
    unittest.main()
