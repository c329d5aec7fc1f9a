"""HTTP tests for the contact form and its administrator moderation routes."""

import unittest

from app.models import ContactMessage
from tests.support import ApiTestCase

MESSAGE = {
    "name": "Visitor",
    "email": "visitor@x.com",
    "subject": "Hello",
    "message": "I enjoyed your latest post a lot.",
}


class TestContact(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_headers = self.headers_for(self.create_admin())
        self.user_headers = self.headers_for(self.create_user())

    def _submit(self) -> str:
        resp = self.client.post(self.url("/contact"), json=MESSAGE)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]["id"]

    def test_public_submit(self) -> None:
        message_id = self._submit()
        with self.Session() as db:
            self.assertEqual(db.get(ContactMessage, message_id).status, "new")

    def test_submit_validation(self) -> None:
        for field, value in (("email", "nope"), ("message", "too short")):
            with self.subTest(field=field):
                resp = self.client.post(self.url("/contact"), json={**MESSAGE, field: value})
                self.assertEqual(resp.status_code, 422)

    def test_listing_requires_admin(self) -> None:
        self._submit()
        self.assertEqual(self.client.get(self.url("/contact")).status_code, 401)
        resp = self.client.get(self.url("/contact"), headers=self.user_headers)
        self.assertEqual(resp.status_code, 403)
        resp = self.client.get(self.url("/contact"), headers=self.admin_headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["count"], 1)

    def test_mark_read_and_delete(self) -> None:
        message_id = self._submit()
        resp = self.client.put(
            self.url(f"/contact/{message_id}/read"), headers=self.user_headers
        )
        self.assertEqual(resp.status_code, 403)

        resp = self.client.put(
            self.url(f"/contact/{message_id}/read"), headers=self.admin_headers
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["status"], "read")

        resp = self.client.delete(self.url(f"/contact/{message_id}"), headers=self.admin_headers)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(self.url(f"/contact/{message_id}"), headers=self.admin_headers)
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
