"""HTTP tests for the root and health endpoints and the documented error envelope."""

import unittest

from tests.support import ApiTestCase


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get(self.url("/health"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")
        self.assertEqual(resp.json()["environment"], "dev")

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Quillpost API"})

    def test_unknown_route_uses_error_envelope(self) -> None:
        resp = self.client.get(self.url("/nothing-here"))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "message": "Not Found"})

    def test_openapi_documents_error_envelope(self) -> None:
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        responses = schema["paths"][self.url("/posts/{post_id}")]["delete"]["responses"]
        for code in ("401", "403", "404"):
            with self.subTest(code=code):
                ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
                self.assertTrue(ref.endswith("/ErrorResponse"))


if __name__ == "__main__":
    unittest.main()
