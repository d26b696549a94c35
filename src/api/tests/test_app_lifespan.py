"""End-to-end tests: real lifespan wiring against a SQLite file database."""

import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from api.config import Settings
from api.main import create_app

PASSWORD = "correct-horse-battery"


class TestApplicationLifespan(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp.name) / "app.db"
        self.settings = Settings(
            database_url=f"sqlite:///{db_path}",
            auth_secret="lifespan-test-secret",
        )
        self.app = create_app(settings=self.settings)

    def tearDown(self):
        self._tmp.cleanup()

    def test_startup_builds_resources_and_shutdown_releases_them(self):
        with TestClient(self.app) as client:
            self.assertIsNotNone(self.app.state.database)
            self.assertIsNotNone(self.app.state.session_provider)
            self.assertEqual(client.get("/health").status_code, 200)

        self.assertIsNone(self.app.state.database)
        self.assertIsNone(self.app.state.session_provider)

    def test_sign_up_update_and_list_through_database(self):
        with TestClient(self.app, follow_redirects=False) as client:
            response = client.post(
                "/api/auth/sign-up/email",
                json={"name": "Ada", "email": "ada@example.com", "password": PASSWORD},
            )
            self.assertEqual(response.status_code, 200)

            profile = client.get("/api/user/profile").json()["user"]
            self.assertEqual(profile["name"], "Ada")

            updated = client.patch("/api/user/update", json={"image": "http://x/a.png"})
            self.assertEqual(updated.status_code, 200)
            user = updated.json()["user"]
            self.assertEqual(user["image"], "http://x/a.png")
            self.assertEqual(user["name"], "Ada")

            listing = client.get("/api/users").json()
            self.assertTrue(listing["success"])
            self.assertEqual([u["email"] for u in listing["data"]], ["ada@example.com"])

            self.assertEqual(client.get("/dashboard").status_code, 200)
            self.assertEqual(client.get("/sign-in").headers["location"], "/dashboard")

            client.post("/api/auth/sign-out")
            self.assertEqual(client.get("/api/user/profile").status_code, 401)
            self.assertEqual(client.get("/dashboard").headers["location"], "/sign-in")


if __name__ == '__main__':
    unittest.main()
