"""Tests for GET /api/users."""

import unittest
from unittest.mock import patch

from api.tests.support import build_harness
from domain.model.errors import StorageError


class TestListUsers(unittest.TestCase):

    def setUp(self):
        self.h = build_harness()

    def tearDown(self):
        self.h.app.dependency_overrides.clear()

    def test_lists_users_without_session(self):
        self.h.users.create(email="ada@example.com", name="Ada")
        self.h.users.create(email="bob@example.com", name="Bob")

        response = self.h.client.get("/api/users")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [u["email"] for u in data["data"]] == ["ada@example.com", "bob@example.com"]

    def test_empty_directory(self):
        response = self.h.client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_storage_failure_surfaces_as_500(self):
        with patch.object(self.h.users, "list_all", side_effect=StorageError("boom")):
            with self.assertLogs("api.routes.users", level="ERROR"):
                response = self.h.client.get("/api/users")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch users"


if __name__ == '__main__':
    unittest.main()
