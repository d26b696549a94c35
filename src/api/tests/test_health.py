"""Tests for GET /health."""

import unittest
from unittest.mock import MagicMock

from api.tests.support import build_harness


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.h = build_harness()

    def test_healthy_when_database_pings(self):
        self.h.app.state.database = MagicMock(ping=MagicMock(return_value=True))

        response = self.h.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"]["status"] == "healthy"

    def test_degraded_when_ping_fails(self):
        self.h.app.state.database = MagicMock(ping=MagicMock(return_value=False))

        response = self.h.client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    def test_degraded_when_database_not_started(self):
        response = self.h.client.get("/health")

        assert response.status_code == 503
        assert response.json()["services"]["database"]["message"] == "Not configured"


if __name__ == '__main__':
    unittest.main()
