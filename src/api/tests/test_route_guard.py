"""Tests for RouteGuardMiddleware page-navigation redirects."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from api.tests.support import build_harness
from domain.model.errors import StorageError
from domain.model.navigation import SessionState


class TestRouteGuard(unittest.TestCase):

    def setUp(self):
        self.h = build_harness()

    def tearDown(self):
        self.h.app.dependency_overrides.clear()

    def test_protected_without_session_redirects_to_sign_in(self):
        for path in ("/dashboard", "/dashboard/", "/dashboard/settings"):
            response = self.h.client.get(path)
            assert response.status_code == 302, path
            assert response.headers["location"] == "/sign-in"

    def test_protected_with_session_renders(self):
        user, headers = self.h.open_session(name="Ada")

        response = self.h.client.get("/dashboard", headers=headers)

        assert response.status_code == 200
        assert "Signed in as Ada" in response.text

    def test_auth_only_with_session_redirects_to_landing(self):
        _, headers = self.h.open_session()

        for path in ("/sign-in", "/sign-up"):
            response = self.h.client.get(path, headers=headers)
            assert response.status_code == 302, path
            assert response.headers["location"] == "/dashboard"

    def test_auth_only_without_session_renders(self):
        response = self.h.client.get("/sign-in")
        assert response.status_code == 200
        assert "<form" in response.text

    def test_public_route_never_redirects(self):
        _, headers = self.h.open_session()

        assert self.h.client.get("/").status_code == 200
        assert self.h.client.get("/", headers=headers).status_code == 200

    def test_redirect_targets_do_not_redirect_again(self):
        """Re-evaluating the guard at the redirect target proceeds (no loop)."""
        first = self.h.client.get("/dashboard")
        second = self.h.client.get(first.headers["location"])
        assert second.status_code == 200

        _, headers = self.h.open_session()
        first = self.h.client.get("/sign-up", headers=headers)
        second = self.h.client.get(first.headers["location"], headers=headers)
        assert second.status_code == 200

    def test_api_routes_are_not_redirected(self):
        response = self.h.client.get("/api/user/profile")
        assert response.status_code == 401

    def test_provider_failure_defers_to_page(self):
        """When the session cannot be resolved the guard proceeds instead of guessing."""
        with patch.object(self.h.provider, "get_session", side_effect=StorageError("down")):
            with self.assertLogs("api.middleware.auth", level="WARNING"):
                response = self.h.client.get("/sign-in")

        assert response.status_code == 200

    def test_missing_provider_defers_and_page_check_still_protects(self):
        h = build_harness(with_provider=False)

        assert h.client.get("/sign-in").status_code == 200
        # The dashboard's own session check cannot run without a provider
        response = h.client.get("/dashboard")
        assert response.status_code == 503

    def test_dashboard_page_checks_session_itself(self):
        """Second-pass check: the page redirects even if the middleware deferred."""
        with patch("api.middleware.auth.resolve_session_state", return_value=SessionState.UNKNOWN):
            response = self.h.client.get("/dashboard")

        assert response.status_code == 302
        assert response.headers["location"] == "/sign-in"

    def test_dashboard_navigation_looks_up_session_once(self):
        _, headers = self.h.open_session()
        # Two days old, so the lookup slides the expiry
        for session in self.h.sessions.store.values():
            session.expires_at = datetime.now(timezone.utc) + timedelta(days=5)

        with patch.object(self.h.sessions, "get_by_token", wraps=self.h.sessions.get_by_token) as lookup, \
                patch.object(self.h.sessions, "extend", wraps=self.h.sessions.extend) as extend:
            response = self.h.client.get("/dashboard", headers=headers)

        assert response.status_code == 200
        assert lookup.call_count == 1
        assert extend.call_count == 1


if __name__ == '__main__':
    unittest.main()
