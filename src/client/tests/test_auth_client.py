"""Tests for AuthClient against the real API app (in-memory repositories)."""

import unittest

import httpx

from api.tests.support import build_harness
from client.auth_client import AuthClient, AuthResult

PASSWORD = "correct-horse-battery"


class TestAuthClient(unittest.TestCase):

    def setUp(self):
        self.h = build_harness()
        self.navigations: list[str] = []
        self.auth = AuthClient(self.h.client, navigate=self.navigations.append)

    def tearDown(self):
        self.h.app.dependency_overrides.clear()

    def test_initial_state_is_anonymous(self):
        self.assertIsNone(self.auth.refresh())
        self.assertIsNone(self.auth.user)
        self.assertFalse(self.auth.is_authenticated)

    def test_register_signs_in(self):
        result = self.auth.register("Ada", "ada@example.com", PASSWORD)

        self.assertEqual(result, AuthResult(success=True, error=None))
        self.assertTrue(self.auth.is_authenticated)
        self.assertEqual(self.auth.user["email"], "ada@example.com")

    def test_register_failure_returns_server_message(self):
        self.auth.register("Ada", "ada@example.com", PASSWORD)
        self.auth.logout()

        result = self.auth.register("Ada", "ada@example.com", PASSWORD)

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Email already registered")

    def test_login_and_logout(self):
        self.auth.register("Ada", "ada@example.com", PASSWORD)
        self.auth.logout()
        self.assertFalse(self.auth.is_authenticated)

        self.assertTrue(self.auth.login("ada@example.com", PASSWORD).success)
        self.assertEqual(self.auth.user["name"], "Ada")

        result = self.auth.logout()
        self.assertTrue(result.success)
        self.assertFalse(self.auth.is_authenticated)
        self.assertEqual(self.navigations[-1], "/sign-in")

    def test_login_failure_does_not_raise(self):
        result = self.auth.login("nobody@example.com", PASSWORD)

        self.assertEqual(result, AuthResult(success=False, error="Invalid email or password"))
        self.assertFalse(self.auth.is_authenticated)

    def test_validation_error_falls_back_to_default_message(self):
        # 422 detail is a list, not a message
        result = self.auth.login("not-an-email", PASSWORD)
        self.assertEqual(result, AuthResult(success=False, error="Failed to sign in"))

    def test_transport_failure_is_reported(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        offline = AuthClient(httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://app"))

        self.assertEqual(offline.login("a@example.com", PASSWORD), AuthResult(False, "connection refused"))
        self.assertEqual(offline.logout(), AuthResult(False, "connection refused"))
        self.assertIsNone(offline.current_path)

    def test_malformed_responses_are_reported(self):
        def respond(request):
            if request.url.path == "/api/auth/get-session":
                return httpx.Response(200, text="<html>maintenance</html>")
            if request.url.path == "/api/auth/sign-up/email":
                return httpx.Response(500, json=["unexpected"])
            if request.url.path == "/api/auth/sign-out":
                return httpx.Response(502, text="Bad gateway")
            return httpx.Response(200, json={})

        client = AuthClient(httpx.Client(transport=httpx.MockTransport(respond), base_url="http://app"))

        self.assertEqual(client.login("a@example.com", PASSWORD), AuthResult(False, "Failed to sign in"))
        self.assertEqual(
            client.register("Ada", "a@example.com", PASSWORD), AuthResult(False, "Failed to create account")
        )
        self.assertEqual(client.logout(), AuthResult(False, "Failed to sign out"))
        self.assertFalse(client.is_authenticated)

    def test_default_navigation_records_path(self):
        client = AuthClient(self.h.client)
        client.logout()
        self.assertEqual(client.current_path, "/sign-in")

    def test_subscribers_see_session_changes(self):
        seen = []
        unsubscribe = self.auth.subscribe(seen.append)

        self.auth.register("Ada", "ada@example.com", PASSWORD)
        self.auth.logout()
        unsubscribe()
        self.auth.login("ada@example.com", PASSWORD)

        self.assertEqual(len(seen), 2)
        self.assertEqual(seen[0]["user"]["email"], "ada@example.com")
        self.assertIsNone(seen[1])


if __name__ == '__main__':
    unittest.main()
