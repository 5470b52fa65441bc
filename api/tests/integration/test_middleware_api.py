"""Integration tests for security headers, CORS, rate limiting and the demo endpoints."""

import pytest
from fastapi.testclient import TestClient

from harness.config import Settings
from harness.main import create_app


LOGIN = {"username": "alice", "password": "hunter2"}


def limited_client(store, **overrides) -> TestClient:
    """Client for an app with low rate limits."""
    options = {
        "log_level": "ERROR",
        "log_requests": False,
        "rate_limits": "general:3/m,strict:2/m",
    }
    options.update(overrides)
    return TestClient(create_app(settings=Settings(**options), store=store))


class TestSecurityHeaders:
    """Test headers added to every response."""

    @pytest.mark.parametrize("path", ["/", "/api/headers", "/api/users", "/health"])
    def test_headers_present(self, test_client: TestClient, path):
        response = test_client.get(path)

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Strict-Transport-Security"] == "max-age=15552000; includeSubDomains"
        assert "default-src 'self'" in response.headers["Content-Security-Policy"]
        assert "X-Powered-By" not in response.headers

    def test_headers_on_error_response(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"page": 0})

        assert response.status_code == 400
        assert response.headers["Referrer-Policy"] == "no-referrer"

    def test_headers_can_be_disabled(self, store):
        client = TestClient(create_app(
            settings=Settings(log_level="ERROR", log_requests=False, security_headers_enabled=False),
            store=store
        ))

        assert "Content-Security-Policy" not in client.get("/").headers


class TestCors:
    """Test cross-origin behaviour."""

    def test_allowed_origin(self, test_client: TestClient, origin_headers):
        response = test_client.get("/api/data", headers=origin_headers)

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
        assert response.headers["Access-Control-Allow-Credentials"] == "true"
        assert response.json() == {
            "data": "This endpoint is CORS enabled",
            "origin": "http://localhost:5173"
        }

    def test_unknown_origin_not_allowed(self, test_client: TestClient):
        response = test_client.get("/api/data", headers={"Origin": "http://evil.example"})

        assert "Access-Control-Allow-Origin" not in response.headers

    def test_no_origin(self, test_client: TestClient):
        assert test_client.get("/api/data").json()["origin"] == "unknown"

    def test_preflight(self, test_client: TestClient, origin_headers):
        response = test_client.options(
            "/api/login",
            headers={**origin_headers, "Access-Control-Request-Method": "POST"}
        )

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
        assert "POST" in response.headers["Access-Control-Allow-Methods"]

    def test_preflight_disallowed_method(self, test_client: TestClient, origin_headers):
        response = test_client.options(
            "/api/users",
            headers={**origin_headers, "Access-Control-Request-Method": "PATCH"}
        )

        assert response.status_code == 400


class TestRateLimiting:
    """Test the general and strict rate limit rules."""

    def test_headers_report_quota(self, test_client: TestClient):
        response = test_client.get("/api/users")

        assert response.headers["RateLimit-Limit"] == "1000"
        assert response.headers["RateLimit-Remaining"] == "999"
        assert int(response.headers["RateLimit-Reset"]) >= 0

    def test_skip_paths_are_not_limited(self, store):
        client = limited_client(store)

        responses = [client.get("/health") for _ in range(5)]

        assert all(r.status_code == 200 for r in responses)
        assert "RateLimit-Limit" not in responses[-1].headers

    def test_general_limit(self, store):
        client = limited_client(store)

        statuses = [client.get("/api/users").status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 429]

    def test_general_limit_message(self, store):
        client = limited_client(store)
        for _ in range(3):
            client.get("/")

        response = client.get("/api/products")

        assert response.status_code == 429
        assert response.headers["Content-Type"] == "application/problem+json"
        assert int(response.headers["Retry-After"]) >= 1
        body = response.json()
        assert body["error"] == "Too many requests from this IP, please try again later."
        assert body["rule"] == "general"

    def test_strict_limit_on_login(self, test_client: TestClient):
        statuses = [test_client.post("/api/login", json=LOGIN).status_code for _ in range(6)]

        assert statuses == [200] * 5 + [429]

    def test_strict_limit_response(self, test_client: TestClient):
        for _ in range(5):
            test_client.post("/api/login", json=LOGIN)

        response = test_client.post("/api/login", json=LOGIN)

        body = response.json()
        assert body["error"] == "Too many attempts, please slow down."
        assert body["rule"] == "strict"
        assert response.headers["RateLimit-Limit"] == "5"
        assert response.headers["RateLimit-Remaining"] == "0"
        assert "Retry-After" in response.headers

    def test_strict_limit_does_not_block_other_paths(self, test_client: TestClient):
        for _ in range(6):
            test_client.post("/api/login", json=LOGIN)

        assert test_client.get("/api/users").status_code == 200

    def test_login_reports_strict_quota(self, test_client: TestClient):
        response = test_client.post("/api/login", json=LOGIN)

        assert response.headers["RateLimit-Limit"] == "5"
        assert response.headers["RateLimit-Remaining"] == "4"

    def test_forwarded_for_ignored_by_default(self, store):
        client = limited_client(store)

        statuses = [
            client.get("/", headers={"X-Forwarded-For": f"10.0.0.{i}"}).status_code
            for i in range(4)
        ]

        assert statuses[-1] == 429

    def test_forwarded_for_trusted_behind_proxy(self, store):
        client = limited_client(store, trust_proxy=True)

        statuses = [
            client.get("/", headers={"X-Forwarded-For": f"10.0.0.{i}, 172.16.0.1"}).status_code
            for i in range(4)
        ]

        assert statuses == [200, 200, 200, 200]


class TestDemoEndpoints:
    """Test the endpoints used to exercise the middleware."""

    def test_root(self, test_client: TestClient):
        data = test_client.get("/").json()

        assert data["message"] == "Server is running!"
        assert "T" in data["timestamp"]

    def test_login_does_not_echo_password(self, test_client: TestClient):
        response = test_client.post("/api/login", json=LOGIN)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login attempt recorded"
        assert data["username"] == "alice"
        assert "hunter2" not in response.text

    def test_login_without_body(self, test_client: TestClient):
        response = test_client.post("/api/login")

        assert response.status_code == 200
        assert response.json()["username"] is None

    def test_headers_endpoint(self, test_client: TestClient):
        data = test_client.get("/api/headers").json()

        assert data["message"] == "Check the response headers to see the security headers"

    def test_general_limit_endpoint(self, test_client: TestClient):
        data = test_client.get("/api/test-general-limit").json()

        assert data["message"] == "Testing general rate limiter (1000 requests per window)"
        assert data["requestsRemaining"] == 999
        assert data["resetTime"] is not None

    def test_general_limit_endpoint_without_general_rule(self, store):
        client = limited_client(store, rate_limits="strict:5/m")

        data = client.get("/api/test-general-limit").json()

        assert data["requestsRemaining"] is None
        assert data["resetTime"] is None
