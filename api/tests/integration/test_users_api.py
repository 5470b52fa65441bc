"""Integration tests for the user endpoints."""

from fastapi.testclient import TestClient


class TestListUsers:
    """Test GET /api/users."""

    def test_default_page(self, test_client: TestClient):
        response = test_client.get("/api/users")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 100
        assert data["totalPages"] == 10
        assert data["currentPage"] == 1
        assert data["limit"] == 10
        assert data["next"] == {"page": 2, "limit": 10}
        assert "previous" not in data
        assert [user["id"] for user in data["data"]] == list(range(1, 11))
        assert set(data["data"][0]) == {"id", "name", "email", "age", "city"}

    def test_explicit_page(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"page": 3, "limit": 20})

        data = response.json()
        assert data["data"][0]["id"] == 41
        assert data["previous"] == {"page": 2, "limit": 20}
        assert data["next"] == {"page": 4, "limit": 20}

    def test_link_header(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"page": 2, "limit": 10})

        assert response.headers["Link"] == (
            '<http://testserver/api/users?page=3&limit=10>; rel="next", '
            '<http://testserver/api/users?page=1&limit=10>; rel="prev"'
        )

    def test_beyond_last_page(self, test_client: TestClient):
        data = test_client.get("/api/users", params={"page": 11}).json()

        assert data["data"] == []
        assert "next" not in data
        assert data["previous"] == {"page": 10, "limit": 10}

    def test_page_zero_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"page": 0})

        assert response.status_code == 400
        assert response.headers["Content-Type"] == "application/problem+json"
        body = response.json()
        assert body["error"] == "page and limit must be positive"
        assert body["instance"] == "/api/users"

    def test_limit_zero_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["error"] == "page and limit must be positive"

    def test_limit_above_maximum_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"limit": 51})

        assert response.status_code == 400
        assert response.json()["error"] == "limit exceeds maximum"

    def test_non_numeric_page_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users", params={"page": "first"})

        assert response.status_code == 400

    def test_bad_request_leaves_store_intact(self, test_client: TestClient):
        """Test a rejected request does not affect later ones."""
        test_client.get("/api/users", params={"limit": 999})

        assert test_client.get("/api/users").json()["total"] == 100


class TestSearchUsers:
    """Test GET /api/users/search."""

    def test_search_echoes_term(self, sample_client: TestClient):
        response = sample_client.get("/api/users/search", params={"q": "LONDON"})

        assert response.status_code == 200
        data = response.json()
        assert data["searchTerm"] == "LONDON"
        assert data["total"] == 2
        assert [user["id"] for user in data["data"]] == [1, 4]

    def test_empty_search_returns_everything(self, test_client: TestClient):
        data = test_client.get("/api/users/search").json()

        assert data["searchTerm"] == ""
        assert data["total"] == 100

    def test_search_is_case_insensitive(self, test_client: TestClient):
        upper = test_client.get("/api/users/search", params={"q": "USER"}).json()
        lower = test_client.get("/api/users/search", params={"q": "user"}).json()

        assert upper["data"] == lower["data"]
        assert upper["total"] == lower["total"]

    def test_search_paginates(self, test_client: TestClient):
        data = test_client.get("/api/users/search", params={"q": "user1", "limit": 5, "page": 2}).json()

        # user1, user10..user19, user100 -> 12 matches
        assert data["total"] == 12
        assert data["totalPages"] == 3
        assert [user["id"] for user in data["data"]] == [14, 15, 16, 17, 18]

    def test_search_link_keeps_term(self, test_client: TestClient):
        response = test_client.get("/api/users/search", params={"q": "user1", "limit": 5})

        assert 'q=user1&limit=5&page=2' in response.headers["Link"]

    def test_search_validates_limit(self, test_client: TestClient):
        response = test_client.get("/api/users/search", params={"q": "x", "limit": 51})

        assert response.status_code == 400
        assert response.json()["error"] == "limit exceeds maximum"


class TestCursorUsers:
    """Test GET /api/users/cursor."""

    def test_first_page(self, test_client: TestClient):
        response = test_client.get("/api/users/cursor")

        assert response.status_code == 200
        data = response.json()
        assert [user["id"] for user in data["data"]] == list(range(1, 11))
        assert data["nextCursor"] == 10
        assert data["hasMore"] is True
        assert response.headers["Link"] == '<http://testserver/api/users/cursor?cursor=10>; rel="next"'

    def test_continue_from_cursor(self, test_client: TestClient):
        data = test_client.get("/api/users/cursor", params={"cursor": 10, "limit": 10}).json()

        assert data["data"][0]["id"] == 11

    def test_tail(self, test_client: TestClient):
        response = test_client.get("/api/users/cursor", params={"cursor": 95, "limit": 10})

        data = response.json()
        assert [user["id"] for user in data["data"]] == [96, 97, 98, 99, 100]
        assert data["hasMore"] is False
        assert data["nextCursor"] == 100
        assert "Link" not in response.headers

    def test_exhausted_returns_null_cursor(self, test_client: TestClient):
        data = test_client.get("/api/users/cursor", params={"cursor": 100}).json()

        assert data == {"data": [], "nextCursor": None, "hasMore": False}

    def test_repeatable(self, test_client: TestClient):
        first = test_client.get("/api/users/cursor", params={"cursor": 42, "limit": 7}).json()
        second = test_client.get("/api/users/cursor", params={"cursor": 42, "limit": 7}).json()

        assert first == second

    def test_no_upper_limit(self, test_client: TestClient):
        data = test_client.get("/api/users/cursor", params={"limit": 500}).json()

        assert len(data["data"]) == 100
        assert data["hasMore"] is False

    def test_negative_cursor_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users/cursor", params={"cursor": -1})

        assert response.status_code == 400
        assert response.json()["error"] == "cursor must be a non-negative integer"

    def test_zero_limit_rejected(self, test_client: TestClient):
        response = test_client.get("/api/users/cursor", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["error"] == "limit must be positive"
