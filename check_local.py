#!/usr/bin/env python3
"""Manual smoke check against a locally running server.

Start the server first:
    cd api && python -m harness.main
"""

import json
import sys

import requests

BASE_URL = "http://localhost:3000"
ORIGIN = "http://localhost:5173"


def show(description, response):
    """Print one request/response pair."""
    print(f"\n{'='*60}")
    print(f"TEST: {description}")
    print(f"{'='*60}")
    print(f"{response.request.method} {response.url}")
    print(f"Status: {response.status_code}")

    for name in ("Link", "RateLimit-Limit", "RateLimit-Remaining", "Retry-After",
                 "Access-Control-Allow-Origin", "X-Frame-Options"):
        if name in response.headers:
            print(f"{name}: {response.headers[name]}")

    if response.content:
        try:
            print(json.dumps(response.json(), indent=2)[:1200])
        except json.JSONDecodeError:
            print(response.text)


def main():
    print(f"Checking server at {BASE_URL}")

    try:
        show("Health", requests.get(f"{BASE_URL}/health"))
    except requests.exceptions.RequestException as e:
        print(f"Server not reachable: {e}")
        sys.exit(1)

    show("Security headers", requests.get(f"{BASE_URL}/api/headers"))
    show("CORS from allowed origin", requests.get(f"{BASE_URL}/api/data", headers={"Origin": ORIGIN}))

    show("Users, page 2", requests.get(f"{BASE_URL}/api/users", params={"page": 2, "limit": 5}))
    show("Users, limit too large", requests.get(f"{BASE_URL}/api/users", params={"limit": 100}))
    show("Search users", requests.get(f"{BASE_URL}/api/users/search", params={"q": "london"}))

    show("Filter products", requests.get(
        f"{BASE_URL}/api/products/filter",
        params={"category": "Electronics", "minPrice": 100, "maxPrice": 500}
    ))
    show("Sort products", requests.get(
        f"{BASE_URL}/api/products/sort",
        params={"sortBy": "price", "order": "desc", "limit": 5}
    ))

    # Walk the cursor pages until the server says there are no more
    cursor = 0
    pages = 0
    while True:
        response = requests.get(f"{BASE_URL}/api/users/cursor", params={"cursor": cursor, "limit": 25})
        body = response.json()
        pages += 1
        if not body["hasMore"]:
            break
        cursor = body["nextCursor"]
    print(f"\nCursor walk finished after {pages} pages (last cursor {cursor})")

    show("General limit status", requests.get(f"{BASE_URL}/api/test-general-limit"))

    for attempt in range(1, 7):
        response = requests.post(f"{BASE_URL}/api/login", json={"username": "alice", "password": "secret"})
        print(f"Login attempt {attempt}: {response.status_code}")
    show("Login after strict limit", response)


if __name__ == "__main__":
    main()
