"""Pytest configuration and shared fixtures for the harness API tests."""

import pytest
from typing import Dict

from fastapi import FastAPI
from fastapi.testclient import TestClient

from harness.main import create_app
from harness.config import Settings
from harness.models.records import User, Product
from harness.rate_limit.storage import reset_rate_limit_storage
from harness.store import DataStore, build_store


@pytest.fixture(autouse=True)
def fresh_rate_limit_storage():
    """Give every test empty rate limit buckets."""
    reset_rate_limit_storage()
    yield
    reset_rate_limit_storage()


@pytest.fixture
def test_settings() -> Settings:
    """Override settings for testing."""
    return Settings(
        debug=True,
        log_level="ERROR",  # Reduce log noise during tests
        log_requests=False,
        rate_limits="general:1000/m,strict:5/m",  # Higher general limit for tests
        user_count=100,
        product_count=50,
        data_seed=1234,
        cursor_max_limit=None
    )


@pytest.fixture
def store(test_settings: Settings) -> DataStore:
    """Generated store with 100 users and 50 products."""
    return build_store(
        user_count=test_settings.user_count,
        product_count=test_settings.product_count,
        seed=test_settings.data_seed
    )


@pytest.fixture
def users(store: DataStore):
    return store.users


@pytest.fixture
def sample_products() -> tuple[Product, ...]:
    """Small hand-written product list with known prices, names and ties."""
    rows = [
        (1, "Laptop", 1200, "Electronics", 5),
        (2, "t-shirt", 20, "Clothing", 100),
        (3, "Novel", 15, "Books", 40),
        (4, "Lamp", 45, "Home", 12),
        (5, "Headphones", 200, "Electronics", 40),
        (6, "Jeans", 60, "Clothing", 0),
        (7, "Atlas", 45, "Books", 7),
        (8, "Ball", 25, "Sports", 40),
    ]
    return tuple(
        Product(id=i, name=name, price=price, category=category, stock=stock)
        for i, name, price, category, stock in rows
    )


@pytest.fixture
def sample_users() -> tuple[User, ...]:
    """Small hand-written user list for search tests."""
    rows = [
        (1, "Alice Smith", "alice@example.com", 30, "London"),
        (2, "Bob Jones", "bob@corp.io", 41, "Tokyo"),
        (3, "Carol King", "carol@example.com", 25, "New York"),
        (4, "Dave London", "dave@mail.net", 52, "Paris"),
        (5, "Erin Stone", "ERIN@EXAMPLE.COM", 35, "Sydney"),
    ]
    return tuple(
        User(id=i, name=name, email=email, age=age, city=city)
        for i, name, email, age, city in rows
    )


@pytest.fixture
def app(test_settings: Settings, store: DataStore) -> FastAPI:
    """Create FastAPI application instance for testing."""
    return create_app(settings=test_settings, store=store)


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """Create test client for API testing."""
    return TestClient(app)


@pytest.fixture
def sample_store(sample_users, sample_products) -> DataStore:
    return DataStore(users=sample_users, products=sample_products)


@pytest.fixture
def sample_client(test_settings: Settings, sample_store: DataStore) -> TestClient:
    """Test client backed by the hand-written records."""
    return TestClient(create_app(settings=test_settings, store=sample_store))


@pytest.fixture
def origin_headers() -> Dict[str, str]:
    """Headers for a request from an allowed browser origin."""
    return {"Origin": "http://localhost:5173"}


# Pytest markers for test categorization
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no HTTP)")
    config.addinivalue_line("markers", "integration: Integration tests through the ASGI app")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
