"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from userapi.config import Settings
from userapi.main import create_app
from userapi.services import InMemoryUserService

AUTH_HEADERS = {"Authorization": "Bearer valid-token"}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast unit tests")


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def user_service() -> InMemoryUserService:
    """A freshly seeded in-memory store."""
    return InMemoryUserService()


@pytest.fixture
def app(settings: Settings, user_service: InMemoryUserService) -> FastAPI:
    """Create an application bound to the test store."""
    return create_app(settings, user_service)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create an authenticated test client speaking HTTPS."""
    return TestClient(app, base_url="https://testserver", headers=AUTH_HEADERS)


@pytest.fixture
def anonymous_client(app: FastAPI) -> TestClient:
    """Create a test client that sends no Authorization header."""
    return TestClient(app, base_url="https://testserver")
