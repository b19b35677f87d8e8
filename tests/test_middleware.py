"""Tests for the request middleware chain."""

import logging
import re

import pytest
from fastapi.testclient import TestClient

from userapi.config import Settings
from userapi.main import create_app
from userapi.middleware import build_chain
from userapi.models.user import User
from userapi.services import InMemoryUserService

ACCESS_LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T[^\]]+\+00:00\] (GET|POST|PUT|DELETE) \S+ => \d{3}$")


class ExplodingUserService(InMemoryUserService):
    """Store whose list operation fails unexpectedly."""

    def list_users(self) -> list[User]:
        raise RuntimeError("store exploded")


def _access_lines(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [record.getMessage() for record in caplog.records if ACCESS_LINE.match(record.getMessage())]


@pytest.mark.unit
def test_chain_order(settings: Settings) -> None:
    """Error boundary wraps authentication, which wraps request logging."""
    assert [stage.__name__ for stage in build_chain(settings)] == ["error_boundary", "authenticate", "log_requests"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer wrong-token"},
        {"Authorization": "valid-token"},
        {"Authorization": "bearer valid-token"},
    ],
)
def test_rejects_bad_credentials(anonymous_client: TestClient, headers: dict[str, str]) -> None:
    """Anything but the exact bearer token is a 401."""
    response = anonymous_client.get("/users", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.unit
def test_unauthorized_requests_do_not_mutate(
    anonymous_client: TestClient, user_service: InMemoryUserService
) -> None:
    """Rejected writes never reach the store."""
    anonymous_client.post("/users", json={"name": "Carl", "email": "carl@example.com"})
    anonymous_client.put("/users/1", json={"name": "Mallory", "email": "mallory@example.com"})
    anonymous_client.delete("/users/2")

    assert [user.name for user in user_service.list_users()] == ["Alice", "Bob"]
    assert user_service.next_id == 3


@pytest.mark.unit
def test_root_requires_auth(anonymous_client: TestClient) -> None:
    """The welcome route is protected like the others."""
    assert anonymous_client.get("/").status_code == 401


@pytest.mark.unit
def test_unauthorized_requests_are_not_access_logged(
    anonymous_client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    """The logger sits inside authentication, so a 401 leaves no access line."""
    caplog.set_level(logging.INFO, logger="userapi.middleware")

    anonymous_client.get("/users")

    assert _access_lines(caplog) == []


@pytest.mark.unit
def test_access_log_line(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    """Each completed request logs timestamp, method, path and status."""
    caplog.set_level(logging.INFO, logger="userapi.middleware")

    client.get("/users/42")

    lines = _access_lines(caplog)
    assert len(lines) == 1
    assert lines[0].endswith("GET /users/42 => 404")


@pytest.mark.unit
def test_unhandled_exception_becomes_500(settings: Settings, caplog: pytest.LogCaptureFixture) -> None:
    """Unexpected failures are logged and hidden behind a generic 500."""
    caplog.set_level(logging.INFO, logger="userapi.middleware")
    app = create_app(settings, ExplodingUserService())
    client = TestClient(app, base_url="https://testserver", headers={"Authorization": "Bearer valid-token"})

    response = client.get("/users")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error."}
    assert "store exploded" not in response.text
    assert any(record.getMessage() == "Unhandled exception: store exploded" for record in caplog.records)
    assert _access_lines(caplog) == []


@pytest.mark.unit
def test_http_redirects_to_https(app) -> None:
    """Plain HTTP requests are redirected before authentication runs."""
    client = TestClient(app, base_url="http://testserver", follow_redirects=False)

    response = client.get("/users?page=1&pageSize=1")

    assert response.status_code == 307
    assert response.headers["location"] == "https://testserver/users?page=1&pageSize=1"


@pytest.mark.unit
def test_https_redirect_can_be_disabled() -> None:
    """With redirection off, plain HTTP reaches the chain."""
    app = create_app(Settings(_env_file=None, https_redirect=False), InMemoryUserService())
    client = TestClient(app, headers={"Authorization": "Bearer valid-token"})

    assert client.get("/users").status_code == 200


@pytest.mark.unit
def test_custom_token() -> None:
    """The accepted token comes from settings."""
    app = create_app(Settings(_env_file=None, auth_token="s3cret"), InMemoryUserService())
    client = TestClient(app, base_url="https://testserver")

    assert client.get("/users", headers={"Authorization": "Bearer s3cret"}).status_code == 200
    assert client.get("/users", headers={"Authorization": "Bearer valid-token"}).status_code == 401
