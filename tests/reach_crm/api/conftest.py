"""Pytest fixtures for API tests.

Each test gets its own app instance on a temporary SQLite file. Outbound
email is replaced by a Mock so tests can read the links that would have
been sent, and OAuth provider calls go to an httpx.MockTransport.
"""

from typing import Callable
from unittest.mock import Mock

import httpx
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from reach_config.settings import Settings
from reach_crm.presentation.api.app import create_app
from reach_crm.presentation.api.dependencies import (
    get_email_service,
    get_oauth_transport,
)
from reach_identity.domain.user import User
from reach_identity.infrastructure.email import EmailService
from reach_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

TEST_SESSION_SECRET = "test-session-secret-for-testing-only-0123456789"
TEST_ACTIVATION_SECRET = "test-activation-secret-for-testing-only-0123456789"
FRONTEND_URL = "http://frontend.test"
BACKEND_URL = "http://api.test"


class FakeProviderApi:
    """Plays the OAuth providers' HTTP endpoints.

    Routes are keyed by ``(host, path)``; unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, host: str, path: str, json: object, status_code: int = 200) -> None:
        self.routes[(host, path)] = lambda _: httpx.Response(status_code, json=json)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.url.host, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        return route(request)


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with GitHub and Google configured, Facebook not."""
    return Settings(
        _env_file=None,
        jwt_secret_key=SecretStr(TEST_SESSION_SECRET),
        activation_secret_key=SecretStr(TEST_ACTIVATION_SECRET),
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        bcrypt_rounds=4,
        frontend_base_url=FRONTEND_URL,
        backend_base_url=BACKEND_URL,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        smtp_enabled=False,
        github_client_id="gh-client",
        github_client_secret=SecretStr("gh-secret"),
        google_client_id="google-client",
        google_client_secret=SecretStr("google-secret"),
        log_level="WARNING",
    )


@pytest.fixture
def email_service() -> Mock:
    return Mock(spec=EmailService)


@pytest.fixture
def provider_api() -> FakeProviderApi:
    return FakeProviderApi()


@pytest.fixture
def test_client(api_settings, email_service, provider_api):
    """TestClient running the app lifespan (schema creation included)."""
    app = create_app(api_settings)
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_oauth_transport] = lambda: provider_api.transport

    with TestClient(app) as client:
        yield client


@pytest.fixture
def load_user(test_client):
    """Read a user straight from the store, bypassing the API."""

    def _load(email: str) -> User | None:
        async def _find():
            async with test_client.app.state.session_maker() as session:
                return await UserRepositorySQLAlchemy(session).find_by_email(email)

        return test_client.portal.call(_find)

    return _load


@pytest.fixture
def save_user(test_client):
    """Write a user straight to the store, bypassing the API."""

    def _save(user: User) -> None:
        async def _store():
            async with test_client.app.state.session_maker() as session:
                await UserRepositorySQLAlchemy(session).save(user)
                await session.commit()

        test_client.portal.call(_store)

    return _save


@pytest.fixture
def activation_token(email_service):
    """Token from the most recent activation email."""

    def _token() -> str:
        link = email_service.send_activation_email.call_args.kwargs["activation_link"]
        assert link.startswith(f"{FRONTEND_URL}/activate/")
        return link.rsplit("/", 1)[1]

    return _token


@pytest.fixture
def registered_user(test_client, activation_token):
    """Sign up and activate an account; returns its credentials."""

    def _register(
        email: str = "user@example.com",
        password: str = "Pw1!",
        name: str = "Test User",
        mobile: str | None = None,
    ) -> dict:
        body = {"email": email, "password": password, "name": name}
        if mobile:
            body["mobile"] = mobile
        response = test_client.post("/auth/signup", json=body)
        assert response.status_code == 201, response.text

        activated = test_client.get(f"/auth/activate/{activation_token()}")
        assert activated.status_code == 200, activated.text
        return {**body, "id": response.json()["user"]["id"]}

    return _register


@pytest.fixture
def auth_headers(test_client, registered_user):
    """Bearer headers for a freshly registered, active user."""
    user = registered_user()
    response = test_client.post(
        "/auth/login",
        json={"email": user["email"], "password": user["password"]},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
