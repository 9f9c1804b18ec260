"""Tests for the OAuth login endpoints."""

import httpx
from fastapi.testclient import TestClient

GENERIC_SERVER_ERROR = {
    "detail": "An internal error occurred",
    "code": "SERVER_ERROR",
}


def _github_profile(provider_api, email="octo@b.com", external_id=42):
    provider_api.add(
        "github.com",
        "/login/oauth/access_token",
        {"access_token": "gh-at", "token_type": "bearer"},
    )
    provider_api.add(
        "api.github.com",
        "/user",
        {
            "id": external_id,
            "login": "octo",
            "name": "Octo Cat",
            "email": email,
            "avatar_url": "https://avatars/42",
        },
    )


def _start(test_client: TestClient, provider: str) -> str:
    response = test_client.get(f"/auth/{provider}", follow_redirects=False)
    assert response.status_code == 302
    return httpx.URL(response.headers["location"]).params["state"]


class TestOAuthRedirect:
    """Tests for GET /auth/{provider}."""

    def test_redirects_to_consent_page(self, test_client: TestClient):
        response = test_client.get("/auth/github", follow_redirects=False)

        assert response.status_code == 302
        location = httpx.URL(response.headers["location"])
        assert location.host == "github.com"
        assert location.path == "/login/oauth/authorize"
        assert location.params["client_id"] == "gh-client"
        assert location.params["redirect_uri"] == "http://api.test/auth/github/callback"
        assert location.params["state"]

    def test_unconfigured_provider(self, test_client: TestClient):
        response = test_client.get("/auth/facebook", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == GENERIC_SERVER_ERROR


class TestOAuthCallback:
    """Tests for GET /auth/{provider}/callback."""

    def test_new_user_is_created_and_logged_in(
        self,
        test_client: TestClient,
        provider_api,
        load_user,
    ):
        _github_profile(provider_api)
        state = _start(test_client, "github")

        response = test_client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": state},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "octo@b.com"
        assert body["user"]["githubId"] == "42"
        assert body["user"]["isActive"] is True
        assert load_user("octo@b.com").password_hash is None

        me = test_client.get(
            "/auth/me",
            headers={"Authorization": f"Bearer {body['token']}"},
        )
        assert me.json()["user"]["id"] == body["user"]["id"]

    def test_existing_local_account_is_linked(
        self,
        test_client: TestClient,
        provider_api,
        registered_user,
    ):
        """Linking keeps the local password usable."""
        user = registered_user(email="octo@b.com", password="Pw1!")
        _github_profile(provider_api, email="octo@b.com")
        state = _start(test_client, "github")

        response = test_client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": state},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]
        assert response.json()["user"]["githubId"] == "42"
        login = test_client.post(
            "/auth/login",
            json={"email": "octo@b.com", "password": "Pw1!"},
        )
        assert login.status_code == 200

    def test_repeat_login_without_email_maps_to_same_user(
        self,
        test_client: TestClient,
        provider_api,
    ):
        _github_profile(provider_api, email=None)
        provider_api.add("api.github.com", "/user/emails", [])

        first = test_client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": _start(test_client, "github")},
        )
        second = test_client.get(
            "/auth/github/callback",
            params={"code": "def", "state": _start(test_client, "github")},
        )

        assert first.status_code == second.status_code == 200
        assert first.json()["user"]["id"] == second.json()["user"]["id"]
        assert first.json()["user"]["email"] is None

    def test_email_revealed_later_keeps_linked_account(
        self,
        test_client: TestClient,
        provider_api,
        registered_user,
        load_user,
    ):
        """A local account registered later under that email stays unlinked."""
        _github_profile(provider_api, email=None)
        provider_api.add("api.github.com", "/user/emails", [])
        first = test_client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": _start(test_client, "github")},
        )
        local = registered_user(email="octo@b.com")

        _github_profile(provider_api, email="octo@b.com")
        second = test_client.get(
            "/auth/github/callback",
            params={"code": "def", "state": _start(test_client, "github")},
        )

        assert first.status_code == second.status_code == 200
        assert second.json()["user"]["id"] == first.json()["user"]["id"]
        assert second.json()["user"]["id"] != local["id"]
        assert load_user("octo@b.com").github_id is None

    def test_google_callback(self, test_client: TestClient, provider_api):
        provider_api.add(
            "oauth2.googleapis.com",
            "/token",
            {"access_token": "g-at"},
        )
        provider_api.add(
            "openidconnect.googleapis.com",
            "/v1/userinfo",
            {"sub": "g-1", "email": "g@b.com", "name": "G"},
        )

        response = test_client.get(
            "/auth/google/callback",
            params={"code": "abc", "state": _start(test_client, "google")},
        )

        assert response.status_code == 200
        assert response.json()["user"]["googleId"] == "g-1"
        assert response.json()["user"]["emailVerified"] is True

    def test_state_from_other_provider_rejected(
        self,
        test_client: TestClient,
        provider_api,
    ):
        _github_profile(provider_api)
        google_state = _start(test_client, "google")

        response = test_client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": google_state},
        )

        assert response.status_code == 500
        assert response.json() == GENERIC_SERVER_ERROR
        assert provider_api.requests == []

    def test_missing_state_rejected(self, test_client: TestClient, provider_api):
        _github_profile(provider_api)

        response = test_client.get("/auth/github/callback", params={"code": "abc"})

        assert response.status_code == 500
        assert provider_api.requests == []

    def test_provider_error_param(self, test_client: TestClient):
        response = test_client.get(
            "/auth/github/callback",
            params={"error": "access_denied", "state": _start(test_client, "github")},
        )

        assert response.status_code == 500
        assert response.json() == GENERIC_SERVER_ERROR

    def test_rejected_code(self, test_client: TestClient, provider_api):
        provider_api.add(
            "github.com",
            "/login/oauth/access_token",
            {"error": "bad_verification_code"},
            status_code=401,
        )

        response = test_client.get(
            "/auth/github/callback",
            params={"code": "stale", "state": _start(test_client, "github")},
        )

        assert response.status_code == 500
        assert response.json() == GENERIC_SERVER_ERROR
