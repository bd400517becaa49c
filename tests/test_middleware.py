"""
Integration tests for the GitHub token middleware.

These tests use FastAPI TestClient with a fake GitHub transport to test
the middleware in isolation.
"""

import json

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from conftest import EMAILS_URL, PROFILE_URL, FakeGitHubTransport
from github_token_auth.config.provider import StrategyConfig
from github_token_auth.modules.auth.errors import (
    ProfileParseError,
    TransportError,
    UpstreamTransportError,
)
from github_token_auth.modules.auth.service import AuthOutcome
from github_token_auth.modules.auth.strategy import GitHubTokenStrategy
from github_token_auth.modules.middleware import (
    TokenAuthMiddleware,
    create_github_token_middleware,
)


def create_test_app(strategy: GitHubTokenStrategy, error_format: str = "json") -> FastAPI:
    """Create a minimal app protected by the token middleware."""
    app = FastAPI()
    app.middleware("http")(create_github_token_middleware(strategy, error_format=error_format))

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.api_route("/me", methods=["GET", "POST"])
    async def me(request: Request):
        user = request.state.user
        return {"username": user.username, "info": request.state.auth_info}

    return app


async def accept(access_token, refresh_token, profile):
    return profile, {"refresh_token": refresh_token}


@pytest.fixture
def client(strategy_config, github_transport):
    strategy = GitHubTokenStrategy(strategy_config, accept, transport=github_transport)
    return TestClient(create_test_app(strategy))


def test_token_in_header(client, github_transport):
    """Test a token in a header authenticates the request."""
    response = client.get("/me", headers={"access_token": "gho_abc", "refresh_token": "ghr_def"})

    assert response.status_code == 200
    assert response.json() == {"username": "ghaiklor", "info": {"refresh_token": "ghr_def"}}
    assert github_transport.calls == [(PROFILE_URL, "gho_abc")]


def test_token_in_query(client):
    response = client.get("/me", params={"access_token": "gho_abc"})

    assert response.status_code == 200
    assert response.json()["info"] == {"refresh_token": None}


def test_token_in_json_body(client, github_transport):
    response = client.post("/me", json={"access_token": "from-body"}, headers={"access_token": "from-header"})

    assert response.status_code == 200
    assert github_transport.calls == [(PROFILE_URL, "from-body")]


def test_token_in_form_body(client, github_transport):
    response = client.post("/me", data={"access_token": "from-form"})

    assert response.status_code == 200
    assert github_transport.calls == [(PROFILE_URL, "from-form")]


def test_malformed_json_body_falls_back_to_query(client, github_transport):
    response = client.post(
        "/me?access_token=from-query",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 200
    assert github_transport.calls == [(PROFILE_URL, "from-query")]


def test_missing_token_returns_401(client, github_transport):
    """Test requests without a token are rejected."""
    response = client.get("/me")

    assert response.status_code == 401
    assert response.json() == {"error": "You should provide access_token", "status": 401}
    assert github_transport.calls == []


def test_health_check_skips_auth(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_rejected_user_returns_401(strategy_config, github_transport):
    async def reject(access_token, refresh_token, profile):
        return None, {"message": "User is not a member of the organization"}

    strategy = GitHubTokenStrategy(strategy_config, reject, transport=github_transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"access_token": "gho_abc"})

    assert response.status_code == 401
    assert response.json()["error"] == "User is not a member of the organization"


def test_bad_credentials_returns_401(strategy_config):
    """Test GitHub refusing the token is reported as 401."""
    transport = FakeGitHubTransport({
        PROFILE_URL: TransportError("401", status_code=401, data='{"message": "Bad credentials"}')
    })
    strategy = GitHubTokenStrategy(strategy_config, accept, transport=transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"access_token": "revoked"})

    assert response.status_code == 401
    assert response.json()["error"] == "Bad credentials"


def test_github_outage_returns_502(strategy_config):
    transport = FakeGitHubTransport({PROFILE_URL: TransportError("timed out")})
    strategy = GitHubTokenStrategy(strategy_config, accept, transport=transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"access_token": "gho_abc"})

    assert response.status_code == 502
    assert response.json() == {"error": "Error fetching GitHub profile", "status": 502}


def test_verify_error_returns_500(strategy_config, github_transport):
    async def broken(access_token, refresh_token, profile):
        raise RuntimeError("database unavailable")

    strategy = GitHubTokenStrategy(strategy_config, broken, transport=github_transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"access_token": "gho_abc"})

    assert response.status_code == 500
    assert response.json()["error"] == "Internal error during authentication"


def test_jsonrpc_error_format(strategy_config, github_transport):
    strategy = GitHubTokenStrategy(strategy_config, accept, transport=github_transport)
    client = TestClient(create_test_app(strategy, error_format="jsonrpc"))

    response = client.get("/me")

    assert response.status_code == 401
    body = response.json()
    assert body["jsonrpc"] == "2.0"
    assert body["error"]["code"] == -32700
    assert body["error"]["message"] == "You should provide access_token"


def test_pass_req_to_callback_receives_request_view(github_transport):
    """Test the request view, with the raw request attached, reaches verify."""
    seen = {}

    def verify(request, access_token, refresh_token, profile):
        seen["path"] = request.raw.url.path
        seen["headers"] = request.headers
        return profile

    config = StrategyConfig(client_id="123", client_secret="123", pass_req_to_callback=True)
    strategy = GitHubTokenStrategy(config, verify, transport=github_transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"Access_Token": "gho_abc"})

    assert response.status_code == 200
    assert seen["path"] == "/me"
    assert seen["headers"]["access_token"] == "gho_abc"


def test_private_emails_are_merged(github_profile_body):
    transport = FakeGitHubTransport({
        PROFILE_URL: github_profile_body,
        EMAILS_URL: json.dumps([
            {"email": "ghaiklor@gmail.com", "primary": True, "verified": True},
            {"email": "private@example.com", "primary": False, "verified": False},
        ]),
    })
    captured = {}

    def verify(access_token, refresh_token, profile):
        captured["emails"] = [e.to_dict() for e in profile.emails]
        return profile

    config = StrategyConfig(client_id="123", client_secret="123", scope=["user:email"])
    strategy = GitHubTokenStrategy(config, verify, transport=transport)
    client = TestClient(create_test_app(strategy))

    response = client.get("/me", headers={"access_token": "gho_abc"})

    assert response.status_code == 200
    assert captured["emails"] == [
        {"value": "ghaiklor@gmail.com", "primary": True, "verified": True},
        {"value": "private@example.com", "primary": False, "verified": False},
    ]
    assert [url for url, _ in transport.calls] == [PROFILE_URL, EMAILS_URL]


@pytest.mark.parametrize("outcome,expected", [
    (AuthOutcome.success({"id": 1}), 200),
    (AuthOutcome.fail({"message": "nope"}), 401),
    (AuthOutcome.from_error(UpstreamTransportError("Bad credentials", 401)), 401),
    (AuthOutcome.from_error(UpstreamTransportError("Failed to fetch user profile", 503)), 502),
    (AuthOutcome.from_error(UpstreamTransportError("Failed to fetch user profile")), 502),
    (AuthOutcome.from_error(ProfileParseError("bad json")), 500),
    (AuthOutcome.from_error(RuntimeError("boom")), 500),
])
def test_status_for(outcome, expected):
    assert TokenAuthMiddleware.status_for(outcome) == expected
