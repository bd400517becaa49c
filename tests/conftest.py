"""
Shared pytest fixtures for GitHub token auth integration tests.

This module provides common fixtures including:
- FakeGitHubTransport: canned GitHub API responses keyed by URL
- Static configuration providers
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import pytest

from github_token_auth.config.provider import APIConfig, StrategyConfig
from github_token_auth.modules.auth.errors import TransportError

PROFILE_URL = "https://api.github.com/user"
EMAILS_URL = "https://api.github.com/user/emails"

GITHUB_PROFILE = {
    "id": "1",
    "login": "ghaiklor",
    "name": "Eugene Obrezkov",
    "email": "ghaiklor@gmail.com"
}


class FakeGitHubTransport:
    """
    Transport returning canned responses instead of calling GitHub.

    Usage:
        transport = FakeGitHubTransport({PROFILE_URL: json.dumps(GITHUB_PROFILE)})
        transport.responses[EMAILS_URL] = TransportError("forbidden", 403)
    """

    def __init__(self, responses: Dict[str, Union[str, Exception]] = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, str]] = []

    async def get(self, url: str, access_token: str) -> str:
        self.calls.append((url, access_token))
        response = self.responses.get(url)
        if response is None:
            raise TransportError(f"GET {url} returned 404", status_code=404, data='{"message": "Not Found"}')
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class StaticConfigProvider:
    """Config provider returning fixed configuration."""
    strategy_config: StrategyConfig
    api_config: APIConfig = field(
        default_factory=lambda: APIConfig(port=8080, host="127.0.0.1", debug=False, log_level="INFO")
    )

    def get_strategy_config(self) -> StrategyConfig:
        return self.strategy_config

    def get_api_config(self) -> APIConfig:
        return self.api_config


@pytest.fixture
def github_profile_body():
    return json.dumps(GITHUB_PROFILE)


@pytest.fixture
def github_transport(github_profile_body):
    """Fake transport answering the profile endpoint."""
    return FakeGitHubTransport({PROFILE_URL: github_profile_body})


@pytest.fixture
def strategy_config():
    return StrategyConfig(client_id="123", client_secret="123")


@pytest.fixture
def config_provider(strategy_config):
    return StaticConfigProvider(strategy_config)
