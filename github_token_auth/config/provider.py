"""Configuration provider following Black Box Design principles."""
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Union

GITHUB_AUTHORIZATION_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_PROFILE_URL = "https://api.github.com/user"


def parse_scope(scope: Union[str, Sequence[str], None]) -> List[str]:
    """Normalize an OAuth scope given as a delimited string or a list."""
    if not scope:
        return []
    if isinstance(scope, str):
        scope = re.split(r"[\s,]+", scope)
    return [s.strip() for s in scope if s and s.strip()]


@dataclass
class StrategyConfig:
    """GitHub token strategy configuration."""
    client_id: str
    client_secret: str
    authorization_url: str = GITHUB_AUTHORIZATION_URL
    token_url: str = GITHUB_TOKEN_URL
    profile_url: str = GITHUB_PROFILE_URL
    access_token_field: str = "access_token"
    refresh_token_field: str = "refresh_token"
    scope: List[str] = field(default_factory=list)
    pass_req_to_callback: bool = False
    request_timeout: float = 10.0
    # Overall budget for the profile and emails calls, None for no limit
    profile_deadline: Optional[float] = None
    user_agent: str = "github-token-auth"

    def __post_init__(self):
        if not self.client_id:
            raise ValueError("client_id is required")
        if not self.client_secret:
            raise ValueError("client_secret is required")
        self.scope = parse_scope(self.scope)

    @property
    def emails_url(self) -> str:
        return self.profile_url.rstrip("/") + "/emails"


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_strategy_config(self) -> StrategyConfig:
        """Get GitHub token strategy configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_strategy_config(self) -> StrategyConfig:
        """Get strategy configuration from environment variables."""
        client_id = os.getenv("GITHUB_CLIENT_ID")
        client_secret = os.getenv("GITHUB_CLIENT_SECRET")
        deadline = os.getenv("GITHUB_PROFILE_DEADLINE")
        if not client_id or not client_secret:
            raise ValueError(
                "GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET environment variables are required. "
                "Use the credentials of the GitHub OAuth App that issued the access tokens."
            )

        return StrategyConfig(
            client_id=client_id,
            client_secret=client_secret,
            authorization_url=os.getenv("GITHUB_AUTHORIZATION_URL") or GITHUB_AUTHORIZATION_URL,
            token_url=os.getenv("GITHUB_TOKEN_URL") or GITHUB_TOKEN_URL,
            profile_url=os.getenv("GITHUB_PROFILE_URL") or GITHUB_PROFILE_URL,
            access_token_field=os.getenv("GITHUB_ACCESS_TOKEN_FIELD", "access_token"),
            refresh_token_field=os.getenv("GITHUB_REFRESH_TOKEN_FIELD", "refresh_token"),
            scope=parse_scope(os.getenv("GITHUB_SCOPE", "")),
            pass_req_to_callback=os.getenv("GITHUB_PASS_REQ_TO_CALLBACK", "false").lower() == "true",
            request_timeout=float(os.getenv("GITHUB_REQUEST_TIMEOUT", "10")),
            profile_deadline=float(deadline) if deadline else None,
            user_agent=os.getenv("GITHUB_USER_AGENT", "github-token-auth"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
