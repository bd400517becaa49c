"""
Authentication Module - Black Box Interface

Purpose: Authenticate bearers of GitHub OAuth2 access tokens
Interface: GitHubTokenStrategy.authenticate(), GitHubTokenStrategy.user_profile()
Hidden: Token lookup order, GitHub API calls, profile normalization

The transport and the verify callback are injected, so the strategy can be
used by any host framework and tested without network access.
"""

from .credentials import Credentials, RequestView, extract_credentials
from .errors import (
    GitHubTokenError,
    MissingCredentialError,
    ProfileParseError,
    TransportError,
    UpstreamTransportError,
)
from .factory import StrategyFactory
from .profile import EmailEntry, NormalizedProfile, ProfileName
from .service import AuthOutcome, AuthStatus
from .strategy import GitHubTokenStrategy
from .transport import HttpxOAuth2Transport

__all__ = [
    "AuthOutcome",
    "AuthStatus",
    "Credentials",
    "EmailEntry",
    "GitHubTokenError",
    "GitHubTokenStrategy",
    "HttpxOAuth2Transport",
    "MissingCredentialError",
    "NormalizedProfile",
    "ProfileName",
    "ProfileParseError",
    "RequestView",
    "StrategyFactory",
    "TransportError",
    "UpstreamTransportError",
    "extract_credentials",
]
