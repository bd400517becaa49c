"""
GitHub token authentication strategy.

Authenticates requests that carry a GitHub OAuth2 access token by loading the
GitHub user profile with that token and handing it to an application supplied
verify callback. The callback decides whether the request is authorized.

Example:
    async def verify(access_token, refresh_token, profile):
        user = await users.find_or_create(github_id=profile.id)
        return user, {"scope": "read"}

    strategy = GitHubTokenStrategy(StrategyConfig(client_id="123", client_secret="shhh"), verify)
    outcome = await strategy.authenticate(request)
"""

import asyncio
import inspect
import json
import logging
from typing import Any, Callable, List, Optional, Tuple

from ...config.provider import StrategyConfig
from .credentials import extract_credentials
from .errors import MissingCredentialError, TransportError, UpstreamTransportError
from .interfaces import RequestLike, Transport
from .profile import EmailEntry, NormalizedProfile, load_json, merge_emails, parse_profile
from .service import AuthOutcome
from .transport import HttpxOAuth2Transport

logger = logging.getLogger(__name__)

# Scopes that grant read access to private email addresses
PRIVATE_EMAIL_SCOPES = ("user", "user:email")


class GitHubTokenStrategy:
    """
    Authenticates bearers of GitHub access tokens.

    This class is a black box that:
    - Extracts the access and refresh tokens from the request
    - Loads and normalizes the GitHub profile
    - Delegates the authorization decision to the verify callback
    """

    name = "github-token"

    def __init__(
        self,
        config: StrategyConfig,
        verify: Callable[..., Any],
        transport: Optional[Transport] = None
    ):
        """
        Initialize strategy with injected config and transport.

        Args:
            config: Strategy configuration
            verify: Callback receiving ``(access_token, refresh_token, profile)``,
                or ``(request, access_token, refresh_token, profile)`` when
                ``config.pass_req_to_callback`` is set. Returns ``(user, info)``
                or just ``user``; a falsy user rejects the request, raising
                signals an internal error. May be sync or async.
            transport: Transport used to call the GitHub API
        """
        if not callable(verify):
            raise TypeError("GitHubTokenStrategy requires a verify callback")

        self.config = config
        self._verify = verify
        self._transport = transport or HttpxOAuth2Transport(
            timeout=config.request_timeout,
            user_agent=config.user_agent
        )

    @property
    def authorization_url(self) -> str:
        return self.config.authorization_url

    @property
    def token_url(self) -> str:
        return self.config.token_url

    @property
    def requests_private_email(self) -> bool:
        """Whether the configured scope grants access to private emails."""
        return any(scope in PRIVATE_EMAIL_SCOPES for scope in self.config.scope)

    async def authenticate(self, request: RequestLike) -> AuthOutcome:
        """
        Authenticate a request.

        Args:
            request: Request-like object with body, query and headers mappings

        Returns:
            AuthOutcome with status success, fail or error
        """
        try:
            credentials = extract_credentials(
                request,
                self.config.access_token_field,
                self.config.refresh_token_field
            )
        except MissingCredentialError as e:
            logger.debug(f"Rejecting request: {e}", extra={"auth_status": "fail"})
            return AuthOutcome.fail({"message": str(e)})

        try:
            profile = await self.user_profile(credentials.access_token)
        except Exception as e:
            logger.error(f"Failed to load GitHub profile: {e}", extra={"auth_status": "error"})
            return AuthOutcome.from_error(e)

        try:
            if self.config.pass_req_to_callback:
                result = self._verify(
                    request, credentials.access_token, credentials.refresh_token, profile
                )
            else:
                result = self._verify(
                    credentials.access_token, credentials.refresh_token, profile
                )
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Verify callback raised: {e}", extra={"auth_status": "error"})
            return AuthOutcome.from_error(e)

        user, info = self._unpack(result)
        if not user:
            logger.debug(
                f"Verify callback rejected GitHub user {profile.username}",
                extra={"auth_status": "fail"}
            )
            return AuthOutcome.fail(info)

        logger.debug(f"Authenticated GitHub user {profile.username}", extra={"auth_status": "success"})
        return AuthOutcome.success(user, info)

    @staticmethod
    def _unpack(result: Any) -> Tuple[Any, Any]:
        if isinstance(result, tuple) and len(result) == 2:
            return result
        return result, None

    async def user_profile(self, access_token: str, deadline: Optional[float] = None) -> NormalizedProfile:
        """
        Load the GitHub profile for an access token.

        Args:
            access_token: GitHub OAuth2 access token
            deadline: Seconds allowed for the profile and emails calls together,
                defaults to ``config.profile_deadline``

        Returns:
            NormalizedProfile, enriched with private emails when the scope allows it

        Raises:
            UpstreamTransportError: If the profile could not be fetched in time
            ProfileParseError: If the profile response is not a JSON object
        """
        if deadline is None:
            deadline = self.config.profile_deadline
        expires_at = None
        if deadline is not None:
            expires_at = asyncio.get_running_loop().time() + deadline

        try:
            body = await self._get(self.config.profile_url, access_token, expires_at)
        except TransportError as e:
            raise self._upstream_error(e) from e

        profile = parse_profile(body)

        if self.requests_private_email:
            profile.emails = await self._load_emails(access_token, profile.emails, expires_at)

        return profile

    async def _get(self, url: str, access_token: str, expires_at: Optional[float]) -> str:
        """Call the transport, raising TransportError once the deadline has passed."""
        if expires_at is None:
            return await self._transport.get(url, access_token)

        remaining = expires_at - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise TransportError(f"Deadline exceeded before GET {url}")
        try:
            return await asyncio.wait_for(self._transport.get(url, access_token), remaining)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Deadline exceeded waiting for GET {url}") from e

    @staticmethod
    def _upstream_error(error: TransportError) -> UpstreamTransportError:
        try:
            payload = json.loads(error.data)
            return UpstreamTransportError(payload["message"], error.status_code)
        except (TypeError, ValueError, KeyError):
            return UpstreamTransportError("Failed to fetch user profile", error.status_code)

    async def _load_emails(
        self,
        access_token: str,
        emails: List[EmailEntry],
        expires_at: Optional[float] = None
    ) -> List[EmailEntry]:
        """Fetch private emails, keeping the existing list on any failure."""
        try:
            body = await self._get(self.config.emails_url, access_token, expires_at)
            records = load_json(body)
        except (TransportError, ValueError) as e:
            logger.debug(f"Skipping email enrichment: {e}")
            return emails

        if not isinstance(records, list) or not records:
            return emails

        return merge_emails(emails, records)
