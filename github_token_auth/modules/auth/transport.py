"""
OAuth2 transport backed by httpx.

Sends the access token in the Authorization header for GET requests and
reports any non-2xx response or network failure as a TransportError.
"""

import logging
from typing import Dict, Optional

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


class HttpxOAuth2Transport:
    """
    Transport implementation using an httpx AsyncClient.

    This class is a black box that:
    - Adds bearer, accept and user-agent headers
    - Applies the configured timeout to every request
    - Converts upstream failures into TransportError
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "github-token-auth",
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize transport.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header value (required by the GitHub API)
            client: Optional shared AsyncClient, one is created per request otherwise
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client

    def _headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def get(self, url: str, access_token: str) -> str:
        """
        Fetch a protected resource.

        Args:
            url: Resource URL
            access_token: OAuth2 access token

        Returns:
            Response body text

        Raises:
            TransportError: On network errors, timeouts and non-2xx responses
        """
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, headers=self._headers(access_token), timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=self._headers(access_token))
        except httpx.TimeoutException as e:
            logger.error(f"Timed out fetching {url}: {e}")
            raise TransportError(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.debug(f"GET {url} returned {response.status_code}")
            raise TransportError(
                f"GET {url} returned {response.status_code}",
                status_code=response.status_code,
                data=response.text
            )

        return response.text

    async def aclose(self):
        """Close the shared client, if any."""
        if self._client is not None:
            await self._client.aclose()
