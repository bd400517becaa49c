"""Authentication interfaces following Black Box Design principles."""
from typing import Any, Mapping, Optional, Protocol


class Transport(Protocol):
    """Protocol for the OAuth2 transport - allows swappable implementations."""

    async def get(self, url: str, access_token: str) -> str:
        """
        Fetch a protected resource using a bearer access token.

        Args:
            url: Resource URL
            access_token: OAuth2 access token

        Returns:
            Raw response body

        Raises:
            TransportError: If the request fails or the response is not 2xx
        """
        ...


class RequestLike(Protocol):
    """Inbound request exposing the locations tokens are read from."""

    body: Optional[Mapping[str, Any]]
    query: Optional[Mapping[str, Any]]
    headers: Optional[Mapping[str, Any]]
