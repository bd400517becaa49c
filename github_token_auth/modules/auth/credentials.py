"""
Credential extraction.

Tokens are looked up in the request body, then the query string, then the
headers. The first non-empty value wins.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import MissingCredentialError
from .interfaces import RequestLike


@dataclass
class Credentials:
    """Tokens presented by the client for a single authentication attempt."""
    access_token: str
    refresh_token: Optional[str] = None


@dataclass
class RequestView:
    """
    Host-independent view of an inbound request.

    Attributes:
        body: Parsed form or JSON body
        query: Query string parameters
        headers: Request headers
        raw: The host framework's request object, passed through to callbacks
    """
    body: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, Any] = field(default_factory=dict)
    raw: Any = None


def _lookup_header(headers: Mapping[str, Any], name: str) -> Any:
    value = headers.get(name) or headers.get(name.lower())
    if value:
        return value

    # Plain dicts are case-sensitive, fall back to a scan
    lowered = name.lower()
    for key, candidate in headers.items():
        if isinstance(key, str) and key.lower() == lowered and candidate:
            return candidate
    return None


def lookup_field(request: RequestLike, name: str) -> Optional[str]:
    """
    Find a token field in the request.

    Args:
        request: Request-like object with optional body, query and headers mappings
        name: Field name to look for

    Returns:
        First non-empty value found, or None
    """
    body = getattr(request, "body", None)
    if isinstance(body, Mapping) and body.get(name):
        return body[name]

    query = getattr(request, "query", None)
    if isinstance(query, Mapping) and query.get(name):
        return query[name]

    headers = getattr(request, "headers", None)
    if isinstance(headers, Mapping):
        return _lookup_header(headers, name)

    return None


def extract_credentials(
    request: RequestLike,
    access_token_field: str = "access_token",
    refresh_token_field: str = "refresh_token"
) -> Credentials:
    """
    Extract access and refresh tokens from a request.

    Raises:
        MissingCredentialError: If no access token is present
    """
    access_token = lookup_field(request, access_token_field)
    if not access_token:
        raise MissingCredentialError(access_token_field)

    refresh_token = lookup_field(request, refresh_token_field) or None
    return Credentials(access_token=access_token, refresh_token=refresh_token)
