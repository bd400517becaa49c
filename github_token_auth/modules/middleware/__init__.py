"""
Authentication Middleware Module - Black Box Interface

Purpose: Protect FastAPI applications with the GitHub token strategy
Interface: TokenAuthMiddleware, create_github_token_middleware(), build_request_view()
Hidden: Request body parsing, outcome to HTTP status mapping, error formatting

Can be used by any FastAPI app or sub-app that needs authentication.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..auth.credentials import RequestView
from ..auth.errors import UpstreamTransportError
from ..auth.service import AuthOutcome, AuthStatus
from ..auth.strategy import GitHubTokenStrategy

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def build_request_view(request: Request) -> RequestView:
    """
    Adapt a Starlette request into a RequestView.

    JSON and form bodies are parsed; anything else leaves the body empty.
    """
    body: Dict[str, Any] = {}
    content_type = request.headers.get("content-type", "")

    if request.method in ("POST", "PUT", "PATCH"):
        if "application/json" in content_type:
            try:
                data = await request.json()
                if isinstance(data, dict):
                    body = data
            except ValueError:
                logger.debug(f"Ignoring malformed JSON body on {request.url.path}")
        elif content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            body = {key: value for key, value in form.items() if isinstance(value, str)}

    return RequestView(
        body=body,
        query=dict(request.query_params),
        headers=dict(request.headers),
        raw=request
    )


class TokenAuthMiddleware:
    """
    Authentication middleware backed by GitHubTokenStrategy.

    On success the verified user and info are stored on ``request.state``,
    a rejected attempt is answered with 401 and upstream faults with 5xx.
    """

    def __init__(
        self,
        strategy: GitHubTokenStrategy,
        skip_paths: Optional[Dict[str, list]] = None,
        error_format: str = "json",
        log_attempts: bool = True
    ):
        """
        Initialize token authentication middleware.

        Args:
            strategy: GitHubTokenStrategy instance
            skip_paths: Dict of {path: [methods]} to skip authentication
            error_format: Error response format ("json" or "jsonrpc")
            log_attempts: Whether to log authentication attempts
        """
        self.strategy = strategy
        self.skip_paths = skip_paths or {}
        self.error_format = error_format
        self.log_attempts = log_attempts

    def should_skip_auth(self, request: Request) -> bool:
        """Check if authentication should be skipped for this request."""
        path = str(request.url.path)
        method = request.method.upper()

        if path in self.skip_paths:
            allowed_methods = self.skip_paths[path]
            if "*" in allowed_methods or method in allowed_methods:
                return True

        return False

    def format_error(self, status_code: int, message: str, request_id: Optional[str] = None) -> Dict[str, Any]:
        """Format error response based on configured format."""
        if self.error_format == "jsonrpc":
            return {
                "jsonrpc": "2.0",
                "error": {
                    "code": -32700 if status_code == 401 else -32603,
                    "message": message
                },
                "id": request_id
            }
        else:
            return {
                "error": message,
                "status": status_code
            }

    @staticmethod
    def status_for(outcome: AuthOutcome) -> int:
        """Map an authentication outcome to an HTTP status code."""
        if outcome.status is AuthStatus.SUCCESS:
            return 200
        if outcome.status is AuthStatus.FAIL:
            return 401

        error = outcome.error
        if isinstance(error, UpstreamTransportError):
            # GitHub refused the token itself
            if error.status_code and 400 <= error.status_code < 500:
                return 401
            return 502
        return 500

    async def __call__(self, request: Request, call_next):
        """Process the request through token authentication middleware."""
        if self.should_skip_auth(request):
            if self.log_attempts:
                logger.debug(f"Skipping auth for {request.method} {request.url.path}")
            return await call_next(request)

        view = await build_request_view(request)
        outcome = await self.strategy.authenticate(view)

        if not outcome.ok:
            status_code = self.status_for(outcome)
            if status_code == 401:
                message = outcome.message or "Authentication failed"
                if self.log_attempts:
                    logger.warning(
                        f"Authentication failed for {request.url.path}: {message}",
                        extra={"auth_status": "fail"}
                    )
            elif status_code == 502:
                message = "Error fetching GitHub profile"
                logger.error(f"Upstream error during authentication: {outcome.error}", extra={"auth_status": "error"})
            else:
                message = "Internal error during authentication"
                logger.error(f"Error during authentication: {outcome.error}", extra={"auth_status": "error"})

            return JSONResponse(
                status_code=status_code,
                content=self.format_error(status_code, message)
            )

        if self.log_attempts:
            logger.info(
                f"Request to {request.url.path} authenticated via {self.strategy.name}",
                extra={"auth_status": "success"}
            )

        request.state.user = outcome.user
        request.state.auth_info = outcome.info

        return await call_next(request)


def create_github_token_middleware(
    strategy: GitHubTokenStrategy,
    skip_paths: Optional[Dict[str, list]] = None,
    error_format: str = "json"
) -> TokenAuthMiddleware:
    """
    Factory function to create GitHub token authentication middleware.

    Args:
        strategy: GitHubTokenStrategy instance
        skip_paths: Paths to skip authentication {"/path": ["GET", "POST"]}
        error_format: "json" or "jsonrpc" error format

    Returns:
        Configured TokenAuthMiddleware instance
    """
    default_skip_paths = {
        "/health": ["GET"],
        "/healthz": ["GET"],
    }

    if skip_paths:
        default_skip_paths.update(skip_paths)

    return TokenAuthMiddleware(
        strategy=strategy,
        skip_paths=default_skip_paths,
        error_format=error_format
    )


# Module interface - what this module provides
__all__ = [
    "TokenAuthMiddleware",
    "build_request_view",
    "create_github_token_middleware"
]
