#!/usr/bin/env python3
"""
GitHub Token Auth - Demo Service Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the strategy and middleware
3. Runs the API server

All authentication logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request

from github_token_auth.config.provider import ConfigProvider, EnvConfigProvider
from github_token_auth.logging_config import get_logging_config
from github_token_auth.modules.api import AuthResponse, ProfileResponse
from github_token_auth.modules.auth import NormalizedProfile, StrategyFactory
from github_token_auth.modules.auth.interfaces import Transport
from github_token_auth.modules.middleware import create_github_token_middleware

logger = logging.getLogger(__name__)


async def accept_github_user(access_token: str, refresh_token: Optional[str], profile: NormalizedProfile):
    """Default verify callback: every GitHub user with a valid token is accepted."""
    return profile, {"scope": "github"}


async def accept_github_user_with_request(request: Any, access_token: str, refresh_token: Optional[str],
                                          profile: NormalizedProfile):
    return await accept_github_user(access_token, refresh_token, profile)


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    verify: Optional[Callable[..., Any]] = None,
    transport: Optional[Transport] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration provider (environment by default)
        verify: Application verify callback
        transport: Optional transport override

    Returns:
        FastAPI app protected by the GitHub token middleware
    """
    config_provider = config_provider or EnvConfigProvider()
    strategy_config = config_provider.get_strategy_config()

    if verify is None:
        verify = accept_github_user_with_request if strategy_config.pass_req_to_callback else accept_github_user

    strategy = StrategyFactory.build(config_provider, verify, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        logger.info("Starting GitHub token auth service...")
        yield
        logger.info("GitHub token auth service shutdown complete")

    app = FastAPI(
        title="GitHub Token Auth",
        description="Authenticate GitHub OAuth2 access tokens",
        lifespan=lifespan,
    )
    app.state.strategy = strategy
    app.middleware("http")(create_github_token_middleware(strategy))

    @app.get("/healthz")
    async def healthz():
        """Unauthenticated health check."""
        return {"status": "ok"}

    @app.get("/auth/github/token", response_model=AuthResponse)
    @app.post("/auth/github/token", response_model=AuthResponse)
    async def github_token(request: Request):
        """Return the authenticated user for the presented access token."""
        user = request.state.user
        info = request.state.auth_info
        profile = ProfileResponse.from_profile(user) if isinstance(user, NormalizedProfile) else None
        return AuthResponse(
            strategy=strategy.name,
            profile=profile,
            info=info if isinstance(info, dict) else None
        )

    return app


if __name__ == "__main__":
    api_config = EnvConfigProvider().get_api_config()
    uvicorn.run(
        "github_token_auth.main:create_app",
        factory=True,
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )
