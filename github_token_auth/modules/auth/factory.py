"""
Strategy Factory following Black Box Design principles.

This factory:
- Constructs the GitHub token strategy based on configuration
- Wires the transport and verify callback together
- Returns only the strategy facade
"""

import logging
from typing import Any, Callable, Optional

from ...config.provider import ConfigProvider
from .interfaces import Transport
from .strategy import GitHubTokenStrategy

logger = logging.getLogger(__name__)


class StrategyFactory:
    """
    Factory for building the authentication strategy.

    This is the composition root that:
    - Passes an injected transport through
    - Injects configuration and the verify callback
    - Returns the strategy
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        verify: Callable[..., Any],
        transport: Optional[Transport] = None
    ) -> GitHubTokenStrategy:
        """
        Build the GitHub token strategy.

        Args:
            config_provider: Configuration provider
            verify: Application verify callback
            transport: Optional transport, the strategy creates an httpx transport otherwise

        Returns:
            Configured GitHubTokenStrategy
        """
        config = config_provider.get_strategy_config()

        logger.info(
            f"Building {GitHubTokenStrategy.name} strategy for client {config.client_id} "
            f"(profile_url={config.profile_url}, scope={' '.join(config.scope) or '-'})"
        )
        return GitHubTokenStrategy(config, verify, transport=transport)
