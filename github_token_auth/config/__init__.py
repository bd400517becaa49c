"""Configuration for the GitHub token strategy and its host service."""

from .provider import APIConfig, ConfigProvider, EnvConfigProvider, StrategyConfig, parse_scope

__all__ = ["APIConfig", "ConfigProvider", "EnvConfigProvider", "StrategyConfig", "parse_scope"]
