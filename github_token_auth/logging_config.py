"""
Logging configuration for the GitHub token auth service.

Authentication log lines carry the attempt's outcome (success, fail, error)
and uvicorn access lines for health checks are dropped.
"""

import logging
import logging.config
from typing import Any, Dict

AUTH_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(auth_status)s] %(message)s"


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if ("/healthz" in message or "/health " in message) and "GET" in message:
                return False
        return True


class AuthStatusFilter(logging.Filter):
    """Give every record an ``auth_status`` so AUTH_FORMAT always renders."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "auth_status"):
            record.auth_status = "-"
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Get logging configuration.

    Args:
        level: Level for the github_token_auth loggers

    Returns:
        Dict suitable for logging.config.dictConfig and uvicorn's log_config
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter
            },
            "auth_status_filter": {
                "()": AuthStatusFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "auth": {
                "format": AUTH_FORMAT
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "auth": {
                "class": "logging.StreamHandler",
                "formatter": "auth",
                "stream": "ext://sys.stdout",
                "filters": ["auth_status_filter"]
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False
            },
            "github_token_auth": {
                "handlers": ["auth"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "INFO",
            "handlers": ["default"]
        }
    }
