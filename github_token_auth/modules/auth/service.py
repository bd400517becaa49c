"""
Authentication outcome types.

This module provides:
- A standardized result for a single authentication attempt
- Exactly one of success, fail or error per attempt
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class AuthStatus(str, Enum):
    """Terminal state of an authentication attempt."""

    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


@dataclass
class AuthOutcome:
    """Standardized authentication outcome."""
    status: AuthStatus
    user: Any = None
    info: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, user: Any, info: Any = None) -> "AuthOutcome":
        return cls(status=AuthStatus.SUCCESS, user=user, info=info)

    @classmethod
    def fail(cls, info: Any = None) -> "AuthOutcome":
        return cls(status=AuthStatus.FAIL, info=info)

    @classmethod
    def from_error(cls, error: BaseException) -> "AuthOutcome":
        return cls(status=AuthStatus.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.status is AuthStatus.SUCCESS

    @property
    def message(self) -> Optional[str]:
        """Human readable reason for a fail or error outcome."""
        if self.status is AuthStatus.ERROR:
            return str(self.error) if self.error else None
        if self.status is AuthStatus.FAIL:
            if isinstance(self.info, dict):
                return self.info.get("message")
            if isinstance(self.info, str):
                return self.info
        return None
