"""
API response models.

These models define the JSON shape returned by the demo service for an
authenticated GitHub user.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..auth.profile import NormalizedProfile


class EmailModel(BaseModel):
    """Email address attached to a profile."""

    value: str
    primary: Optional[bool] = None
    verified: Optional[bool] = None


class NameModel(BaseModel):
    family_name: str = ""
    given_name: str = ""


class ProfileResponse(BaseModel):
    """Normalized GitHub profile."""

    provider: str = Field(..., description="Identity provider, always 'github'")
    id: Any = Field(..., description="GitHub user id")
    username: Optional[str] = Field(None, description="GitHub login")
    display_name: str = ""
    name: NameModel = Field(default_factory=NameModel)
    emails: List[EmailModel] = Field(default_factory=list)
    photos: List[Any] = Field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: NormalizedProfile) -> "ProfileResponse":
        return cls(**profile.to_dict())


class AuthResponse(BaseModel):
    """Result of a successful token authentication."""

    authenticated: bool = True
    strategy: str
    profile: Optional[ProfileResponse] = None
    info: Optional[Dict[str, Any]] = None
