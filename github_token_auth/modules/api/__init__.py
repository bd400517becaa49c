"""
API Module - response models for the demo service.
"""

from .models import AuthResponse, EmailModel, NameModel, ProfileResponse

__all__ = ["AuthResponse", "EmailModel", "NameModel", "ProfileResponse"]
