"""
GitHub Token Auth - bearer token authentication against GitHub

Authenticates requests carrying a GitHub OAuth2 access token by loading
the GitHub user profile and delegating the decision to the application.

Architecture:
- Each module is self-contained with clear interfaces
- The transport and verify callback are injected
- All communication through defined interfaces

Modules:
- auth: Credential extraction, profile normalization, strategy
- middleware: FastAPI integration
"""

__version__ = "1.0.0"
