"""Access token verification."""

from .access_token import AccessTokenService, AuthenticatedUser, InvalidTokenError

__all__ = ["AccessTokenService", "AuthenticatedUser", "InvalidTokenError"]
