"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from app.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """Raised when a bearer token cannot be verified or its claims read."""


class TokenVerifier(ABC):
    """Turns a bearer token into identity claims, independent of the provider."""

    @abstractmethod
    def verify_token(self, token: str) -> AuthPrincipal:
        """Verify token and return its principal, role and hotel claims."""


__all__ = ["AuthVerificationError", "TokenVerifier"]
