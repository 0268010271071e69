"""Verification of access tokens issued by the auth service."""

import time
from typing import Any

from authlib.jose import JoseError, jwt
from loguru import logger
from pydantic import BaseModel, Field

from src.storefront.runtime.config.config_data import AuthConfig


class InvalidTokenError(Exception):
    """Raised when an access token is missing claims, expired or badly signed."""


class AuthenticatedUser(BaseModel):
    """Identity extracted from a verified access token."""

    user_id: str
    email: str | None = None
    role: str = "USER"
    claims: dict[str, Any] = Field(default_factory=dict, repr=False)


class AccessTokenService:
    """Verify (and, for tooling and tests, issue) HMAC-signed access tokens."""

    def __init__(self, config: AuthConfig) -> None:
        self._config = config

    def _secret(self) -> bytes:
        if not self._config.jwt_secret:
            raise InvalidTokenError("Access token secret is not configured")
        return self._config.jwt_secret.encode("utf-8")

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            claims = jwt.decode(token, self._secret())
            claims.validate(now=int(time.time()), leeway=self._config.clock_skew)
        except JoseError as e:
            logger.debug("Access token rejected: {}", e)
            raise InvalidTokenError(str(e)) from e
        except ValueError as e:
            raise InvalidTokenError("Malformed access token") from e

        if claims.header.get("alg") != self._config.algorithm:
            raise InvalidTokenError("Disallowed JWT algorithm")

        user_id = claims.get("userId") or claims.get("sub")
        if not user_id:
            raise InvalidTokenError("Access token has no subject")
        if claims.get("exp") is None:
            raise InvalidTokenError("Access token has no expiry")

        return AuthenticatedUser(
            user_id=str(user_id),
            email=claims.get("email"),
            role=claims.get("role") or "USER",
            claims=dict(claims),
        )

    def issue(
        self,
        user_id: str,
        role: str = "USER",
        email: str | None = None,
        expires_in_seconds: int = 3600,
    ) -> str:
        now = int(time.time())
        payload = {
            "userId": user_id,
            "role": role,
            "iat": now,
            "exp": now + expires_in_seconds,
        }
        if email:
            payload["email"] = email
        token = jwt.encode({"alg": self._config.algorithm}, payload, self._secret())
        return token.decode("utf-8")
