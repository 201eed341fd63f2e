"""
API Authentication Module

Resolves the calling user from the identity provider's bearer tokens.
Tokens are HS256 JWTs whose ``sub`` claim is the user id.
"""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel, Field

from .base import AuthenticationError, ErrorCode


logger = logging.getLogger(__name__)


class AuthMethod(str, Enum):
    """Authentication methods."""

    JWT = "jwt"
    DEV_MODE = "dev_mode"


@dataclass
class AuthContext:
    """Authentication context for a request."""

    method: AuthMethod
    is_authenticated: bool = False

    # Identity
    user_id: Optional[str] = None
    email: Optional[str] = None

    # Metadata
    authenticated_at: datetime = field(default_factory=datetime.utcnow)
    client_ip: Optional[str] = None


class JWTConfig(BaseModel):
    """JWT configuration."""

    secret_key: str = Field(..., description="Secret key for signing")
    algorithm: str = Field(default="HS256", description="Signing algorithm")
    audience: Optional[str] = Field(default="authenticated", description="Token audience")
    access_token_expire_minutes: int = Field(
        default=60,
        description="Access token expiration in minutes",
    )


class TokenAuthenticator:
    """Validates and issues bearer tokens."""

    def __init__(self, jwt_config: JWTConfig):
        self.jwt_config = jwt_config

    def authenticate_jwt(
        self,
        token: str,
        client_ip: Optional[str] = None,
    ) -> AuthContext:
        """
        Authenticate using a JWT token.

        Args:
            token: JWT token string
            client_ip: Client IP address

        Returns:
            Authentication context
        """
        options = {"require": ["sub", "exp"]}
        if not self.jwt_config.audience:
            options["verify_aud"] = False

        try:
            payload = jwt.decode(
                token,
                self.jwt_config.secret_key,
                algorithms=[self.jwt_config.algorithm],
                audience=self.jwt_config.audience,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(
                message="Token has expired",
                code=ErrorCode.EXPIRED_TOKEN,
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise AuthenticationError(
                message="Unauthorized",
                code=ErrorCode.INVALID_TOKEN,
            )

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError(code=ErrorCode.INVALID_TOKEN)

        return AuthContext(
            method=AuthMethod.JWT,
            is_authenticated=True,
            user_id=str(user_id),
            email=payload.get("email"),
            client_ip=client_ip,
        )

    def create_jwt(
        self,
        user_id: str,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT token.

        Args:
            user_id: User ID
            additional_claims: Additional JWT claims
            expires_in: Lifetime, defaulting to the configured expiry

        Returns:
            JWT token string
        """
        now = datetime.utcnow()
        lifetime = expires_in or timedelta(minutes=self.jwt_config.access_token_expire_minutes)

        payload: Dict[str, Any] = {
            "sub": user_id,
            "iat": now,
            "exp": now + lifetime,
            "jti": secrets.token_hex(16),
        }
        if self.jwt_config.audience:
            payload["aud"] = self.jwt_config.audience

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(
            payload,
            self.jwt_config.secret_key,
            algorithm=self.jwt_config.algorithm,
        )


__all__ = [
    "AuthMethod",
    "AuthContext",
    "JWTConfig",
    "TokenAuthenticator",
]
