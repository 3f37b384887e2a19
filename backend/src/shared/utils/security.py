"""
Security Utilities

JWT token handling. Tokens are issued by the identity provider; this
service only verifies them. create_access_token() exists for local
development and tests.

Token Payload:
==============
    {
        "user_id": "0b6f...",
        "email": "user@example.com",
        "role": "user",          ← "admin" unlocks cache maintenance
        "exp": 1735689600,
        "iat": 1735084800
    }

Usage:
======
    from src.shared.utils.security import SecurityUtils

    token = SecurityUtils.create_access_token(
        data={"user_id": "123", "email": "a@b.c", "role": "user"},
        secret_key=settings.SECRET_KEY,
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import timedelta
from typing import Optional

import jwt

from src.shared.utils.time import utcnow


class SecurityUtils:
    """JWT token creation and validation."""

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (user_id, email, role)
            secret_key: Secret key for signing
            expires_delta: Token expiration time (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        now = utcnow()
        to_encode = data.copy()
        to_encode.update({
            "exp": now + (expires_delta or timedelta(days=7)),
            "iat": now,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify JWT token.

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
