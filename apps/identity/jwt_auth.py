"""
JWT Authentication utilities.

Issues HS256-signed bearer tokens for users and resolves the user id back
from an incoming Authorization header.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from django.conf import settings
from django.http import HttpRequest

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


@dataclass(frozen=True)
class JwtSettings:
    """Snapshot of the JWT configuration."""
    secret_key: str
    issuer: str
    audience: str
    expiration_minutes: int = 60

    @property
    def expires_in_seconds(self) -> int:
        return self.expiration_minutes * 60


def get_jwt_settings() -> JwtSettings:
    """
    Build the JWT settings from Django settings.

    Read on every call (not at import time) so override_settings works in tests.
    """
    return JwtSettings(
        secret_key=settings.JWT_SECRET_KEY,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        expiration_minutes=int(settings.JWT_EXPIRATION_MINUTES),
    )


def create_access_token(user_id: int, email: str, jwt_settings: Optional[JwtSettings] = None) -> str:
    """
    Create a signed access token.

    Claims: sub (user id), email, jti (unique token id), iss, aud, iat, exp.
    """
    config = jwt_settings or get_jwt_settings()
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'email': email,
        'jti': str(uuid.uuid4()),
        'iss': config.issuer,
        'aud': config.audience,
        'iat': now,
        'exp': now + timedelta(minutes=config.expiration_minutes),
    }
    return jwt.encode(payload, config.secret_key, algorithm=JWT_ALGORITHM)


def decode_token(token: str, jwt_settings: Optional[JwtSettings] = None) -> Optional[dict]:
    """
    Decode and validate a JWT token (signature, expiry, issuer, audience).

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    config = jwt_settings or get_jwt_settings()
    try:
        return jwt.decode(
            token,
            config.secret_key,
            algorithms=[JWT_ALGORITHM],
            audience=config.audience,
            issuer=config.issuer,
            options={'require': ['sub', 'exp']},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[int]:
    """
    Extract the user id from a valid token.

    Returns:
        The integer user id if the token is valid, None otherwise.
    """
    payload = decode_token(token)
    if not payload:
        return None
    try:
        return int(payload['sub'])
    except (KeyError, TypeError, ValueError):
        return None


def extract_bearer_token(request: HttpRequest) -> Optional[str]:
    """Read the token from an `Authorization: Bearer <token>` header."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.strip().partition(' ')
    if scheme.lower() != 'bearer':
        return None
    return token.strip() or None
