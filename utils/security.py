"""Session guard: resolves the caller's identity from the bearer token.

Functions:
    - resolve_user_id: Verify a bearer token and return its subject
    - get_current_user_id: FastAPI dependency answering 401 without a session

Architecture:
    Tokens are issued by the authentication provider. They are verified with
    a shared secret (HS256) or, when ``AUTH_JWKS_URL`` is set, against the
    provider's published signing keys (RS256).
"""

import logging
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from domain.services.session_guard import AuthenticationRequiredError, require_identity
from jwt import PyJWKClient

from .config import Settings
from .dependencies import get_settings

logger = logging.getLogger(__name__)

# auto_error is off so a missing header yields our own message
security = HTTPBearer(auto_error=False)


@lru_cache(maxsize=4)
def _jwks_client(jwks_url: str) -> PyJWKClient:
    return PyJWKClient(jwks_url)


def decode_token(token: str, settings: Settings) -> dict:
    """Verify ``token`` and return its claims.

    Raises:
        jwt.PyJWTError: If the token is invalid, expired or cannot be verified.
    """
    if settings.jwks_url:
        key = _jwks_client(settings.jwks_url).get_signing_key_from_jwt(token).key
        algorithms = ["RS256"]
    elif settings.jwt_secret:
        key = settings.jwt_secret
        algorithms = [settings.jwt_algorithm]
    else:
        raise jwt.InvalidTokenError("Session verification is not configured")

    return jwt.decode(
        token,
        key,
        algorithms=algorithms,
        audience=settings.jwt_audience,
        options={"verify_aud": settings.jwt_audience is not None},
    )


def resolve_user_id(
    credentials: Optional[HTTPAuthorizationCredentials], settings: Settings
) -> str:
    """Return the identity carried by the bearer token.

    Raises:
        AuthenticationRequiredError: If there is no valid session.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError()

    try:
        payload = decode_token(credentials.credentials, settings)
    except jwt.PyJWTError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationRequiredError() from e

    subject = payload.get("sub")
    if not subject:
        logger.warning("Token without subject rejected")
    return require_identity(str(subject) if subject else None)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Resolve the caller's identity or answer 401.

    Raises:
        HTTPException: 401 "Please sign in" if no valid session is present.

    Example:
        >>> user_id = get_current_user_id(credentials, settings)
        >>> print(user_id)
        "provider-user-uuid"
    """
    try:
        return resolve_user_id(credentials, settings)
    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
