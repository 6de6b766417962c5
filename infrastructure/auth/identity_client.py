"""Authentication provider integration.

This module talks to the provider's REST API (GoTrue-compatible) to create
accounts and exchange email/password credentials for a session.

Functions:
    - IdentityClient.sign_up: Create an account, then sign in with it
    - IdentityClient.sign_in: Exchange credentials for an access token

Architecture:
    Provider access is kept out of the routers so it can be replaced by a stub
    transport in tests.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from utils.config import Settings

logger = logging.getLogger(__name__)

PROVIDER_DISABLED_CODE = "email_provider_disabled"


class AuthProviderError(Exception):
    """Exception raised when the provider rejects a request."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class AuthSession:
    """Session returned by the provider after a successful sign-in."""

    access_token: str
    token_type: str
    expires_in: Optional[int]
    refresh_token: Optional[str]
    user_id: str
    email: Optional[str]


class IdentityClient:
    """Client for the authentication provider.

    Example:
        >>> client = IdentityClient(Settings.from_env())
        >>> session = await client.sign_in("user@example.com", "secret")
        >>> session.user_id
        "provider-user-uuid"
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._settings = settings
        self._transport = transport
        self._timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {"apikey": self._settings.anon_key, "Content-Type": "application/json"}

    async def _post(self, path: str, payload: Dict[str, Any], action: str) -> Dict[str, Any]:
        url = f"{self._settings.auth_api_url}{path}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Authentication provider unreachable during {action}: {e}")
            raise AuthProviderError("Authentication service unavailable", 503) from e

        if response.status_code != 200:
            raise _provider_error(response, action)
        return response.json()

    async def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account and sign in with it straight away.

        Raises:
            AuthProviderError: If the provider rejects the sign-up or sign-in.
        """
        logger.info(f"Attempting to sign up {email}")
        await self._post("/signup", {"email": email, "password": password}, "sign up")
        logger.info(f"Sign up successful for {email}, signing in")
        return await self.sign_in(email, password)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session.

        Raises:
            AuthProviderError: If the credentials are rejected.
        """
        logger.info(f"Attempting to sign in {email}")
        data = await self._post(
            "/token?grant_type=password",
            {"email": email, "password": password},
            "login",
        )
        user = data.get("user") or {}
        return AuthSession(
            access_token=data["access_token"],
            token_type=data.get("token_type", "bearer"),
            expires_in=data.get("expires_in"),
            refresh_token=data.get("refresh_token"),
            user_id=user.get("id", ""),
            email=user.get("email", email),
        )


def _provider_error(response: httpx.Response, action: str) -> AuthProviderError:
    try:
        data = response.json()
    except ValueError:
        data = {}

    if PROVIDER_DISABLED_CODE in response.text:
        message = (
            f"Email {action} is currently disabled. "
            "Please enable it in your authentication provider settings."
        )
    else:
        message = (
            data.get("msg")
            or data.get("error_description")
            or data.get("message")
            or data.get("error")
            or f"Authentication failed ({response.status_code})"
        )

    logger.error(f"{action.capitalize()} error: {response.status_code} {message}")
    status_code = response.status_code if 400 <= response.status_code < 500 else 502
    return AuthProviderError(message, status_code)
