import json

import httpx
import pytest
from infrastructure.auth.identity_client import AuthProviderError, IdentityClient

TOKEN_RESPONSE = {
    "access_token": "access",
    "token_type": "bearer",
    "expires_in": 3600,
    "refresh_token": "refresh",
    "user": {"id": "user-1", "email": "ada@example.com"},
}


async def test_sign_up_then_sign_in(settings):
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {"email": "ada@example.com", "password": "secret123"}
        if request.url.path.endswith("/signup"):
            return httpx.Response(200, json={"id": "user-1"})
        assert request.url.params["grant_type"] == "password"
        return httpx.Response(200, json=TOKEN_RESPONSE)

    client = IdentityClient(settings, transport=httpx.MockTransport(handler))

    session = await client.sign_up("ada@example.com", "secret123")

    assert paths == ["/auth/v1/signup", "/auth/v1/token"]
    assert session.user_id == "user-1"
    assert session.access_token == "access"


async def test_invalid_credentials_keep_provider_message(settings):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )
    )
    client = IdentityClient(settings, transport=transport)

    with pytest.raises(AuthProviderError) as exc_info:
        await client.sign_in("ada@example.com", "wrong-password")

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.status_code == 400


async def test_disabled_email_provider_is_explained(settings):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            422, json={"error_code": "email_provider_disabled", "msg": "Email signups are disabled"}
        )
    )
    client = IdentityClient(settings, transport=transport)

    with pytest.raises(AuthProviderError) as exc_info:
        await client.sign_up("ada@example.com", "secret123")

    assert exc_info.value.message.startswith("Email sign up is currently disabled.")


async def test_unreachable_provider(settings):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = IdentityClient(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(AuthProviderError) as exc_info:
        await client.sign_in("ada@example.com", "secret123")

    assert exc_info.value.status_code == 503
