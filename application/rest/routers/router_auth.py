import logging

from application.rest.schemas.input.auth_input import CredentialsInput
from application.rest.schemas.output.auth_output import SessionResponse
from application.rest.schemas.output.common_output import ErrorResponse
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.auth.identity_client import (
    AuthProviderError,
    AuthSession,
    IdentityClient,
)
from utils.dependencies import get_identity_client

logger = logging.getLogger(__name__)
router = APIRouter()

AUTH_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ErrorResponse,
        "description": "Rejected by the authentication provider.",
        "content": {
            "application/json": {"example": {"detail": "Invalid login credentials"}}
        },
    },
    status.HTTP_502_BAD_GATEWAY: {
        "model": ErrorResponse,
        "description": "The authentication provider answered with an error.",
    },
    status.HTTP_503_SERVICE_UNAVAILABLE: {
        "model": ErrorResponse,
        "description": "The authentication provider is unreachable.",
    },
}


def _to_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        expires_in=session.expires_in,
        refresh_token=session.refresh_token,
        user_id=session.user_id,
        email=session.email,
    )


@router.post(
    path="/auth/sign-up",
    description="Create an account and sign in with it.",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_RESPONSES,
)
async def sign_up(
    credentials: CredentialsInput,
    identity_client: IdentityClient = Depends(get_identity_client),
) -> SessionResponse:
    """Register with email and password, then return the new session.

    Raises:
        HTTPException: With the provider's status and message on failure.
    """
    try:
        session = await identity_client.sign_up(credentials.email, credentials.password)
    except AuthProviderError as e:
        logger.warning(f"Sign-up failed for {credentials.email}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    logger.info(f"User {session.user_id} signed up")
    return _to_response(session)


@router.post(
    path="/auth/sign-in",
    description="Sign in with email and password.",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    responses=AUTH_RESPONSES,
)
async def sign_in(
    credentials: CredentialsInput,
    identity_client: IdentityClient = Depends(get_identity_client),
) -> SessionResponse:
    try:
        session = await identity_client.sign_in(credentials.email, credentials.password)
    except AuthProviderError as e:
        logger.warning(f"Sign-in failed for {credentials.email}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    return _to_response(session)
