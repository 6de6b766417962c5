"""Account output schemas returned after sign-up and sign-in."""

from typing import Optional

from pydantic import BaseModel


class SessionResponse(BaseModel):
    """Session issued by the authentication provider.

    Attributes:
        access_token (str): Bearer token sent on every subsequent request.
        token_type (str): Usually ``bearer``.
        expires_in (int, optional): Lifetime of the access token in seconds.
        refresh_token (str, optional): Token used to renew the session.
        user_id (str): Identity of the signed-in user.
        email (str, optional): Email of the signed-in user.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    user_id: str
    email: Optional[str] = None
