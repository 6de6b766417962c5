"""Account input schemas for sign-up and sign-in."""

from pydantic import BaseModel, Field


class CredentialsInput(BaseModel):
    """Email and password sent to the authentication provider.

    Example:
        >>> CredentialsInput(email="user@example.com", password="secret123")
    """

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6)
