"""Session guard shared by the service and the client.

Every save or upload action resolves the caller's identity first; without
one the action stops here and nothing is written.
"""

from typing import Optional

SIGN_IN_MESSAGE = "Please sign in"


class AuthenticationRequiredError(Exception):
    """Exception raised when an action needs a session and none is present."""

    def __init__(self, message: str = SIGN_IN_MESSAGE):
        super().__init__(message)
        self.message = message


def require_identity(user_id: Optional[str]) -> str:
    """Return ``user_id`` or raise when there is no signed-in user.

    Raises:
        AuthenticationRequiredError: If ``user_id`` is empty.
    """
    if not user_id:
        raise AuthenticationRequiredError()
    return user_id
