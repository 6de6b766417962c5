"""Client-side session held after sign-in."""

from dataclasses import dataclass
from typing import Dict, Optional

from domain.services.session_guard import require_identity


@dataclass
class Session:
    """Access token and identity returned by the sign-in endpoints.

    Attributes:
        access_token (Optional[str]): Bearer token, None when signed out.
        user_id (Optional[str]): Identity of the signed-in user.
        email (Optional[str]): Email of the signed-in user.

    Example:
        >>> session = Session()
        >>> session.require_user_id()
        Traceback (most recent call last):
        ...
        AuthenticationRequiredError: Please sign in
    """

    access_token: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user_id)

    def require_user_id(self) -> str:
        """Return the signed-in identity.

        Raises:
            AuthenticationRequiredError: If no session is held.
        """
        return require_identity(self.user_id if self.access_token else None)

    def auth_headers(self) -> Dict[str, str]:
        self.require_user_id()
        return {"Authorization": f"Bearer {self.access_token}"}

    def clear(self) -> None:
        self.access_token = None
        self.user_id = None
        self.email = None
