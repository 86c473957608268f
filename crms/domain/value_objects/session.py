"""
AuthSession Value Object - Token and user persisted as one unit.
"""

from dataclasses import dataclass

from crms.domain.entities import User


@dataclass(frozen=True)
class AuthSession:
    """
    Immutable pairing of a bearer token and the user it belongs to.

    A session never exists with only one half: both fields are required.

    Attributes:
        token: Opaque bearer token issued by the API
        user: The authenticated user
    """

    token: str
    user: User

    def __post_init__(self) -> None:
        """Validate session."""
        if not self.token:
            raise ValueError("token is required")
        if self.user is None:
            raise ValueError("user is required")

    @property
    def is_admin(self) -> bool:
        """Check if the session belongs to an admin."""
        return self.user.is_admin

    @property
    def auth_header(self) -> dict[str, str]:
        """Authorization header for API calls."""
        return {"Authorization": f"Bearer {self.token}"}
