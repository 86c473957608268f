"""
User Entity - An authenticated account of the referral system.
"""

import time
from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    """Account role; decides which views are reachable."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """
    User entity as returned by the login endpoint.

    Attributes:
        id: Account identifier (``id`` or ``_id`` on the wire)
        name: Display name
        email: Login email
        role: Account role
    """

    id: str
    name: str = ""
    email: str = ""
    role: UserRole = UserRole.USER

    def __post_init__(self) -> None:
        """Normalize role given as string."""
        if isinstance(self.role, str):
            object.__setattr__(self, "role", UserRole(self.role))

    @property
    def is_admin(self) -> bool:
        """Check if user has the admin role."""
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        """Convert to dictionary for persistence."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """
        Create User from a stored or wire dictionary.

        Missing ids fall back to a time-based placeholder and missing roles
        to ``user``, matching what the server omits for older accounts.
        """
        user_id = data.get("id") or data.get("_id") or str(int(time.time() * 1000))
        return cls(
            id=str(user_id),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=UserRole(data.get("role") or UserRole.USER.value),
        )
