"""
Auth API Port - Abstract interface for the account endpoints.
"""

from abc import ABC, abstractmethod

from crms.domain.value_objects import AuthSession


class AuthApiPort(ABC):
    """Abstract interface for authentication calls."""

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""
        pass

    @abstractmethod
    async def register(self, payload: dict) -> None:
        """Create an account."""
        pass

    @abstractmethod
    async def request_password_reset(self, email: str) -> None:
        """Ask the API to email a reset link."""
        pass

    @abstractmethod
    async def change_password(self, new_password: str, reset_token: str) -> None:
        """Set a new password with a reset token."""
        pass
