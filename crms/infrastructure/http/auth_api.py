"""
HTTP Auth API - AuthApiPort over the account endpoints.
"""

from typing import Any

from crms.application.interfaces import AuthApiPort, ResponseFormatError
from crms.domain.entities import User
from crms.domain.value_objects import AuthSession

from .api_client import ApiClient


def parse_login(body: Any) -> AuthSession:
    """
    Build a session from a ``{user, token}`` login response.

    Raises:
        ResponseFormatError: If either half is missing.
    """
    if not isinstance(body, dict):
        raise ResponseFormatError("Invalid login response")
    token = body.get("token")
    user_data = body.get("user")
    if not token or not isinstance(user_data, dict):
        raise ResponseFormatError("Invalid login response")
    try:
        return AuthSession(token=str(token), user=User.from_dict(user_data))
    except ValueError as e:
        raise ResponseFormatError(f"Invalid user in login response: {e}") from e


class HttpAuthApi(AuthApiPort):
    """Account endpoints under ``/api/user``."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def login(self, email: str, password: str) -> AuthSession:
        body = await self.client.post("/login", json={"email": email, "password": password})
        return parse_login(body)

    async def register(self, payload: dict) -> None:
        await self.client.post("/signup", json=payload)

    async def request_password_reset(self, email: str) -> None:
        await self.client.post("/reset-password", json={"email": email})

    async def change_password(self, new_password: str, reset_token: str) -> None:
        await self.client.post(
            "/request-password-change",
            params={"token": reset_token},
            json={"newPassword": new_password},
        )
