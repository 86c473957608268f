"""
API Client - Thin httpx wrapper for the referral REST API.

Attaches the bearer token of the current session and turns every failure
(HTTP error status or transport error) into an ApiError with a message fit
for the user.
"""

import logging
from typing import Any, Callable, Optional

import httpx

from crms.application.interfaces import ApiError
from crms.domain.value_objects import AuthSession


logger = logging.getLogger(__name__)

API_PREFIX = "/api/user"

SessionProvider = Callable[[], Optional[AuthSession]]


def error_message(response: httpx.Response) -> str:
    """Message from a ``{"message": ...}`` error body, else the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status code {response.status_code}"


class ApiClient:
    """
    Async HTTP client bound to the API origin.

    Paths are relative to ``/api/user``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session_provider: Optional[SessionProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API origin, e.g. ``http://localhost:5000``.
            timeout: Request timeout in seconds.
            session_provider: Returns the current session, if any.
            transport: Custom httpx transport (tests use MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self.session_provider = session_provider
        self._client = httpx.AsyncClient(
            base_url=self.base_url + API_PREFIX,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        session = self.session_provider() if self.session_provider else None
        return session.auth_header if session else {}

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: On transport failure or a non-2xx status.
        """
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = error_message(e.response)
            logger.warning(f"{method} {path} -> {e.response.status_code}: {message}")
            raise ApiError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            message = str(e) or "Network Error"
            logger.warning(f"{method} {path} failed: {message}")
            raise ApiError(message) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
