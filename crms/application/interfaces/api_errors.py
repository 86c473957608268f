"""
API Errors - Failures raised by remote adapters.

Use cases catch these at their boundary and turn them into notices.
"""

from typing import Optional


class ApiError(Exception):
    """A remote call failed (HTTP error status or transport error)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        """The token was rejected (expired or revoked)."""
        return self.status_code == 401


class ResponseFormatError(ApiError):
    """The call succeeded but the body is not what the contract promises."""
