# Interfaces Package
from .api_errors import ApiError, ResponseFormatError
from .referral_api_port import ReferralApiPort
from .auth_api_port import AuthApiPort
from .session_storage_port import SessionStoragePort, StorageError

__all__ = [
    "ApiError",
    "ResponseFormatError",
    "ReferralApiPort",
    "AuthApiPort",
    "SessionStoragePort",
    "StorageError",
]
