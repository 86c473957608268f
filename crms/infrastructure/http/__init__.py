# HTTP Package
from .api_client import ApiClient
from .referral_api import HttpReferralApi
from .auth_api import HttpAuthApi

__all__ = ["ApiClient", "HttpReferralApi", "HttpAuthApi"]
