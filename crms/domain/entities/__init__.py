# Domain Entities
from .referral import Referral, ReferralStatus, ReferrerRef
from .user import User, UserRole

__all__ = ["Referral", "ReferralStatus", "ReferrerRef", "User", "UserRole"]
