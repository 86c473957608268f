# Domain Services
from .ttl_cache import TTLCache, CacheEntry, DEFAULT_TTL_SECONDS
from .referral_stats import ReferralStats, Page, calculate_stats, paginate

__all__ = [
    "TTLCache",
    "CacheEntry",
    "DEFAULT_TTL_SECONDS",
    "ReferralStats",
    "Page",
    "calculate_stats",
    "paginate",
]
