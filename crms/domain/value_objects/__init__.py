# Domain Value Objects
from .session import AuthSession
from .search_filter import SearchFilter
from .referral_input import ReferralInput
from .analytics import (
    AnalyticsFormatError,
    AnalyticsPayload,
    ChartPayload,
    StatsPayload,
    parse_analytics,
)

__all__ = [
    "AuthSession",
    "SearchFilter",
    "ReferralInput",
    "AnalyticsFormatError",
    "AnalyticsPayload",
    "ChartPayload",
    "StatsPayload",
    "parse_analytics",
]
