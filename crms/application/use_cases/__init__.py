# Use Cases Package
from .flash_messages import ActionResult, FlashMessages, NoticeLevel
from .candidate_store import CandidateStore
from .analytics_fetcher import AnalyticsFetcher
from .auth_session import AuthSessionManager, AuthState
from .route_guard import GuardDecision, RouteGuard, home_path_for

__all__ = [
    "ActionResult",
    "FlashMessages",
    "NoticeLevel",
    "CandidateStore",
    "AnalyticsFetcher",
    "AuthSessionManager",
    "AuthState",
    "GuardDecision",
    "RouteGuard",
    "home_path_for",
]
