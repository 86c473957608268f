"""
Route Guard - Decides which path is rendered for the current session.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from crms.domain.entities import User

if TYPE_CHECKING:
    from .auth_session import AuthSessionManager


logger = logging.getLogger(__name__)

LANDING = "/"
LOGIN = "/login"
REGISTER = "/register"
RESET_PASSWORD = "/reset-password"
CHANGE_PASSWORD = "/change-password"
HOME = "/home"
DASHBOARD = "/dashboard"
REFERRAL_FORM = "/referral"
ADMIN = "/admin"
ADMIN_CANDIDATES = "/admin/candidates"
ADMIN_ANALYTICS = "/admin/analytics"

GUEST_ONLY = frozenset({LOGIN, REGISTER, RESET_PASSWORD})
PUBLIC = frozenset({CHANGE_PASSWORD})
AUTH_REQUIRED = frozenset({DASHBOARD, REFERRAL_FORM, HOME})
ADMIN_ONLY = frozenset({ADMIN, ADMIN_CANDIDATES, ADMIN_ANALYTICS})

MAX_REDIRECTS = 10


def home_path_for(user: Optional[User]) -> str:
    """Landing page of a logged-in user, by role."""
    if user is not None and user.is_admin:
        return ADMIN
    return DASHBOARD


def strip_query(route: str) -> str:
    """Path part of a route ("/change-password?token=x" -> "/change-password")."""
    path = route.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or LANDING


@dataclass(frozen=True)
class GuardDecision:
    """Either render the path or go to ``redirect``."""
    allowed: bool
    redirect: Optional[str] = None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls(allowed=True)

    @classmethod
    def redirect_to(cls, path: str) -> "GuardDecision":
        return cls(allowed=False, redirect=path)


class RouteGuard:
    """Access rules for the app's paths, based on the auth session."""

    def __init__(self, auth: "AuthSessionManager") -> None:
        self.auth = auth

    def check(self, route: str) -> GuardDecision:
        """Decide whether ``route`` may be rendered right now."""
        path = strip_query(route)
        authenticated = self.auth.is_authenticated
        user = self.auth.user

        if path in PUBLIC:
            return GuardDecision.allow()

        if path in GUEST_ONLY:
            return GuardDecision.redirect_to(LANDING) if authenticated else GuardDecision.allow()

        if path == LANDING:
            return GuardDecision.redirect_to(HOME) if authenticated else GuardDecision.allow()

        if path in AUTH_REQUIRED:
            if not authenticated:
                return GuardDecision.redirect_to(LOGIN)
            if path == HOME:
                return GuardDecision.redirect_to(home_path_for(user))
            return GuardDecision.allow()

        if path in ADMIN_ONLY:
            if not authenticated:
                return GuardDecision.redirect_to(LOGIN)
            if not user.is_admin:
                return GuardDecision.redirect_to(home_path_for(user))
            return GuardDecision.allow()

        return GuardDecision.redirect_to(LANDING if authenticated else LOGIN)

    def resolve(self, route: str) -> str:
        """
        Follow redirects until a renderable path is reached.

        The query string survives only when the requested path itself is
        rendered.
        """
        current = route
        for _ in range(MAX_REDIRECTS):
            decision = self.check(current)
            if decision.allowed:
                return current
            logger.debug(f"Route {current} -> {decision.redirect}")
            current = decision.redirect
        raise RuntimeError(f"Redirect loop while resolving {route}")
