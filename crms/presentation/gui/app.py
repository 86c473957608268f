"""
CRMS Web Application - Flet views, routing and state wiring.

Every route change is resolved through the RouteGuard first; the view for
the resolved path is then rebuilt from the application context. Store,
auth and analytics listeners refresh the dynamic parts in place.
"""

import logging
from typing import Any, Optional
from urllib.parse import parse_qs, urlsplit

import flet as ft

from crms.application.context import AppContext
from crms.application.use_cases import route_guard as routes
from crms.config.settings import Settings
from crms.domain.entities import ReferrerRef
from .components import (
    AnalyticsPanel,
    CandidateList,
    LoginPanel,
    NoticeBar,
    create_change_password_form,
    create_nav_bar,
    create_referral_form,
    create_register_form,
    create_reset_request_form,
    create_stats_panel,
)
from .styles import Theme


logger = logging.getLogger(__name__)


def _heading(title: str, subtitle: str = "") -> ft.Column:
    parts: list[Any] = [ft.Text(title, size=28, weight=ft.FontWeight.BOLD)]
    if subtitle:
        parts.append(ft.Text(subtitle, color=Theme.TEXT_SECONDARY))
    return ft.Column(parts, spacing=Theme.SPACING_XS)


class Router:
    """Builds one ft.View per resolved route and keeps it in sync with state."""

    def __init__(self, page: ft.Page, ctx: AppContext):
        self.page = page
        self.ctx = ctx
        self.notices = NoticeBar()

        # Dynamic parts of the current view, None when not shown
        self._list: Optional[CandidateList] = None
        self._stats: Optional[ft.Container] = None
        self._analytics: Optional[AnalyticsPanel] = None
        self._login: Optional[LoginPanel] = None

        ctx.auth.add_listener(self.refresh)
        ctx.store.add_listener(self.refresh)
        ctx.analytics.add_listener(self.refresh)

    # ==================== Navigation ====================

    def go(self, path: str) -> None:
        self.page.go(path)

    async def on_route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or routes.LANDING
        target = self.ctx.guard.resolve(route)
        if target != route:
            logger.info(f"Redirect {route} -> {target}")
            self.page.go(target)
            return
        await self.show(route)

    async def show(self, route: str) -> None:
        """Replace the page content with the view for ``route``."""
        path = routes.strip_query(route)
        self._list = self._stats = self._analytics = self._login = None

        builders = {
            routes.LANDING: self._landing,
            routes.LOGIN: self._login_view,
            routes.REGISTER: self._register_view,
            routes.RESET_PASSWORD: self._reset_view,
            routes.CHANGE_PASSWORD: self._change_password_view,
            routes.DASHBOARD: self._user_dashboard,
            routes.REFERRAL_FORM: self._referral_view,
            routes.ADMIN: self._admin_dashboard,
            routes.ADMIN_CANDIDATES: self._admin_candidates,
            routes.ADMIN_ANALYTICS: self._analytics_view,
        }
        body = builders[path](route)

        nav, _ = create_nav_bar(self.ctx.auth.user, self.go, self._logout)
        self.page.views.clear()
        self.page.views.append(ft.View(
            route,
            [
                nav,
                ft.Container(
                    content=ft.Column([self.notices.column, body], spacing=Theme.SPACING_MD),
                    padding=Theme.SPACING_LG,
                ),
            ],
            bgcolor=Theme.BG,
            scroll=ft.ScrollMode.AUTO,
            padding=0,
        ))
        self.refresh()
        await self._load(path)

    async def _load(self, path: str) -> None:
        """Fetch what the freshly shown view needs."""
        user = self.ctx.auth.user
        if path in (routes.DASHBOARD, routes.ADMIN, routes.ADMIN_CANDIDATES) and user is not None:
            await self.ctx.store.fetch(user.role)
        elif path == routes.ADMIN_ANALYTICS:
            await self.ctx.analytics.fetch_data()
        elif path == routes.LOGIN:
            notice = await self.ctx.auth.consume_registration_notice()
            if notice:
                self.ctx.auth.messages.set_success(notice)

    def refresh(self) -> None:
        """Re-render the dynamic parts after a state change."""
        self.notices.show(self.ctx.auth.messages, self.ctx.store.messages, self.ctx.analytics.messages)
        if self._list is not None:
            self._list.render()
        if self._stats is not None:
            self._stats.content = create_stats_panel(self.ctx.store.stats())
        if self._analytics is not None:
            self._analytics.render()
        if self._login is not None:
            self._login.set_busy(self.ctx.auth.loading)
        try:
            self.page.update()
        except Exception as e:
            # Listeners may fire after the session disconnected
            logger.debug(f"Page update skipped: {e}")

    async def _logout(self) -> None:
        result = await self.ctx.logout()
        self.go(result.redirect_to or routes.LOGIN)

    # ==================== Guest views ====================

    def _landing(self, route: str) -> ft.Control:
        return ft.Container(
            content=ft.Column([
                ft.Text("Refer great people. Track every referral.", size=34, weight=ft.FontWeight.BOLD),
                ft.Text(
                    "Submit candidates for open roles and follow their progress from review to hire.",
                    size=16,
                    color=Theme.TEXT_SECONDARY,
                ),
                ft.Row([
                    ft.ElevatedButton("Get Started", style=Theme.button_style("primary"),
                                      on_click=lambda e: self.go(routes.REGISTER)),
                    ft.OutlinedButton("Sign In", on_click=lambda e: self.go(routes.LOGIN)),
                ], spacing=Theme.SPACING_MD),
            ], spacing=Theme.SPACING_LG),
            padding=Theme.SPACING_XL,
        )

    def _login_view(self, route: str) -> ft.Control:
        async def submit(email: str, password: str) -> None:
            result = await self.ctx.auth.login(email, password)
            if result.ok:
                self.go(result.redirect_to)

        self._login = LoginPanel(submit, self.go)
        return ft.Row([self._login.container], alignment=ft.MainAxisAlignment.CENTER)

    def _register_view(self, route: str) -> ft.Control:
        async def submit(**fields: str) -> None:
            result = await self.ctx.auth.register(**fields)
            if result.ok:
                self.go(result.redirect_to)

        container, _ = create_register_form(submit, self.go)
        return ft.Row([container], alignment=ft.MainAxisAlignment.CENTER)

    def _reset_view(self, route: str) -> ft.Control:
        async def submit(email: str) -> None:
            await self.ctx.auth.request_password_reset(email)

        container, _ = create_reset_request_form(submit, self.go)
        return ft.Row([container], alignment=ft.MainAxisAlignment.CENTER)

    def _change_password_view(self, route: str) -> ft.Control:
        token = parse_qs(urlsplit(route).query).get("token", [""])[0]

        async def submit(new_password: str, reset_token: str, confirm: Optional[str]) -> None:
            result = await self.ctx.auth.change_password(new_password, reset_token, confirm)
            if result.ok:
                self.go(result.redirect_to)

        container, _ = create_change_password_form(token, submit)
        return ft.Row([container], alignment=ft.MainAxisAlignment.CENTER)

    # ==================== User views ====================

    def _user_dashboard(self, route: str) -> ft.Control:
        self._list = CandidateList(self.page, self.ctx.store, is_admin=False)
        return ft.Column([
            ft.Row([
                _heading("My Referrals Dashboard", "Track the status of your candidate referrals"),
                ft.ElevatedButton("Refer a Candidate", icon=ft.Icons.PERSON_ADD,
                                  style=Theme.button_style("primary"),
                                  on_click=lambda e: self.go(routes.REFERRAL_FORM)),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            self._list.container,
        ], spacing=Theme.SPACING_LG)

    def _referral_view(self, route: str) -> ft.Control:
        user = self.ctx.auth.user

        async def submit(fields: dict) -> bool:
            referrer = ReferrerRef(id=user.id, name=user.name, email=user.email) if user else None
            result = await self.ctx.store.add(fields, referrer=referrer)
            return result.ok

        container, _ = create_referral_form(self.page, submit, self.ctx.settings.upload_dir)
        return ft.Row([container], alignment=ft.MainAxisAlignment.CENTER)

    # ==================== Admin views ====================

    def _admin_dashboard(self, route: str) -> ft.Control:
        self._stats = ft.Container()
        self._list = CandidateList(self.page, self.ctx.store, is_admin=True)
        return ft.Column([
            _heading("Admin Dashboard", "Overview of all candidate referrals"),
            self._stats,
            ft.Row([
                ft.OutlinedButton("Manage Candidates", icon=ft.Icons.PEOPLE,
                                  on_click=lambda e: self.go(routes.ADMIN_CANDIDATES)),
                ft.OutlinedButton("View Analytics", icon=ft.Icons.INSIGHTS,
                                  on_click=lambda e: self.go(routes.ADMIN_ANALYTICS)),
            ], spacing=Theme.SPACING_MD),
            self._list.container,
        ], spacing=Theme.SPACING_LG)

    def _admin_candidates(self, route: str) -> ft.Control:
        self._list = CandidateList(self.page, self.ctx.store, is_admin=True)
        return ft.Column([
            _heading("Candidate List", "Review, update and remove referrals"),
            self._list.container,
        ], spacing=Theme.SPACING_LG)

    def _analytics_view(self, route: str) -> ft.Control:
        self._analytics = AnalyticsPanel(self.ctx.analytics)
        return ft.Column([
            _heading("Referral Analytics"),
            self._analytics.container,
        ], spacing=Theme.SPACING_LG)


async def build_app(page: ft.Page, settings: Settings) -> AppContext:
    """Build the CRMS application for one browser session."""

    # === PAGE CONFIGURATION ===
    page.title = "Candidate Referral Management System"
    page.theme = Theme.get_flet_theme()
    page.theme_mode = ft.ThemeMode.LIGHT
    page.bgcolor = Theme.BG

    # === STATE ===
    ctx = AppContext(settings)
    await ctx.initialize()

    router = Router(page, ctx)
    page.on_route_change = router.on_route_change

    async def _on_disconnect(e) -> None:
        await ctx.close()

    page.on_disconnect = _on_disconnect

    page.go(page.route or routes.LANDING)
    return ctx
