"""
Nav Bar Component

Top bar with role-dependent links and the logout button.
"""

import flet as ft
from typing import Awaitable, Callable, Optional

from crms.application.use_cases import route_guard as routes
from crms.domain.entities import User
from ..styles import Theme


def _links_for(user: Optional[User]) -> list[tuple[str, str]]:
    if user is None:
        return [("Login", routes.LOGIN), ("Register", routes.REGISTER)]
    if user.is_admin:
        return [
            ("Dashboard", routes.ADMIN),
            ("Candidates", routes.ADMIN_CANDIDATES),
            ("Analytics", routes.ADMIN_ANALYTICS),
        ]
    return [("My Referrals", routes.DASHBOARD), ("Refer a Candidate", routes.REFERRAL_FORM)]


def create_nav_bar(
    user: Optional[User],
    on_navigate: Callable[[str], None],
    on_logout: Optional[Callable[[], Awaitable[None]]] = None,
) -> tuple[ft.Container, dict]:
    """
    Create the navigation bar.

    Features:
    - Brand linking to the landing page
    - Links for the current role
    - Greeting and logout when logged in
    """

    async def _on_logout(e) -> None:
        if on_logout:
            await on_logout()

    links = ft.Row(
        [
            ft.TextButton(label, on_click=lambda e, path=path: on_navigate(path))
            for label, path in _links_for(user)
        ],
        spacing=Theme.SPACING_XS,
    )

    right = [links]
    if user is not None:
        right.append(ft.Text(f"Hi, {user.name or user.email}", color=Theme.TEXT_SECONDARY))
        right.append(ft.OutlinedButton("Logout", icon=ft.Icons.LOGOUT, on_click=_on_logout))

    container = ft.Container(
        content=ft.Row([
            ft.TextButton(
                content=ft.Row([
                    ft.Icon(ft.Icons.PEOPLE_ALT, color=Theme.PRIMARY),
                    ft.Text("Referral Portal", size=20, weight=ft.FontWeight.BOLD),
                ], spacing=Theme.SPACING_SM),
                on_click=lambda e: on_navigate(routes.LANDING),
            ),
            ft.Row(right, spacing=Theme.SPACING_MD),
        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        bgcolor=Theme.SURFACE,
        padding=ft.padding.symmetric(horizontal=Theme.SPACING_LG, vertical=Theme.SPACING_SM),
        border=ft.border.only(bottom=ft.BorderSide(1, Theme.BORDER)),
    )

    return container, {"links": links}
