"""
Password Forms Component

Reset-link request and new-password forms.
"""

import flet as ft
from typing import Awaitable, Callable, Optional

from crms.application.use_cases import route_guard as routes
from ..styles import Theme


def create_reset_request_form(
    on_submit: Callable[[str], Awaitable[None]],
    on_navigate: Callable[[str], None],
) -> tuple[ft.Container, dict]:
    """Create the "send me a reset link" form."""
    email_input = ft.TextField(label="Email Address", border_radius=Theme.RADIUS_MD, prefix_icon=ft.Icons.EMAIL)
    submit_button = ft.ElevatedButton("Send Reset Link", icon=ft.Icons.SEND, style=Theme.button_style("primary"))

    async def _on_submit(e) -> None:
        await on_submit(email_input.value or "")

    submit_button.on_click = _on_submit

    container = ft.Container(
        content=ft.Column([
            ft.Text("Reset your password", size=22, weight=ft.FontWeight.BOLD),
            ft.Text("We'll email you a link to choose a new password.", color=Theme.TEXT_SECONDARY),
            email_input,
            submit_button,
            ft.TextButton("Back to login", on_click=lambda e: on_navigate(routes.LOGIN)),
        ], spacing=Theme.SPACING_MD),
        width=420,
        **Theme.card_style(),
    )
    return container, {"email": email_input, "submit": submit_button}


def create_change_password_form(
    reset_token: str,
    on_submit: Callable[[str, str, Optional[str]], Awaitable[None]],
) -> tuple[ft.Container, dict]:
    """
    Create the new-password form.

    The reset token comes from the link in the reset email.
    """
    password_input = ft.TextField(
        label="New Password",
        password=True,
        can_reveal_password=True,
        border_radius=Theme.RADIUS_MD,
    )
    confirm_input = ft.TextField(
        label="Confirm New Password",
        password=True,
        can_reveal_password=True,
        border_radius=Theme.RADIUS_MD,
    )
    submit_button = ft.ElevatedButton("Change Password", icon=ft.Icons.KEY, style=Theme.button_style("primary"))

    async def _on_submit(e) -> None:
        await on_submit(password_input.value or "", reset_token, confirm_input.value or "")

    submit_button.on_click = _on_submit

    container = ft.Container(
        content=ft.Column([
            ft.Text("Choose a new password", size=22, weight=ft.FontWeight.BOLD),
            password_input,
            confirm_input,
            submit_button,
        ], spacing=Theme.SPACING_MD),
        width=420,
        **Theme.card_style(),
    )
    return container, {"submit": submit_button}
