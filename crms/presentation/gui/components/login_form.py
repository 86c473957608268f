"""
Login Form Component

Email/password login with guest shortcuts.
"""

import flet as ft
from typing import Awaitable, Callable

from crms.application.use_cases import route_guard as routes
from ..styles import Theme


GUEST_ADMIN = ("admin@gmail.com", "admin@gmail.com")
GUEST_USER = ("newUser@gmail.com", "qwerty@123")


def create_login_form(
    on_submit: Callable[[str, str], Awaitable[None]],
    on_navigate: Callable[[str], None],
) -> tuple[ft.Container, dict]:
    """
    Create the login form.

    Features:
    - Email and password inputs
    - Guest admin / guest user prefill
    - Links to registration and password reset
    """
    email_input = ft.TextField(
        label="Email Address",
        hint_text="you@company.com",
        border_radius=Theme.RADIUS_MD,
        prefix_icon=ft.Icons.EMAIL,
    )

    password_input = ft.TextField(
        label="Password",
        password=True,
        can_reveal_password=True,
        border_radius=Theme.RADIUS_MD,
        prefix_icon=ft.Icons.LOCK,
    )

    submit_button = ft.ElevatedButton(
        "Sign In",
        icon=ft.Icons.LOGIN,
        style=Theme.button_style("primary"),
    )

    async def _on_submit(e) -> None:
        await on_submit(email_input.value or "", password_input.value or "")

    def _prefill(credentials: tuple[str, str]):
        def handler(e) -> None:
            email_input.value, password_input.value = credentials
            email_input.update()
            password_input.update()
        return handler

    submit_button.on_click = _on_submit
    password_input.on_submit = _on_submit

    container = ft.Container(
        content=ft.Column([
            ft.Text("Sign in to your account", size=22, weight=ft.FontWeight.BOLD),
            email_input,
            password_input,
            submit_button,
            ft.Row([
                ft.OutlinedButton("Guest Admin", on_click=_prefill(GUEST_ADMIN)),
                ft.OutlinedButton("Guest User", on_click=_prefill(GUEST_USER)),
            ], spacing=Theme.SPACING_SM),
            ft.Row([
                ft.TextButton("Create an account", on_click=lambda e: on_navigate(routes.REGISTER)),
                ft.TextButton("Forgot password?", on_click=lambda e: on_navigate(routes.RESET_PASSWORD)),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        ], spacing=Theme.SPACING_MD),
        width=420,
        **Theme.card_style(),
    )

    controls = {
        "email": email_input,
        "password": password_input,
        "submit": submit_button,
    }

    return container, controls


class LoginPanel:
    """Wrapper class for the login form."""

    def __init__(
        self,
        on_submit: Callable[[str, str], Awaitable[None]],
        on_navigate: Callable[[str], None],
    ):
        self.container, self._controls = create_login_form(on_submit, on_navigate)

    def set_busy(self, busy: bool) -> None:
        """Disable the submit button while a login is in flight."""
        self._controls["submit"].disabled = busy
        self._controls["submit"].text = "Signing in..." if busy else "Sign In"

    def __getattr__(self, name):
        return getattr(self.container, name)
