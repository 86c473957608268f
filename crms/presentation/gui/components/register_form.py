"""
Register Form Component

Account creation with role selection.
"""

import flet as ft
from typing import Awaitable, Callable

from crms.application.use_cases import route_guard as routes
from ..styles import Theme


def create_register_form(
    on_submit: Callable[..., Awaitable[None]],
    on_navigate: Callable[[str], None],
) -> tuple[ft.Container, dict]:
    """
    Create the registration form.

    ``on_submit`` receives name, email, password, confirm_password and role
    as keyword arguments.
    """
    name_input = ft.TextField(label="Full Name", border_radius=Theme.RADIUS_MD, prefix_icon=ft.Icons.PERSON)
    email_input = ft.TextField(label="Email Address", border_radius=Theme.RADIUS_MD, prefix_icon=ft.Icons.EMAIL)
    password_input = ft.TextField(
        label="Password",
        password=True,
        can_reveal_password=True,
        border_radius=Theme.RADIUS_MD,
        helper_text="8+ characters with upper and lower case, a number and a symbol",
    )
    confirm_input = ft.TextField(
        label="Confirm Password",
        password=True,
        can_reveal_password=True,
        border_radius=Theme.RADIUS_MD,
    )
    role_dropdown = ft.Dropdown(
        label="Role",
        value="user",
        options=[ft.dropdown.Option("user", "User"), ft.dropdown.Option("admin", "Admin")],
        border_radius=Theme.RADIUS_MD,
    )

    submit_button = ft.ElevatedButton("Register", icon=ft.Icons.PERSON_ADD, style=Theme.button_style("primary"))

    async def _on_submit(e) -> None:
        await on_submit(
            name=name_input.value or "",
            email=email_input.value or "",
            password=password_input.value or "",
            confirm_password=confirm_input.value or "",
            role=role_dropdown.value or "user",
        )

    submit_button.on_click = _on_submit

    container = ft.Container(
        content=ft.Column([
            ft.Text("Create your account", size=22, weight=ft.FontWeight.BOLD),
            name_input,
            email_input,
            password_input,
            confirm_input,
            role_dropdown,
            submit_button,
            ft.TextButton("Already have an account? Sign in", on_click=lambda e: on_navigate(routes.LOGIN)),
        ], spacing=Theme.SPACING_MD),
        width=420,
        **Theme.card_style(),
    )

    return container, {"submit": submit_button}
