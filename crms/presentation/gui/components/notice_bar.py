"""
Notice Bar Component

Shows the success, warning and error notices of a FlashMessages holder.
"""

import flet as ft

from crms.application.use_cases import FlashMessages, NoticeLevel
from ..styles import Theme


LEVEL_STYLE = {
    NoticeLevel.SUCCESS: (ft.Icons.CHECK_CIRCLE, Theme.SUCCESS),
    NoticeLevel.WARNING: (ft.Icons.WARNING_AMBER, Theme.WARNING),
    NoticeLevel.ERROR: (ft.Icons.ERROR_OUTLINE, Theme.ERROR),
}


def _notice_row(level: NoticeLevel, message: str) -> ft.Container:
    icon, color = LEVEL_STYLE[level]
    return ft.Container(
        content=ft.Row([
            ft.Icon(icon, color=color, size=18),
            ft.Text(message, color=color, size=13, expand=True),
        ], spacing=Theme.SPACING_SM),
        border=ft.border.all(1, color),
        border_radius=Theme.RADIUS_MD,
        padding=Theme.SPACING_SM,
    )


def create_notice_bar() -> tuple[ft.Column, dict]:
    """Create an initially empty column of notices."""
    column = ft.Column(controls=[], spacing=Theme.SPACING_XS)
    return column, {"column": column}


class NoticeBar:
    """Wrapper class for the notice bar."""

    def __init__(self):
        self.column, self._controls = create_notice_bar()

    def show(self, *holders: FlashMessages) -> None:
        """Render the current notices of one or more holders."""
        rows = []
        for messages in holders:
            for level, text in (
                (NoticeLevel.ERROR, messages.error),
                (NoticeLevel.WARNING, messages.warning),
                (NoticeLevel.SUCCESS, messages.success),
            ):
                if text:
                    rows.append(_notice_row(level, text))
        self._controls["column"].controls = rows

    def __getattr__(self, name):
        return getattr(self.column, name)
