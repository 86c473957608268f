"""
Stats Panel Component

Counter cards for a referral collection or the analytics stats payload.
"""

import flet as ft

from crms.domain.services import ReferralStats
from ..styles import Theme


def stat_card(title: str, value: int, color: str) -> ft.Container:
    """Single counter card."""
    return ft.Container(
        content=ft.Column([
            ft.Text(title, size=14, weight=ft.FontWeight.W_600, color=color),
            ft.Text(str(value), size=30, weight=ft.FontWeight.BOLD, color=color),
        ], spacing=Theme.SPACING_XS),
        col={"sm": 6, "md": 4, "lg": 2},
        bgcolor=Theme.SURFACE,
        border=ft.border.all(1, color),
        border_radius=Theme.RADIUS_LG,
        padding=Theme.SPACING_MD,
    )


def create_stats_panel(stats: ReferralStats) -> ft.ResponsiveRow:
    """Create the row of status counters."""
    return ft.ResponsiveRow([
        stat_card("Total Referrals", stats.total, Theme.PRIMARY),
        stat_card("Pending", stats.pending, Theme.WARNING),
        stat_card("Reviewed", stats.reviewed, Theme.INFO),
        stat_card("Hired", stats.hired, Theme.SUCCESS),
        stat_card("Rejected", stats.rejected, Theme.ERROR),
    ], spacing=Theme.SPACING_MD)
