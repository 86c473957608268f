"""
Theme Configuration for the CRMS web client.
"""

import flet as ft

from crms.domain.entities import ReferralStatus


class Theme:
    """Theme configuration for the application."""

    # Color palette
    PRIMARY = "#2563eb"  # Blue 600
    PRIMARY_VARIANT = "#1d4ed8"
    SECONDARY = "#10b981"  # Emerald

    ERROR = "#ef4444"  # Red
    WARNING = "#f59e0b"  # Amber
    SUCCESS = "#22c55e"  # Green
    INFO = "#3b82f6"  # Blue

    # Light theme (the referral portal is light-only)
    BG = "#f8fafc"  # Slate 50
    SURFACE = "#ffffff"
    CARD = "#f1f5f9"  # Slate 100
    TEXT = "#0f172a"  # Slate 900
    TEXT_SECONDARY = "#64748b"  # Slate 500
    BORDER = "#e2e8f0"  # Slate 200

    # Spacing
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24
    SPACING_XL = 32

    # Border radius
    RADIUS_SM = 4
    RADIUS_MD = 8
    RADIUS_LG = 12

    STATUS_COLORS = {
        ReferralStatus.PENDING: WARNING,
        ReferralStatus.REVIEWED: INFO,
        ReferralStatus.HIRED: SUCCESS,
        ReferralStatus.REJECTED: ERROR,
    }

    @classmethod
    def get_flet_theme(cls) -> ft.Theme:
        """Get Flet theme configuration."""
        return ft.Theme(
            color_scheme_seed=cls.PRIMARY,
            color_scheme=ft.ColorScheme(
                primary=cls.PRIMARY,
                secondary=cls.SECONDARY,
                error=cls.ERROR,
            ),
        )

    @classmethod
    def card_style(cls) -> dict:
        """Get card styling."""
        return {
            "bgcolor": cls.SURFACE,
            "border_radius": cls.RADIUS_LG,
            "padding": cls.SPACING_MD,
            "border": ft.border.all(1, cls.BORDER),
        }

    @classmethod
    def button_style(cls, variant: str = "primary") -> ft.ButtonStyle:
        """Get button styling."""
        colors = {
            "primary": cls.PRIMARY,
            "secondary": cls.SECONDARY,
            "error": cls.ERROR,
            "success": cls.SUCCESS,
        }
        return ft.ButtonStyle(
            color="white",
            bgcolor=colors.get(variant, cls.PRIMARY),
            shape=ft.RoundedRectangleBorder(radius=cls.RADIUS_MD),
            padding=ft.padding.symmetric(horizontal=cls.SPACING_LG, vertical=cls.SPACING_MD),
        )

    @classmethod
    def status_color(cls, status: ReferralStatus) -> str:
        return cls.STATUS_COLORS.get(status, cls.TEXT_SECONDARY)
