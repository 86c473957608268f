"""
CRMS - Candidate Referral Management System

Entry point for the web application.
"""

import logging
import sys

import flet as ft

from crms.config.settings import Settings, get_settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def make_target(settings: Settings):
    """Flet app target bound to the loaded settings."""

    async def main(page: ft.Page) -> None:
        from crms.presentation.gui.app import build_app
        await build_app(page, settings)

    return main


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logging.getLogger(__name__).info(
        f"Starting CRMS ({settings.env}) on port {settings.port}, API {settings.api_base_url}"
    )
    ft.app(
        target=make_target(settings),
        view=ft.AppView.WEB_BROWSER,
        port=settings.port,
        upload_dir=str(settings.upload_dir),
    )


if __name__ == "__main__":
    run()
