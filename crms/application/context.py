"""
Application Context - Explicit wiring of settings, adapters and use cases.

One context is built per Flet page session and handed to every view.
"""

import logging
from typing import Optional

import httpx

from crms.config.settings import Settings
from crms.infrastructure.http import ApiClient, HttpAuthApi, HttpReferralApi
from crms.infrastructure.storage import SQLiteSessionStorage

from .use_cases import AnalyticsFetcher, AuthSessionManager, AuthState, CandidateStore, RouteGuard


logger = logging.getLogger(__name__)


class AppContext:
    """Everything a view needs, constructed once and passed down."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.storage = SQLiteSessionStorage(settings.storage_path)

        # The client reads the session lazily, so it is wired before auth exists
        self.client = ApiClient(
            settings.api_base_url,
            timeout=settings.request_timeout,
            session_provider=lambda: self.auth.session,
            transport=transport,
        )
        referral_api = HttpReferralApi(self.client)

        self.auth = AuthSessionManager(
            HttpAuthApi(self.client),
            self.storage,
            clear_delay=settings.message_clear_delay,
        )
        self.store = CandidateStore(
            referral_api,
            clear_delay=settings.message_clear_delay,
            page_size=settings.page_size,
        )
        self.analytics = AnalyticsFetcher(
            referral_api,
            ttl=settings.cache_ttl_seconds,
            clear_delay=settings.message_clear_delay,
        )
        self.guard = RouteGuard(self.auth)

    async def initialize(self) -> AuthState:
        """Open local storage and restore the persisted session."""
        await self.storage.initialize()
        state = await self.auth.restore()
        logger.info(f"Context ready ({state.value}, api={self.settings.api_base_url})")
        return state

    async def logout(self):
        """End the session and forget the loaded referrals."""
        result = await self.auth.logout()
        self.store.reset()
        return result

    async def close(self) -> None:
        await self.client.close()
        await self.storage.close()
