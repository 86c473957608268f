"""
Analytics Fetcher - Cached loading of the admin analytics graphs.
"""

import logging
from typing import Callable, Optional

from crms.application.interfaces import ApiError, ReferralApiPort
from crms.domain.services import DEFAULT_TTL_SECONDS, TTLCache
from crms.domain.services.ttl_cache import Clock
from crms.domain.value_objects import (
    AnalyticsFormatError,
    AnalyticsPayload,
    ChartPayload,
    StatsPayload,
    parse_analytics,
)
from crms.domain.value_objects.analytics import GRAPH_TYPES

from .flash_messages import DEFAULT_CLEAR_DELAY, ActionResult, FlashMessages


logger = logging.getLogger(__name__)

DEFAULT_GRAPH_TYPE = "bar"


class AnalyticsFetcher:
    """
    Loads one graph type at a time, reusing responses younger than the TTL.

    Display state (``stats`` or ``chart``) is cleared before every fetch and
    only set from a validated payload, so a malformed response leaves it
    empty rather than half-filled.
    """

    def __init__(
        self,
        api: ReferralApiPort,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Clock] = None,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            api: Referral API adapter (serves the analytics endpoint).
            ttl: Cache freshness window in seconds.
            clock: Monotonic clock override for the cache.
            clear_delay: Seconds a success notice stays visible.
        """
        self.api = api
        self.messages = FlashMessages(clear_delay, on_change=self._emit)
        self.graph_type = DEFAULT_GRAPH_TYPE
        self.loading = False
        self.stats: Optional[StatsPayload] = None
        self.chart: Optional[ChartPayload] = None

        if clock is None:
            self._cache: TTLCache[AnalyticsPayload] = TTLCache(ttl)
        else:
            self._cache = TTLCache(ttl, clock)
        self._listeners: list[Callable[[], None]] = []

    @property
    def cache(self) -> TTLCache[AnalyticsPayload]:
        return self._cache

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(callback)

    def _emit(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as e:
                logger.error(f"Analytics listener error: {e}")

    def set_graph_type(self, graph_type: str) -> None:
        """Select the graph type used by the next fetch."""
        if graph_type not in GRAPH_TYPES:
            raise ValueError(f"Unknown graph type: {graph_type}")
        self.graph_type = graph_type

    async def _get_payload(self, graph_type: str) -> AnalyticsPayload:
        cached = self._cache.get(graph_type)
        if cached is not None:
            logger.debug(f"Analytics cache hit: {graph_type}")
            return cached

        response = await self.api.fetch_analytics(graph_type)
        payload = parse_analytics(response)
        self._cache = self._cache.set(graph_type, payload)
        return payload

    async def fetch_data(self, graph_type: Optional[str] = None) -> ActionResult:
        """
        Load the current (or given) graph type, from cache when fresh.

        Returns:
            ActionResult; failures are also reported as error notices.
        """
        if graph_type is not None:
            try:
                self.set_graph_type(graph_type)
            except ValueError as e:
                logger.warning(str(e))
                self.messages.set_warning(str(e))
                return ActionResult.warning(str(e))

        current = self.graph_type
        self.loading = True
        self.stats = None
        self.chart = None
        self.messages.clear_error()
        self._emit()

        try:
            payload = await self._get_payload(current)
        except (ApiError, AnalyticsFormatError) as e:
            self.loading = False
            message = getattr(e, "message", None) or str(e) or "Failed to fetch analytics data"
            logger.error(f"Analytics fetch failed for {current}: {message}")
            self.messages.set_error(message)
            return ActionResult.failure(message)

        self.loading = False
        if isinstance(payload, StatsPayload):
            self.stats = payload
        else:
            self.chart = payload
        self._emit()
        return ActionResult.success()

    async def refresh_data(self) -> ActionResult:
        """Drop the cached entry for the current graph type and refetch."""
        self._cache = self._cache.invalidate(self.graph_type)
        return await self.fetch_data()
