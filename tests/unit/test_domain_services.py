"""
Unit tests for domain services: TTL cache, stats, pagination, analytics parsing.
"""

import pytest

from crms.domain.entities import Referral, ReferralStatus
from crms.domain.services import DEFAULT_TTL_SECONDS, TTLCache, calculate_stats, paginate
from crms.domain.value_objects import (
    AnalyticsFormatError,
    ChartPayload,
    StatsPayload,
    parse_analytics,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestTTLCache:
    """Tests for TTLCache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return TTLCache(DEFAULT_TTL_SECONDS, clock)

    def test_get_after_set(self, cache):
        """Should return the payload right after set."""
        updated = cache.set("bar", {"n": 1})

        assert updated.get("bar") == {"n": 1}
        assert "bar" in updated

    def test_set_returns_new_cache(self, cache):
        """Should leave the original cache untouched."""
        updated = cache.set("bar", 1)

        assert cache.get("bar") is None
        assert len(cache) == 0
        assert len(updated) == 1

    def test_stale_after_ttl(self, cache, clock):
        """Should treat entries as absent once the TTL has elapsed."""
        cache = cache.set("bar", 1)

        clock.advance(DEFAULT_TTL_SECONDS - 0.5)
        assert cache.get("bar") == 1

        clock.advance(0.5)
        assert cache.get("bar") is None
        # Lazy expiry: still stored, just not served
        assert len(cache) == 1

    def test_set_restamps(self, cache, clock):
        """Should refresh the timestamp on overwrite."""
        cache = cache.set("pie", "old")
        clock.advance(200)
        cache = cache.set("pie", "new")
        clock.advance(200)

        assert cache.get("pie") == "new"

    def test_invalidate(self, cache):
        """Should drop only the given key."""
        cache = cache.set("bar", 1).set("line", 2)
        without_bar = cache.invalidate("bar")

        assert without_bar.get("bar") is None
        assert without_bar.get("line") == 2
        assert cache.get("bar") == 1

    def test_rejects_non_positive_ttl(self):
        """Should fail fast on a bad TTL."""
        with pytest.raises(ValueError):
            TTLCache(0)


def _referral(rid: str, status: ReferralStatus = ReferralStatus.PENDING) -> Referral:
    return Referral(id=rid, name=f"C{rid}", email=f"c{rid}@x.io", job_title="Dev", status=status)


class TestStats:
    """Tests for calculate_stats."""

    def test_counts_per_status(self):
        """Should count each status and the total."""
        stats = calculate_stats([
            _referral("1"),
            _referral("2", ReferralStatus.HIRED),
            _referral("3", ReferralStatus.HIRED),
            _referral("4", ReferralStatus.REJECTED),
        ])

        assert stats.total == 4
        assert stats.pending == 1
        assert stats.reviewed == 0
        assert stats.hired == 2
        assert stats.rejected == 1

    def test_empty_collection(self):
        """Should return zeros."""
        assert calculate_stats([]).to_dict() == {
            "total": 0, "pending": 0, "reviewed": 0, "hired": 0, "rejected": 0,
        }


class TestPaginate:
    """Tests for paginate."""

    @pytest.fixture
    def items(self):
        return tuple(range(1, 14))  # 13 items -> 3 pages of 6

    def test_first_page(self, items):
        """Should return the first six items."""
        page = paginate(items, 1, 6)

        assert page.items == (1, 2, 3, 4, 5, 6)
        assert page.total_pages == 3
        assert page.has_previous is False
        assert page.has_next is True

    def test_last_page_is_partial(self, items):
        """Should return the remainder on the last page."""
        assert paginate(items, 3, 6).items == (13,)

    def test_clamps_page_number(self, items):
        """Should clamp out-of-range page numbers."""
        assert paginate(items, 99, 6).number == 3
        assert paginate(items, 0, 6).number == 1

    def test_empty_has_one_page(self):
        """Should always report at least one page."""
        page = paginate((), 5, 6)

        assert page.number == 1
        assert page.total_pages == 1
        assert page.items == ()

    def test_rejects_bad_page_size(self, items):
        with pytest.raises(ValueError):
            paginate(items, 1, 0)


class TestParseAnalytics:
    """Tests for analytics response validation."""

    def test_stats_payload(self):
        """Should build a StatsPayload for the stats type."""
        payload = parse_analytics({
            "type": "stats",
            "data": {
                "counts": {"total": 5, "pending": 2},
                "recentReferrals": [
                    {"name": "Ana", "email": "a@x.io", "status": "Pending", "referredBy": {"name": "Dee"}},
                    {"name": "Bob", "email": "b@x.io", "status": "Hired"},
                ],
            },
        })

        assert isinstance(payload, StatsPayload)
        assert payload.count("total") == 5
        assert payload.count("hired") == 0
        assert payload.recent_referrals[0].referred_by == "Dee"
        assert payload.recent_referrals[1].referred_by == ""

    def test_chart_payload(self):
        """Should build a ChartPayload for any other type."""
        payload = parse_analytics({
            "type": "bar",
            "data": [{"x": ["Pending"], "y": [3], "type": "bar"}],
            "layout": {"title": "Referrals by Status"},
        })

        assert isinstance(payload, ChartPayload)
        assert payload.graph_type == "bar"
        assert payload.layout["title"] == "Referrals by Status"

    @pytest.mark.parametrize("response, message", [
        (None, "No data received from server"),
        ({}, "No data received from server"),
        ({"type": "stats", "data": {"counts": {}}}, "Invalid stats data format"),
        ({"type": "stats", "data": {"recentReferrals": []}}, "Invalid stats data format"),
        ({"type": "pie", "data": [{"values": [1]}]}, "Invalid graph data format"),
        ({"type": "line", "layout": {}}, "Invalid graph data format"),
    ])
    def test_malformed_responses(self, response, message):
        """Should reject responses missing required fields."""
        with pytest.raises(AnalyticsFormatError, match=message):
            parse_analytics(response)
