"""
Analytics Value Objects - Validated analytics responses.

The analytics endpoint answers with a ``type`` tag; ``"stats"`` carries
counters and recent referrals, every other tag carries a chart series and
its layout (both opaque here, they go straight to the chart renderer).
"""

from dataclasses import dataclass, field
from typing import Any, Union


STATS_TYPE = "stats"

GRAPH_TYPES = {
    "bar": "Referrals by Status",
    "pie": "Experience Distribution",
    "line": "Daily Referrals Trend",
    STATS_TYPE: "Overall Statistics",
}


class AnalyticsFormatError(ValueError):
    """Raised when an analytics response lacks the fields its type requires."""


@dataclass(frozen=True)
class RecentReferral:
    """Row of the recent referrals table."""

    name: str
    email: str
    status: str
    referred_by: str = ""


@dataclass(frozen=True)
class StatsPayload:
    """Overall statistics."""

    counts: dict[str, int]
    recent_referrals: tuple[RecentReferral, ...] = field(default_factory=tuple)

    def count(self, key: str) -> int:
        """Get a counter, zero when absent."""
        return int(self.counts.get(key) or 0)


@dataclass(frozen=True)
class ChartPayload:
    """Chart series plus layout for one graph type."""

    graph_type: str
    data: Any
    layout: dict


AnalyticsPayload = Union[StatsPayload, ChartPayload]


def parse_analytics(response: Any) -> AnalyticsPayload:
    """
    Validate an analytics response into a payload variant.

    Args:
        response: Decoded JSON body.

    Returns:
        StatsPayload or ChartPayload.

    Raises:
        AnalyticsFormatError: If the response is empty or misses fields.
    """
    if not response or not isinstance(response, dict):
        raise AnalyticsFormatError("No data received from server")

    graph_type = response.get("type")
    data = response.get("data")

    if graph_type == STATS_TYPE:
        if not isinstance(data, dict) or "counts" not in data or "recentReferrals" not in data:
            raise AnalyticsFormatError("Invalid stats data format")
        counts = data["counts"]
        recent = data["recentReferrals"]
        if not isinstance(counts, dict) or not isinstance(recent, list):
            raise AnalyticsFormatError("Invalid stats data format")
        return StatsPayload(
            counts=dict(counts),
            recent_referrals=tuple(_recent_referral(row) for row in recent),
        )

    layout = response.get("layout")
    if not data or not isinstance(layout, dict):
        raise AnalyticsFormatError("Invalid graph data format")
    return ChartPayload(graph_type=str(graph_type or ""), data=data, layout=layout)


def _recent_referral(row: Any) -> RecentReferral:
    """Build a table row, tolerating a missing referrer."""
    if not isinstance(row, dict):
        raise AnalyticsFormatError("Invalid stats data format")
    referrer = row.get("referredBy")
    referrer_name = referrer.get("name", "") if isinstance(referrer, dict) else ""
    return RecentReferral(
        name=row.get("name", ""),
        email=row.get("email", ""),
        status=row.get("status", ""),
        referred_by=referrer_name,
    )
