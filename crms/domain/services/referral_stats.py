"""
Referral statistics and pagination helpers for the dashboards.
"""

import math
from dataclasses import dataclass
from typing import Generic, Iterable, Sequence, TypeVar

from crms.domain.entities import Referral, ReferralStatus


T = TypeVar("T")


@dataclass(frozen=True)
class ReferralStats:
    """Status counters shown on the admin dashboard."""

    total: int = 0
    pending: int = 0
    reviewed: int = 0
    hired: int = 0
    rejected: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "reviewed": self.reviewed,
            "hired": self.hired,
            "rejected": self.rejected,
        }


def calculate_stats(referrals: Iterable[Referral]) -> ReferralStats:
    """Count referrals per status."""
    counts = {status: 0 for status in ReferralStatus}
    total = 0
    for referral in referrals:
        total += 1
        counts[referral.status] += 1

    return ReferralStats(
        total=total,
        pending=counts[ReferralStatus.PENDING],
        reviewed=counts[ReferralStatus.REVIEWED],
        hired=counts[ReferralStatus.HIRED],
        rejected=counts[ReferralStatus.REJECTED],
    )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a sequence."""

    items: tuple[T, ...]
    number: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice a sequence into a page.

    The page number is clamped into ``[1, total_pages]`` and there is
    always at least one (possibly empty) page.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_pages = max(1, math.ceil(len(items) / page_size))
    number = min(max(page, 1), total_pages)
    start = (number - 1) * page_size
    return Page(
        items=tuple(items[start:start + page_size]),
        number=number,
        total_pages=total_pages,
        total_items=len(items),
    )
