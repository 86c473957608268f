"""
SearchFilter Value Object - Immutable referral search settings.
"""

from dataclasses import dataclass
from typing import Iterable

from crms.domain.entities import Referral


@dataclass(frozen=True)
class SearchFilter:
    """
    Immutable value object for the referral search box.

    Attributes:
        term: Text to look for (case-insensitive substring)
        category: Wire name of the field to search in
    """

    term: str = ""
    category: str = "jobTitle"

    CATEGORIES = {
        "name": "Name",
        "email": "Email",
        "phone": "Phone",
        "jobTitle": "Job Title",
        "status": "Status",
    }

    @property
    def is_active(self) -> bool:
        """Blank or whitespace-only terms disable filtering."""
        return bool(self.term.strip())

    def matches(self, referral: Referral) -> bool:
        """Check if a referral matches the filter."""
        if not self.is_active:
            return True
        text = referral.field_text(self.category)
        if text is None:
            return False
        return self.term.lower() in text.lower()

    def apply(self, referrals: Iterable[Referral]) -> tuple[Referral, ...]:
        """Return the matching referrals, preserving order."""
        return tuple(r for r in referrals if self.matches(r))

    def with_term(self, term: str) -> "SearchFilter":
        """Create new filter with updated term."""
        return SearchFilter(term=term, category=self.category)

    def with_category(self, category: str) -> "SearchFilter":
        """Create new filter with updated category."""
        return SearchFilter(term=self.term, category=category)
