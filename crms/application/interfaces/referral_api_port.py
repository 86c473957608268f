"""
Referral API Port - Abstract interface for the referral endpoints.

Following Clean Architecture, this defines the contract that any
referral API adapter must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from crms.domain.entities import Referral, ReferralStatus
from crms.domain.value_objects import ReferralInput


class ReferralApiPort(ABC):
    """Abstract interface for referral data access."""

    @abstractmethod
    async def fetch_all_referrals(self) -> list[Referral]:
        """Get every referral (admin)."""
        pass

    @abstractmethod
    async def fetch_my_referrals(self) -> list[Referral]:
        """Get the referrals submitted by the current user."""
        pass

    @abstractmethod
    async def submit_referral(self, referral_input: ReferralInput) -> dict:
        """Submit a referral. Returns the created record as sent by the API."""
        pass

    @abstractmethod
    async def update_status(self, referral_id: str, status: ReferralStatus) -> Any:
        """Change the status of one referral."""
        pass

    @abstractmethod
    async def bulk_update_status(
        self,
        referral_ids: Iterable[str],
        status: ReferralStatus,
    ) -> Any:
        """Change the status of many referrals in one request."""
        pass

    @abstractmethod
    async def delete_referral(self, referral_id: str) -> Any:
        """Delete a referral."""
        pass

    @abstractmethod
    async def fetch_analytics(self, graph_type: str) -> dict:
        """Get the raw analytics response for a graph type."""
        pass
