"""
Candidate Store - Local mirror of the referral collection.

Every mutation calls the API first and reconciles local state only when
the call succeeds. Collections are tuples replaced wholesale, so a
listener never observes a half-applied change.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from crms.application.interfaces import ApiError, ReferralApiPort
from crms.domain.entities import Referral, ReferralStatus, ReferrerRef, UserRole
from crms.domain.services import Page, ReferralStats, calculate_stats, paginate
from crms.domain.value_objects import ReferralInput, SearchFilter

from .flash_messages import DEFAULT_CLEAR_DELAY, ActionResult, FlashMessages


logger = logging.getLogger(__name__)

StoreListener = Callable[[], None]

DEFAULT_PAGE_SIZE = 6


class CandidateStore:
    """
    In-memory referral collection with a derived filtered view.

    Operations never raise on remote failure: they set a notice, keep the
    previous state and return an ActionResult.
    """

    def __init__(
        self,
        api: ReferralApiPort,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """
        Initialize the store.

        Args:
            api: Referral API adapter.
            clear_delay: Seconds a success notice stays visible.
            page_size: Referrals per page.
        """
        self.api = api
        self.page_size = page_size
        self.messages = FlashMessages(clear_delay, on_change=self._emit)

        self._referrals: tuple[Referral, ...] = ()
        self._filtered: tuple[Referral, ...] = ()
        self._search = SearchFilter()
        self._page_number = 1
        self._in_flight = 0
        self._listeners: list[StoreListener] = []

    # ==================== State ====================

    @property
    def referrals(self) -> tuple[Referral, ...]:
        """Full collection."""
        return self._referrals

    @property
    def filtered(self) -> tuple[Referral, ...]:
        """Collection narrowed by the current search filter."""
        return self._filtered

    @property
    def search(self) -> SearchFilter:
        return self._search

    @property
    def loading(self) -> bool:
        """True while any remote call is in flight."""
        return self._in_flight > 0

    def add_listener(self, callback: StoreListener) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StoreListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as e:
                logger.error(f"Store listener error: {e}")

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self._in_flight += 1
        self.messages.clear_error()
        try:
            yield
        finally:
            self._in_flight -= 1
            self._emit()

    def _replace(self, referrals: Iterable[Referral]) -> None:
        """Swap the collection and recompute the filtered view."""
        self._referrals = tuple(referrals)
        self._filtered = self._search.apply(self._referrals)

    def _fail(self, prefix: str, error: ApiError) -> ActionResult:
        message = f"{prefix}: {error.message}" if error.message else prefix
        logger.error(message)
        self.messages.set_error(message)
        return ActionResult.failure(message)

    def _warn(self, message: str) -> ActionResult:
        logger.warning(message)
        self.messages.set_warning(message)
        return ActionResult.warning(message)

    def _succeed(self, message: str) -> ActionResult:
        logger.info(message)
        self.messages.set_success(message)
        return ActionResult.success(message)

    # ==================== Remote-backed operations ====================

    async def fetch(self, role: UserRole) -> ActionResult:
        """
        Load referrals visible to the given role.

        Admins get every referral, users only their own.
        """
        with self._busy():
            try:
                if role == UserRole.ADMIN:
                    referrals = await self.api.fetch_all_referrals()
                else:
                    referrals = await self.api.fetch_my_referrals()
            except ApiError as e:
                return self._fail("Failed to fetch candidates", e)

            self._replace(referrals)
            logger.info(f"Loaded {len(self._referrals)} referrals for {role.value}")
            return ActionResult.success()

    async def add(
        self,
        referral_input: ReferralInput | Mapping[str, Any],
        referrer: Optional[ReferrerRef] = None,
    ) -> ActionResult:
        """
        Submit a referral and append it locally as Pending.

        Args:
            referral_input: Validated input, or raw form fields to validate.
            referrer: Submitting user, used when the API does not echo it.
        """
        if not isinstance(referral_input, ReferralInput):
            try:
                referral_input = ReferralInput(**referral_input)
            except (TypeError, ValueError) as e:
                return self._warn(str(e))

        with self._busy():
            try:
                created = await self.api.submit_referral(referral_input)
            except ApiError as e:
                return self._fail("Failed to submit referral", e)

            created = created if isinstance(created, dict) else {}
            referral = Referral(
                id=str(created.get("_id") or created.get("id") or f"local-{uuid.uuid4().hex}"),
                name=referral_input.name.strip(),
                email=referral_input.email.strip(),
                phone=referral_input.phone.strip(),
                job_title=referral_input.job_title,
                experience=referral_input.experience,
                resume_url=created.get("resume") or referral_input.resume_url,
                referred_by=ReferrerRef.from_wire(created.get("referredBy")) or referrer,
                status=ReferralStatus.PENDING,
            )
            self._replace(self._referrals + (referral,))
            return self._succeed("Referral submitted successfully!")

    async def update_status(self, referral_id: Any, new_status: ReferralStatus | str) -> ActionResult:
        """Change one referral's status, remotely first."""
        try:
            status = ReferralStatus.parse(new_status)
        except ValueError as e:
            return self._warn(str(e))

        with self._busy():
            try:
                await self.api.update_status(str(referral_id), status)
            except ApiError as e:
                return self._fail("Failed to update candidate status", e)

            self._replace(
                r.with_status(status) if r.matches_id(referral_id) else r
                for r in self._referrals
            )
            return self._succeed(f"Candidate status updated to {status.value}")

    async def bulk_update_status(
        self,
        referral_ids: Iterable[Any],
        new_status: Optional[ReferralStatus | str],
    ) -> ActionResult:
        """
        Apply one status to many referrals with a single batched request.

        The local collection reflects either all of the ids updated or none.
        """
        ids = {str(i) for i in referral_ids}
        if not ids or not new_status:
            return self._warn("Please select candidates and a status to update")
        try:
            status = ReferralStatus.parse(new_status)
        except ValueError as e:
            return self._warn(str(e))

        with self._busy():
            try:
                await self.api.bulk_update_status(sorted(ids), status)
            except ApiError as e:
                return self._fail("Failed to update status", e)

            self._replace(
                r.with_status(status) if r.id in ids else r
                for r in self._referrals
            )
            return self._succeed("Bulk status update successful")

    async def delete(self, referral_id: Any) -> ActionResult:
        """Delete a referral, remotely first."""
        with self._busy():
            try:
                await self.api.delete_referral(str(referral_id))
            except ApiError as e:
                return self._fail("Failed to delete candidate", e)

            self._replace(r for r in self._referrals if not r.matches_id(referral_id))
            return self._succeed("Candidate deleted successfully!")

    # ==================== Local views ====================

    def filter(self, term: str, category: Optional[str] = None) -> tuple[Referral, ...]:
        """
        Update the search filter and recompute the filtered view.

        Resets pagination to the first page.
        """
        self._search = self._search.with_term(term)
        if category:
            self._search = self._search.with_category(category)
        self._filtered = self._search.apply(self._referrals)
        self._page_number = 1
        self._emit()
        return self._filtered

    def get(self, referral_id: Any) -> Optional[Referral]:
        """Find a referral by id."""
        for referral in self._referrals:
            if referral.matches_id(referral_id):
                return referral
        return None

    def page(self, number: Optional[int] = None) -> Page[Referral]:
        """Get a page of the filtered view (current page by default)."""
        if number is not None:
            self._page_number = number
        current = paginate(self._filtered, self._page_number, self.page_size)
        self._page_number = current.number
        return current

    def stats(self) -> ReferralStats:
        """Status counters of the full collection."""
        return calculate_stats(self._referrals)

    def reset(self) -> None:
        """Forget everything (on logout)."""
        self._search = SearchFilter()
        self._page_number = 1
        self._replace(())
        self.messages.clear()
        self._emit()
