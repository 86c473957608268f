"""
Unit tests for CandidateStore.
"""

import asyncio

import httpx
import pytest
from unittest.mock import AsyncMock, Mock

from crms.application.interfaces import ApiError, ReferralApiPort
from crms.application.use_cases import CandidateStore, NoticeLevel
from crms.domain.entities import Referral, ReferralStatus, ReferrerRef, UserRole
from crms.domain.value_objects import ReferralInput
from crms.infrastructure.http import ApiClient, HttpReferralApi


def _referral(rid: str, job_title: str = "Frontend Developer", **kwargs) -> Referral:
    return Referral(id=rid, name=f"Cand {rid}", email=f"c{rid}@x.io", job_title=job_title, **kwargs)


@pytest.fixture
def api():
    api = AsyncMock(spec=ReferralApiPort)
    api.fetch_all_referrals.return_value = [
        _referral("1", "Frontend Developer"),
        _referral("2", "QA Engineer"),
        _referral("3", "Backend Developer", status=ReferralStatus.REVIEWED),
    ]
    api.fetch_my_referrals.return_value = [_referral("9", "QA Engineer")]
    api.submit_referral.return_value = {"_id": "srv-1"}
    return api


@pytest.fixture
def store(api):
    return CandidateStore(api)


def loaded(store: CandidateStore) -> CandidateStore:
    asyncio.run(store.fetch(UserRole.ADMIN))
    return store


class TestFetch:
    """Tests for loading the collection."""

    def test_admin_gets_all(self, store, api):
        """Should load every referral for admins."""
        result = asyncio.run(store.fetch(UserRole.ADMIN))

        assert result.ok
        api.fetch_all_referrals.assert_awaited_once()
        api.fetch_my_referrals.assert_not_awaited()
        assert [r.id for r in store.referrals] == ["1", "2", "3"]
        assert store.filtered == store.referrals

    def test_user_gets_own(self, store, api):
        """Should load only the user's referrals for users."""
        asyncio.run(store.fetch(UserRole.USER))

        api.fetch_my_referrals.assert_awaited_once()
        assert [r.id for r in store.referrals] == ["9"]

    def test_failure_keeps_state(self, store, api):
        """Should keep the previous collection and surface the error."""
        loaded(store)
        api.fetch_all_referrals.side_effect = ApiError("Network Error")

        result = asyncio.run(store.fetch(UserRole.ADMIN))

        assert result.ok is False
        assert store.messages.error == "Failed to fetch candidates: Network Error"
        assert len(store.referrals) == 3
        assert store.loading is False

    def test_filter_reapplied_after_fetch(self, store):
        """Should keep the active filter when the collection changes."""
        store.filter("qa", "jobTitle")
        loaded(store)

        assert [r.id for r in store.filtered] == ["2"]

    def test_loading_while_in_flight(self, store, api):
        """Should report loading only while the call is pending."""
        seen = []

        async def fetch():
            seen.append(store.loading)
            return []

        api.fetch_all_referrals.side_effect = fetch
        asyncio.run(store.fetch(UserRole.ADMIN))

        assert seen == [True]
        assert store.loading is False


class TestFilter:
    """Tests for search filtering."""

    def test_blank_term_is_identity(self, store):
        loaded(store)

        assert store.filter("", "name") == store.referrals

    def test_job_title_contains(self, store):
        """Should narrow case-insensitively by category."""
        loaded(store)

        assert [r.id for r in store.filter("DEV", "jobTitle")] == ["1", "3"]

    def test_category_sticks(self, store):
        """Should keep the previous category when none is given."""
        loaded(store)
        store.filter("x", "status")
        store.filter("review")

        assert store.search.category == "status"
        assert [r.id for r in store.filtered] == ["3"]

    def test_notifies_listeners(self, store):
        listener = Mock()
        store.add_listener(listener)

        store.filter("a")

        listener.assert_called()


class TestUpdateStatus:
    """Tests for single status updates."""

    def test_success(self, store, api):
        """Should update the record in both collections."""
        loaded(store)
        store.filter("qa")

        result = asyncio.run(store.update_status("2", "Hired"))

        assert result.ok
        api.update_status.assert_awaited_once_with("2", ReferralStatus.HIRED)
        assert store.get("2").status == ReferralStatus.HIRED
        assert store.filtered[0].status == ReferralStatus.HIRED
        assert store.messages.success == "Candidate status updated to Hired"

    def test_remote_failure_keeps_status(self, store, api):
        """Should leave the stored status unchanged and set an error."""
        loaded(store)
        api.update_status.side_effect = ApiError("Forbidden", status_code=403)

        result = asyncio.run(store.update_status("1", "Hired"))

        assert result.ok is False
        assert store.get("1").status == ReferralStatus.PENDING
        assert store.messages.error.startswith("Failed to update candidate status")

    def test_unknown_status_not_sent(self, store, api):
        """Should warn without calling the API."""
        loaded(store)

        result = asyncio.run(store.update_status("1", "Interviewing"))

        assert result.level == NoticeLevel.WARNING
        api.update_status.assert_not_awaited()

    @pytest.mark.parametrize("action", [
        lambda store: store.add({"name": "Ana", "email": "ana@x.io", "job_title": "Dev"}),
        lambda store: store.update_status("1", "Reviewed"),
        lambda store: store.delete("2"),
    ], ids=["add", "update_status", "delete"])
    def test_success_message_clears_itself(self, api, action):
        """Should drop the success notice after the delay."""
        store = CandidateStore(api, clear_delay=0.01)
        loaded(store)

        async def scenario():
            result = await action(store)
            assert result.ok
            assert store.messages.success is not None
            await asyncio.sleep(0.05)
            return store.messages.success

        assert asyncio.run(scenario()) is None


class TestBulkUpdate:
    """Tests for bulk status updates."""

    def test_empty_selection(self, store, api):
        """Should warn and never call the API."""
        loaded(store)

        result = asyncio.run(store.bulk_update_status(set(), "Hired"))

        assert result.level == NoticeLevel.WARNING
        assert store.messages.warning == "Please select candidates and a status to update"
        api.bulk_update_status.assert_not_awaited()

    def test_missing_status(self, store, api):
        loaded(store)

        asyncio.run(store.bulk_update_status({"1"}, ""))

        api.bulk_update_status.assert_not_awaited()

    def test_success_updates_all(self, store, api):
        """Should apply the status to every selected record."""
        loaded(store)

        result = asyncio.run(store.bulk_update_status({"3", "1"}, "Rejected"))

        assert result.ok
        api.bulk_update_status.assert_awaited_once_with(["1", "3"], ReferralStatus.REJECTED)
        assert [r.status for r in store.referrals] == [
            ReferralStatus.REJECTED, ReferralStatus.PENDING, ReferralStatus.REJECTED,
        ]
        assert store.messages.success == "Bulk status update successful"

    def test_failure_updates_none(self, store, api):
        loaded(store)
        api.bulk_update_status.side_effect = ApiError("boom")

        asyncio.run(store.bulk_update_status({"1", "2"}, "Hired"))

        assert store.stats().hired == 0
        assert store.messages.error == "Failed to update status: boom"


class TestDelete:
    """Tests for deletion."""

    def test_success(self, store, api):
        loaded(store)

        result = asyncio.run(store.delete("2"))

        assert result.ok
        api.delete_referral.assert_awaited_once_with("2")
        assert store.get("2") is None
        assert store.messages.success == "Candidate deleted successfully!"

    def test_failure_keeps_record(self, store, api):
        loaded(store)
        api.delete_referral.side_effect = ApiError("Not found", status_code=404)

        asyncio.run(store.delete("2"))

        assert store.get("2") is not None
        assert store.messages.error == "Failed to delete candidate: Not found"


class TestAdd:
    """Tests for referral submission."""

    def test_invalid_fields_not_sent(self, store, api):
        """Should warn on invalid form fields without calling the API."""
        result = asyncio.run(store.add({"name": "Ana", "email": "nope", "job_title": "Dev"}))

        assert result.level == NoticeLevel.WARNING
        assert store.messages.warning == "Please enter a valid email address"
        api.submit_referral.assert_not_awaited()

    def test_appends_pending_with_server_id(self, store, api):
        """Should append the new record as Pending with the server id."""
        referrer = ReferrerRef(id="u1", name="Dee")

        result = asyncio.run(store.add(
            {"name": "Ana", "email": "ana@x.io", "job_title": "QA Engineer", "experience": "2"},
            referrer=referrer,
        ))

        assert result.ok
        submitted = api.submit_referral.await_args.args[0]
        assert isinstance(submitted, ReferralInput)
        added = store.get("srv-1")
        assert added.status == ReferralStatus.PENDING
        assert added.referred_by == referrer
        assert store.messages.success == "Referral submitted successfully!"

    def test_local_id_when_server_silent(self, store, api):
        api.submit_referral.return_value = None

        asyncio.run(store.add(ReferralInput(name="Ana", email="ana@x.io", job_title="Dev")))

        assert store.referrals[-1].id.startswith("local-")

    def test_failure_does_not_append(self, store, api):
        api.submit_referral.side_effect = ApiError("Server error", status_code=500)

        asyncio.run(store.add(ReferralInput(name="Ana", email="ana@x.io", job_title="Dev")))

        assert store.referrals == ()
        assert store.messages.error == "Failed to submit referral: Server error"

    def test_string_resume_path(self, store, api, tmp_path):
        """Should accept the resume path as text from the form."""
        resume = tmp_path / "cv.pdf"

        result = asyncio.run(store.add({
            "name": "Ana", "email": "ana@x.io", "job_title": "Dev", "resume_file": str(resume),
        }))

        assert result.ok
        assert api.submit_referral.await_args.args[0].resume_file == resume

    def test_empty_form_values(self, store, api):
        """Should warn about missing fields given as None."""
        result = asyncio.run(store.add({"name": None, "email": "ana@x.io", "job_title": "Dev", "phone": None}))

        assert result.level == NoticeLevel.WARNING
        assert store.messages.warning == "Please fill in all required fields"
        api.submit_referral.assert_not_awaited()

    def test_missing_resume_file_reported(self, tmp_path):
        """Should surface an unreadable resume as a submission error."""
        sent = []
        client = ApiClient("http://api.test", transport=httpx.MockTransport(
            lambda request: sent.append(request) or httpx.Response(201, json={"_id": "srv-1"}),
        ))
        store = CandidateStore(HttpReferralApi(client))

        async def scenario():
            try:
                return await store.add({
                    "name": "Ana", "email": "ana@x.io", "job_title": "Dev",
                    "resume_file": tmp_path / "not-uploaded-yet.pdf",
                })
            finally:
                await client.close()

        result = asyncio.run(scenario())

        assert result.ok is False
        assert store.messages.error == "Failed to submit referral: Could not read resume file not-uploaded-yet.pdf"
        assert store.referrals == ()
        assert sent == []
        assert store.loading is False


class TestPaging:
    """Tests for pagination and stats."""

    def test_pages_of_six(self, api):
        api.fetch_all_referrals.return_value = [_referral(str(i)) for i in range(13)]
        store = loaded(CandidateStore(api))

        assert len(store.page(1).items) == 6
        assert store.page(3).items[0].id == "12"
        assert store.page(99).number == 3

    def test_filter_resets_page(self, api):
        api.fetch_all_referrals.return_value = [_referral(str(i)) for i in range(13)]
        store = loaded(CandidateStore(api))
        store.page(2)

        store.filter("dev")

        assert store.page().number == 1

    def test_stats(self, store):
        loaded(store)

        stats = store.stats()

        assert stats.total == 3
        assert stats.reviewed == 1

    def test_listener_errors_are_contained(self, store):
        """Should keep going when a listener raises."""
        store.add_listener(Mock(side_effect=RuntimeError("render failed")))

        result = asyncio.run(store.fetch(UserRole.ADMIN))

        assert result.ok

    def test_reset(self, store):
        loaded(store)
        store.filter("qa")

        store.reset()

        assert store.referrals == ()
        assert store.search.term == ""
