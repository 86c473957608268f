"""
Unit tests for the httpx-based API adapters.
"""

import asyncio
import json

import httpx
import pytest

from crms.application.interfaces import ApiError, ResponseFormatError
from crms.domain.entities import ReferralStatus, User, UserRole
from crms.domain.value_objects import AuthSession, ReferralInput
from crms.infrastructure.http import ApiClient, HttpAuthApi, HttpReferralApi
from crms.infrastructure.http.auth_api import parse_login
from crms.infrastructure.http.referral_api import parse_referrals


BASE_URL = "http://api.test"


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, exc=None):
        self.status_code = status_code
        self.body = body
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder: Recorder, session=None) -> ApiClient:
    return ApiClient(
        BASE_URL,
        session_provider=lambda: session,
        transport=httpx.MockTransport(recorder),
    )


def call(client: ApiClient, coro_factory):
    """Run one adapter call and close the client on the same loop."""

    async def runner():
        try:
            return await coro_factory()
        finally:
            await client.close()

    return asyncio.run(runner())


class TestApiClient:
    """Tests for ApiClient."""

    def test_prefix_and_bearer(self):
        """Should prefix paths and attach the session token."""
        recorder = Recorder(body={"ok": True})
        session = AuthSession(token="abc", user=User(id="u1"))
        client = make_client(recorder, session)

        body = call(client, lambda: client.get("/my-referrals"))

        assert body == {"ok": True}
        assert str(recorder.last.url) == "http://api.test/api/user/my-referrals"
        assert recorder.last.headers["Authorization"] == "Bearer abc"

    def test_no_session_no_header(self):
        recorder = Recorder(body={})
        client = make_client(recorder)

        call(client, lambda: client.post("/login", json={}))

        assert "Authorization" not in recorder.last.headers

    def test_empty_body(self):
        client = make_client(Recorder(status_code=204))

        assert call(client, lambda: client.delete("/admin/referrals/1")) is None

    def test_error_message_from_body(self):
        """Should surface the server's message and status."""
        client = make_client(Recorder(status_code=401, body={"message": "Invalid credentials"}))

        with pytest.raises(ApiError) as exc_info:
            call(client, lambda: client.post("/login", json={}))

        assert exc_info.value.message == "Invalid credentials"
        assert exc_info.value.status_code == 401
        assert exc_info.value.is_unauthorized

    def test_error_message_from_status(self):
        client = make_client(Recorder(status_code=500))

        with pytest.raises(ApiError, match="Request failed with status code 500"):
            call(client, lambda: client.get("/admin/referrals"))

    def test_transport_error(self):
        """Should turn connection failures into ApiError without status."""
        recorder = Recorder(exc=httpx.ConnectError("connection refused"))
        client = make_client(recorder)

        with pytest.raises(ApiError) as exc_info:
            call(client, lambda: client.get("/admin/referrals"))

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message


class TestHttpReferralApi:
    """Tests for HttpReferralApi."""

    def test_fetch_all(self):
        recorder = Recorder(body=[
            {"_id": "1", "name": "Ana", "email": "a@x.io", "jobTitle": "Dev", "status": "Hired"},
        ])
        client = make_client(recorder)
        api = HttpReferralApi(client)

        referrals = call(client, api.fetch_all_referrals)

        assert recorder.last.url.path == "/api/user/admin/referrals"
        assert referrals[0].status == ReferralStatus.HIRED

    def test_status_update_payload(self):
        recorder = Recorder(body={})
        client = make_client(recorder)
        api = HttpReferralApi(client)

        call(client, lambda: api.update_status("7", ReferralStatus.REVIEWED))

        assert recorder.last.method == "PUT"
        assert recorder.last.url.path == "/api/user/admin/referrals/7/status"
        assert json.loads(recorder.last.content) == {"status": "Reviewed"}

    def test_bulk_update_payload(self):
        """Should send every id in one request."""
        recorder = Recorder(body={})
        client = make_client(recorder)
        api = HttpReferralApi(client)

        call(client, lambda: api.bulk_update_status(["1", "2"], ReferralStatus.HIRED))

        assert len(recorder.requests) == 1
        assert recorder.last.url.path == "/api/user/admin/referrals/bulk-status-update"
        assert json.loads(recorder.last.content) == {"updates": [
            {"referralId": "1", "status": "Hired"},
            {"referralId": "2", "status": "Hired"},
        ]}

    def test_delete(self):
        recorder = Recorder(body={"message": "deleted"})
        client = make_client(recorder)
        api = HttpReferralApi(client)

        call(client, lambda: api.delete_referral("9"))

        assert recorder.last.method == "DELETE"
        assert recorder.last.url.path == "/api/user/admin/referrals/9"

    def test_submit_multipart(self, tmp_path):
        """Should post form fields and the resume file together."""
        resume = tmp_path / "cv.pdf"
        resume.write_bytes(b"%PDF-1.4")
        recorder = Recorder(status_code=201, body={"_id": "srv-1"})
        client = make_client(recorder)
        api = HttpReferralApi(client)

        body = call(client, lambda: api.submit_referral(ReferralInput(
            name="Ana", email="ana@x.io", job_title="QA Engineer", resume_file=resume,
        )))

        assert body == {"_id": "srv-1"}
        assert recorder.last.url.path == "/api/user/referal-submit"
        assert recorder.last.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="jobTitle"' in recorder.last.content
        assert b'filename="cv.pdf"' in recorder.last.content

    def test_analytics_query(self):
        recorder = Recorder(body={"type": "bar", "data": []})
        client = make_client(recorder)
        api = HttpReferralApi(client)

        call(client, lambda: api.fetch_analytics("bar"))

        assert recorder.last.url.path == "/api/user/admin/analytics"
        assert recorder.last.url.params["type"] == "bar"

    def test_analytics_requires_object(self):
        client = make_client(Recorder(body=[]))
        api = HttpReferralApi(client)

        with pytest.raises(ResponseFormatError, match="No data received"):
            call(client, lambda: api.fetch_analytics("pie"))


class TestParsing:
    """Tests for response parsing."""

    def test_referrals_must_be_list(self):
        with pytest.raises(ResponseFormatError):
            parse_referrals({"referrals": []})

    def test_referral_without_id(self):
        """Should reject the whole response on one bad record."""
        with pytest.raises(ResponseFormatError, match="Invalid referral record"):
            parse_referrals([{"_id": "1"}, {"name": "No Id"}])

    def test_login_response(self):
        session = parse_login({"token": "t", "user": {"_id": "a1", "role": "admin"}})

        assert session.token == "t"
        assert session.user.role == UserRole.ADMIN

    @pytest.mark.parametrize("body", [None, {"token": "t"}, {"user": {"_id": "1"}}, "ok"])
    def test_login_response_incomplete(self, body):
        with pytest.raises(ResponseFormatError):
            parse_login(body)


class TestHttpAuthApi:
    """Tests for HttpAuthApi."""

    def test_login(self):
        recorder = Recorder(body={"token": "t", "user": {"_id": "u1", "email": "d@x.io"}})
        client = make_client(recorder)
        api = HttpAuthApi(client)

        session = call(client, lambda: api.login("d@x.io", "secret1"))

        assert session.user.id == "u1"
        assert recorder.last.url.path == "/api/user/login"
        assert json.loads(recorder.last.content) == {"email": "d@x.io", "password": "secret1"}

    def test_change_password_sends_token_as_query(self):
        recorder = Recorder(body={})
        client = make_client(recorder)
        api = HttpAuthApi(client)

        call(client, lambda: api.change_password("secret1", "tok"))

        assert recorder.last.url.path == "/api/user/request-password-change"
        assert recorder.last.url.params["token"] == "tok"
        assert json.loads(recorder.last.content) == {"newPassword": "secret1"}
