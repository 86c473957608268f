"""
Unit tests for Settings and AppContext wiring.
"""

import asyncio

import httpx
import pytest
from pydantic import ValidationError

from crms.application.context import AppContext
from crms.application.use_cases import AuthState
from crms.config.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Create test settings."""
    return Settings(
        data_dir=tmp_path,
        api_base_url="http://api.test/",
        cache_ttl_seconds=60,
        message_clear_delay=0.5,
        page_size=4,
    )


class TestSettings:
    """Tests for configuration validation."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings()

        assert settings.cache_ttl_seconds == 300
        assert settings.message_clear_delay == 3.0
        assert settings.page_size == 6

    def test_trailing_slash_removed(self, settings):
        assert settings.api_base_url == "http://api.test"

    def test_derived_paths(self, settings, tmp_path):
        assert settings.storage_path == tmp_path / "local_storage.db"
        assert settings.upload_dir == tmp_path / "uploads"

    def test_env_prefix(self, monkeypatch, tmp_path):
        """Should read CRMS_ variables."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CRMS_PAGE_SIZE", "12")

        assert Settings().page_size == 12

    @pytest.mark.parametrize("field,value", [
        ("page_size", 0),
        ("request_timeout", 0),
        ("port", 70000),
        ("log_level", "TRACE"),
    ])
    def test_fail_fast(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})


class TestAppContext:
    """Tests for AppContext wiring."""

    def test_settings_flow_into_use_cases(self, settings):
        ctx = AppContext(settings)

        assert ctx.store.page_size == 4
        assert ctx.store.messages.clear_delay == 0.5
        assert ctx.guard.auth is ctx.auth

    def test_login_then_authorized_call(self, settings):
        """Should attach the token from the live session to later calls."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith("/login"):
                return httpx.Response(200, json={"token": "t", "user": {"_id": "u1", "role": "user"}})
            return httpx.Response(200, json=[])

        async def scenario():
            ctx = AppContext(settings, transport=httpx.MockTransport(handler))
            state = await ctx.initialize()
            try:
                await ctx.auth.login("dee@example.com", "secret1")
                await ctx.store.fetch(ctx.auth.user.role)
                await ctx.logout()
                return state, ctx.auth.state
            finally:
                await ctx.close()

        initial, final = asyncio.run(scenario())

        assert initial == AuthState.UNAUTHENTICATED
        assert final == AuthState.UNAUTHENTICATED
        assert "Authorization" not in seen[0].headers
        assert seen[1].url.path == "/api/user/my-referrals"
        assert seen[1].headers["Authorization"] == "Bearer t"
