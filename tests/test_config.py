"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from cvinsight.config import DEFAULT_API_TIMEOUT, DEFAULT_API_URL, get_settings


class TestGetSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.api_timeout == DEFAULT_API_TIMEOUT
        assert settings.api_token is None
        assert settings.latex_compiler is None
        assert settings.preview_debounce == 1.0

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_API_URL", "https://cv.example.com")
        monkeypatch.setenv("CVINSIGHT_API_TOKEN", "token")
        monkeypatch.setenv("CVINSIGHT_API_TIMEOUT", "12.5")
        monkeypatch.setenv("CVINSIGHT_LATEX_COMPILER", "xelatex")
        monkeypatch.setenv("CVINSIGHT_PREVIEW_DEBOUNCE_MS", "250")

        settings = get_settings()

        assert settings.api_url == "https://cv.example.com"
        assert settings.api_token == "token"
        assert settings.api_timeout == 12.5
        assert settings.latex_compiler == "xelatex"
        assert settings.preview_debounce == 0.25

    def test_zero_timeout_disables_it(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_API_TIMEOUT", "0")
        assert get_settings().api_timeout is None

    def test_bad_numbers_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_API_TIMEOUT", "soon")
        monkeypatch.setenv("CVINSIGHT_PREVIEW_DEBOUNCE_MS", "fast")
        settings = get_settings()
        assert settings.api_timeout == DEFAULT_API_TIMEOUT
        assert settings.preview_debounce_ms == 1000

    def test_negative_debounce_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_PREVIEW_DEBOUNCE_MS", "-5")
        assert get_settings().preview_debounce_ms == 0

    def test_session_and_picture_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_PICTURE_DIR", "/srv/uploads")
        monkeypatch.setenv("CVINSIGHT_SESSION_TTL", "90")
        monkeypatch.setenv("CVINSIGHT_MAX_SESSIONS", "3")
        settings = get_settings()
        assert settings.picture_dir == "/srv/uploads"
        assert settings.session_ttl == 90.0
        assert settings.max_sessions == 3

    def test_session_defaults(self) -> None:
        settings = get_settings()
        assert settings.picture_dir is None
        assert settings.session_ttl == 3600.0
        assert settings.max_sessions == 1000

    def test_zero_session_ttl_disables_expiry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CVINSIGHT_SESSION_TTL", "0")
        monkeypatch.setenv("CVINSIGHT_MAX_SESSIONS", "0")
        settings = get_settings()
        assert settings.session_ttl is None
        assert settings.max_sessions == 1
