from __future__ import annotations

import pytest

from musewave_worker.app.settings import BackendMode, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MUSEWAVE_API_KEY",
        "GEMINI_API_KEY",
        "API_KEY",
        "MUSEWAVE_API_BASE_URL",
        "API_BASE_URL",
        "MUSEWAVE_BACKEND",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.backend == BackendMode.AUTO
    assert settings.model_id == "gemini-2.5-flash"
    assert settings.temperature == 0.9
    assert settings.fallback_to_offline is False
    assert settings.resolved_backend() == BackendMode.OFFLINE


def test_env_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MUSEWAVE_API_KEY", raising=False)
    monkeypatch.delenv("MUSEWAVE_API_BASE_URL", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("API_BASE_URL", "https://peer.example/")
    monkeypatch.setenv("MUSEWAVE_FALLBACK_TO_OFFLINE", "true")
    settings = Settings()
    assert settings.api_key == "secret"
    assert settings.api_base_url == "https://peer.example"
    assert settings.fallback_to_offline is True
    assert settings.resolved_backend() == BackendMode.FORWARD


def test_blank_values_are_treated_as_unset() -> None:
    settings = Settings(backend=BackendMode.AUTO, api_key="   ", api_base_url=" / ")
    assert settings.api_key is None
    assert settings.api_base_url is None
    assert settings.resolved_backend() == BackendMode.OFFLINE


def test_explicit_backend_wins() -> None:
    settings = Settings(backend="remote", api_key=None, api_base_url="http://peer")
    assert settings.resolved_backend() == BackendMode.REMOTE
