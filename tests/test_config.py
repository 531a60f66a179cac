from __future__ import annotations

import pytest

from badgerblog.config import DEFAULT_CORS_ORIGINS, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BADGERBLOG_HOST",
        "BADGERBLOG_PORT",
        "BADGERBLOG_LOG_LEVEL",
        "BADGERBLOG_CLIENT_VALIDATION",
        "BADGERBLOG_CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s == Settings()
    assert s.port == 8000
    assert s.client_validation is True
    assert s.cors_origins == DEFAULT_CORS_ORIGINS


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BADGERBLOG_HOST", "0.0.0.0")
    monkeypatch.setenv("BADGERBLOG_PORT", "9001")
    monkeypatch.setenv("BADGERBLOG_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BADGERBLOG_CLIENT_VALIDATION", "off")
    monkeypatch.setenv("BADGERBLOG_CORS_ORIGINS", "https://blog.example.com, ,http://localhost:3000")

    s = Settings.from_env()

    assert s.host == "0.0.0.0"
    assert s.port == 9001
    assert s.log_level == "debug"
    assert s.client_validation is False
    assert s.cors_origins == ("https://blog.example.com", "http://localhost:3000")


@pytest.mark.parametrize(
    "name,value",
    [
        ("BADGERBLOG_PORT", "eighty"),
        ("BADGERBLOG_PORT", "70000"),
        ("BADGERBLOG_LOG_LEVEL", "loud"),
        ("BADGERBLOG_CLIENT_VALIDATION", "maybe"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        Settings.from_env()


def test_with_overrides_ignores_none() -> None:
    s = Settings().with_overrides(port=0, host=None, client_validation=False)
    assert s.port == 0
    assert s.host == "127.0.0.1"
    assert s.client_validation is False
