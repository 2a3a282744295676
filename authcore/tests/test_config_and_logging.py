from __future__ import annotations

import pytest

from authcore.infrastructure.notifications import LoggingResetNotifier
from authcore.shared.config.settings import AppConfig, ResetConfig
from authcore.shared.logging import sanitize_message


def test_reset_defaults() -> None:
    config = ResetConfig()

    assert config.timeout_seconds == 3600
    assert not config.url_base.endswith("/")


def test_reset_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ResetConfig(timeout_seconds=0)


def test_reset_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASSWORD_RESET_TIMEOUT", "900")
    monkeypatch.setenv("RESET_URL_BASE", "https://example.com/reset/")

    config = AppConfig()

    assert config.reset.timeout_seconds == 900
    assert config.reset.url_base == "https://example.com/reset"


def test_production_refuses_default_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "dev")

    with pytest.raises(SystemExit):
        AppConfig()


def test_secret_bytes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "s3cret")

    assert AppConfig().secret_bytes == b"s3cret"


def test_sanitizer_redacts_passwords_and_hashes() -> None:
    message = sanitize_message(
        "login password=hunter2 stored pbkdf2:sha256:1000$abcd1234$0123456789abcdef"
    )

    assert "hunter2" not in message
    assert "0123456789abcdef" not in message
    assert "pbkdf2:sha256:1000$" in message


def test_logging_notifier_builds_link() -> None:
    notifier = LoggingResetNotifier("https://example.com/reset/")

    assert notifier.build_link("MQ", "abc-0123") == "https://example.com/reset/MQ/abc-0123"
    notifier.deliver_reset_link("alice@example.com", "abc-0123", "MQ")
