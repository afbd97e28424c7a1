"""Tests for Settings.from_env."""

import pytest

from fruitmail.config import Settings
from fruitmail.dispatch import DEFAULT_OSASCRIPT_TIMEOUT

ENV_KEYS = ("MAIL_DB", "FRUITMAIL_OSASCRIPT_TIMEOUT", "FRUITMAIL_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestSettingsFromEnv:
    def test_defaults_when_env_absent(self) -> None:
        assert Settings.from_env() == Settings(
            mail_db=None, osascript_timeout=DEFAULT_OSASCRIPT_TIMEOUT, log_level="WARNING"
        )

    def test_reads_mail_db(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAIL_DB", "/custom/path/Envelope Index")
        assert Settings.from_env().mail_db == "/custom/path/Envelope Index"

    def test_blank_mail_db_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAIL_DB", "  ")
        assert Settings.from_env().mail_db is None

    def test_reads_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_OSASCRIPT_TIMEOUT", "30")
        assert Settings.from_env().osascript_timeout == 30.0

    def test_zero_timeout_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_OSASCRIPT_TIMEOUT", "0")
        assert Settings.from_env().osascript_timeout is None

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_OSASCRIPT_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="FRUITMAIL_OSASCRIPT_TIMEOUT"):
            Settings.from_env()

    def test_log_level_upper_cased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_LOG_LEVEL", "debug")
        assert Settings.from_env().log_level == "DEBUG"

    def test_unknown_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="FRUITMAIL_LOG_LEVEL"):
            Settings.from_env()

    def test_blank_log_level_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRUITMAIL_LOG_LEVEL", " ")
        assert Settings.from_env().log_level == "WARNING"
