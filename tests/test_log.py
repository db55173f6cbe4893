"""Tests for apptrack/log.py."""

import logging

import pytest

from apptrack import log


@pytest.fixture
def restore_levels():
    names = ("", "httpx", "httpcore", "openai", "urllib3")
    saved = {n: logging.getLogger(n).level for n in names}
    yield
    for n, level in saved.items():
        logging.getLogger(n).setLevel(level)


def _record(msg, *args):
    return logging.LogRecord("apptrack.llm", logging.ERROR, __file__, 1, msg, args, None)


class TestConfigure:
    def test_http_and_sdk_loggers_held_at_warning(self, monkeypatch, restore_levels):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        log._configure()

        assert logging.getLogger().level == logging.DEBUG
        for name in ("httpx", "httpcore", "openai", "urllib3"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_stricter_root_level_wins(self, monkeypatch, restore_levels):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        log._configure()
        assert logging.getLogger("openai").level == logging.ERROR

    def test_get_logger_returns_named_logger(self):
        assert log.get_logger("apptrack.reader").name == "apptrack.reader"


class TestRedactSecrets:
    def test_masks_groq_key_in_args(self):
        record = _record("Groq call failed with key %s", "gsk_abcdef1234567890")
        assert log.RedactSecrets().filter(record) is True
        assert record.getMessage() == "Groq call failed with key gsk_***"

    def test_masks_bearer_token(self):
        record = _record("Authorization: Bearer eyJhbGciOi.abc-def")
        log.RedactSecrets().filter(record)
        assert record.getMessage() == "Authorization: Bearer ***"

    def test_leaves_plain_messages_alone(self):
        record = _record("Fetched %d chars from %s", 120, "https://acme.com/jobs/1")
        log.RedactSecrets().filter(record)
        assert record.args == (120, "https://acme.com/jobs/1")
        assert record.getMessage() == "Fetched 120 chars from https://acme.com/jobs/1"
