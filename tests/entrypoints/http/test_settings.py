import logging

import pytest

from phone_quote.entrypoints.http.settings import configure_logging, log_level, quote_label


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHONE_QUOTE_LOG_LEVEL", raising=False)

    assert log_level() == logging.INFO


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONE_QUOTE_LOG_LEVEL", "debug")

    assert log_level() == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONE_QUOTE_LOG_LEVEL", "chatty")

    assert log_level() == logging.INFO


def test_quote_label_defaults_to_twelve(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHONE_QUOTE_QUOTE_LABEL", raising=False)

    assert quote_label() == "12x"


def test_blank_quote_label_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONE_QUOTE_QUOTE_LABEL", "  ")

    assert quote_label() == "12x"


def test_configure_logging_sets_package_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONE_QUOTE_LOG_LEVEL", "WARNING")

    configure_logging()

    assert logging.getLogger("phone_quote").level == logging.WARNING
