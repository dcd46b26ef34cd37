"""Environment-driven settings for the HTTP entrypoint."""

from __future__ import annotations

import logging
import os

from phone_quote.use_cases.format_quote import DEFAULT_QUOTE_LABEL

DEFAULT_LOG_LEVEL = "INFO"


def log_level() -> int:
    """Root log level from ``PHONE_QUOTE_LOG_LEVEL``; unknown names fall back to INFO."""
    name = os.getenv("PHONE_QUOTE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def quote_label() -> str:
    label = os.getenv("PHONE_QUOTE_QUOTE_LABEL", "").strip()
    return label or DEFAULT_QUOTE_LABEL


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("phone_quote").setLevel(log_level())
