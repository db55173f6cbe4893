"""Logging setup for apptrack: console plus a daily file under ``logs/``.

``LOG_LEVEL`` sets the root level and ``APPTRACK_LOG_DIR`` moves the log
files. HTTP client and SDK loggers are held at WARNING so reader and
Groq request lines do not drown out the auto-fill steps. API keys and
bearer tokens are masked before any of our handlers write a record.
"""
from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime
from pathlib import Path

_LOG_DIR = Path(os.environ.get("APPTRACK_LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")
_SECRET = re.compile(r"\b(gsk_|sk-|Bearer\s+)[A-Za-z0-9_\-.]{6,}")
_configured = False


class RedactSecrets(logging.Filter):
    """Replace API keys and bearer tokens in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _SECRET.sub(lambda m: m.group(1) + "***", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # someone else (pytest, an embedding app) owns the handlers
    if root.handlers:
        return

    redact = RedactSecrets()
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    console.addFilter(redact)
    root.addHandler(console)

    try:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = _LOG_DIR / f"apptrack_{datetime.now().strftime('%Y-%m-%d')}.log"
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
        fh.addFilter(redact)
        root.addHandler(fh)
    except OSError:
        root.warning("File logging disabled: cannot write to %s", _LOG_DIR)
