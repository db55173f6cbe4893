"""Fetch a job posting as plain text through the Jina Reader proxy.

Docs: https://jina.ai/reader
"""
from __future__ import annotations

import requests

from apptrack.config import fetch_timeout, reader_base_url
from apptrack.errors import FetchError
from apptrack.log import get_logger
from apptrack.urls import normalize_url

log = get_logger(__name__)


def reader_url(url: str, base_url: str | None = None) -> str:
    base = base_url or reader_base_url()
    if not base.endswith("/"):
        base += "/"
    return f"{base}{normalize_url(url)}"


def fetch_readable_text(
    url: str,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> str:
    """Return the reader's plain-text rendering of *url*.

    Raises FetchError on any non-2xx status or transport failure. There is
    no retry and no fallback renderer.
    """
    target = reader_url(url, base_url)
    http = session or requests
    try:
        r = http.get(target, timeout=timeout or fetch_timeout())
    except requests.RequestException as exc:
        log.warning("Reader request for %s failed: %s", url, exc)
        raise FetchError(None, f"Failed to fetch job page: {exc}") from exc

    if not 200 <= r.status_code < 300:
        log.warning("Reader returned %d for %s", r.status_code, url)
        raise FetchError(r.status_code)

    text = r.text or ""
    log.debug("Reader returned %d chars for %s", len(text), url)
    return text
