"""URL helpers shared by the reader and the identifier extractor."""
from __future__ import annotations

import re

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


def normalize_url(url: str) -> str:
    """Strip whitespace and prepend https:// when no scheme is present."""
    url = (url or "").strip()
    if not url:
        return ""
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url.lstrip('/')}"
