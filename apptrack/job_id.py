"""Heuristic job-identifier extraction from a posting URL and its page text.

Rules are tried in order and the first non-empty result wins:

1. a known query parameter (``gh_jid``, ``job_id``, ...)
2. a vendor-specific ATS path pattern (Greenhouse, Lever, Workday, ...)
3. a labeled identifier in the page text ("Job ID: 12345")

Every rule is wrapped so that a parse failure just moves on to the next one.
Nothing here does I/O and nothing here raises.
"""
from __future__ import annotations

import re
from typing import Callable
from urllib.parse import parse_qs, urlsplit

from apptrack.log import get_logger
from apptrack.urls import normalize_url

log = get_logger(__name__)

QUERY_KEYS: tuple[str, ...] = (
    "gh_jid",
    "job_id",
    "jobid",
    "jobId",
    "jrno",
    "requisitionId",
    "reqId",
    "rid",
    "postingId",
    "vacancyId",
    "jk",
    "currentJobId",
)

_UUID = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"

# (vendor, pattern); the identifier is always the last capture group
PATH_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("greenhouse", re.compile(r"greenhouse\.io/([^/?#]+)/jobs/(\d+)", re.IGNORECASE)),
    ("lever", re.compile(r"jobs\.lever\.co/([^/?#]+)/(" + _UUID + ")", re.IGNORECASE)),
    ("ashby", re.compile(r"jobs\.ashbyhq\.com/([^/?#]+)/(" + _UUID + ")", re.IGNORECASE)),
    ("workday", re.compile(r"myworkdayjobs\.com/(?:.*?/)?job/[^?#]*_([A-Za-z]{0,4}-?\d+(?:-\d+)?)", re.IGNORECASE)),
    ("smartrecruiters", re.compile(r"smartrecruiters\.com/([^/?#]+)/(\d+)", re.IGNORECASE)),
    ("icims", re.compile(r"icims\.com/jobs/(\d+)", re.IGNORECASE)),
    ("jobvite", re.compile(r"jobs\.jobvite\.com/([^/?#]+)/job/([A-Za-z0-9]+)", re.IGNORECASE)),
    ("workable", re.compile(r"apply\.workable\.com/([^/?#]+)/j/([A-Za-z0-9]+)", re.IGNORECASE)),
    ("bamboohr", re.compile(r"\.bamboohr\.com/careers/(\d+)", re.IGNORECASE)),
    ("linkedin", re.compile(r"linkedin\.com/jobs/view/(?:[^/?#]*-)?(\d+)", re.IGNORECASE)),
)

LABEL_PATTERN = re.compile(
    r"\b(?:Job ID|Requisition ID|Req ID|Posting Number|Reference Number)"
    r"[\s:#\-–]*"
    r"([A-Za-z0-9][A-Za-z0-9_\-./#]*)",
    re.IGNORECASE,
)
_TRAILING_PUNCT = ".,;:)]}/-#"


def _from_query(url: str, _text: str) -> str:
    params = parse_qs(urlsplit(url).query)
    for key in QUERY_KEYS:
        for value in params.get(key, []):
            if value.strip():
                return value.strip()
    return ""


def _from_path(url: str, _text: str) -> str:
    for vendor, pattern in PATH_PATTERNS:
        m = pattern.search(url)
        if m:
            log.debug("Matched %s path pattern for %s", vendor, url)
            return m.group(m.lastindex or 0)
    return ""


def _from_text(_url: str, text: str) -> str:
    m = LABEL_PATTERN.search(text or "")
    if not m:
        return ""
    return m.group(1).rstrip(_TRAILING_PUNCT)


STRATEGIES: tuple[Callable[[str, str], str], ...] = (_from_query, _from_path, _from_text)


def extract_identifier(url: str, page_text: str = "") -> str:
    """Return the best job-identifier candidate, or "" when nothing matches."""
    try:
        normalized = normalize_url(url)
    except Exception as exc:
        log.debug("Could not normalize %r: %s", url, exc)
        normalized = ""

    for strategy in STRATEGIES:
        try:
            found = strategy(normalized, page_text)
        except Exception as exc:
            log.debug("%s skipped for %r: %s", strategy.__name__, url, exc)
            continue
        if found:
            return found
    return ""
