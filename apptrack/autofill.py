"""
Auto-fill an application draft from a job-posting URL.

Runs: fetch readable text → heuristic job id → AI field extraction → merge.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Callable

from apptrack.errors import AutoFillBusyError, AutoFillError, FetchError, GenerationError
from apptrack.extractor import extract_fields
from apptrack.job_id import extract_identifier
from apptrack.llm import GenerationClient
from apptrack.log import get_logger
from apptrack.models import Draft, ExtractionResult
from apptrack.reader import fetch_readable_text

log = get_logger(__name__)

SUCCESS_MESSAGE = "Auto-fill complete. Review and submit."

# Fields only the model supplies: AI value else existing draft value.
AI_ONLY_FIELDS: tuple[str, ...] = (
    "job_title",
    "company_name",
    "job_description",
    "location",
    "employment_type",
    "salary_range",
)


@dataclass
class AutoFillResult:
    draft: Draft
    message: str
    heuristic_id: str
    extraction: ExtractionResult


def merge_draft(draft: Draft, url: str, heuristic_id: str, extraction: ExtractionResult) -> Draft:
    """Merge extracted values into a copy of *draft*; never writes an empty value."""
    updates = {name: getattr(extraction, name) or getattr(draft, name) for name in AI_ONLY_FIELDS}
    updates["job_id"] = extraction.job_id_candidate or heuristic_id or draft.job_id
    updates["link"] = extraction.application_link or url.strip() or draft.link
    return replace(draft, **updates)


class AutoFiller:
    """Serializes auto-fill requests: a second call while one runs is rejected."""

    def __init__(
        self,
        client: GenerationClient,
        fetch: Callable[[str], str] = fetch_readable_text,
    ) -> None:
        self.client = client
        self.fetch = fetch
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def auto_fill(self, url: str, draft: Draft) -> AutoFillResult:
        url = (url or "").strip()
        if not url:
            raise AutoFillError("Please paste a job URL first.")

        if not self._lock.acquire(blocking=False):
            raise AutoFillBusyError("Auto-fill already in progress.")
        try:
            return self._run(url, draft)
        finally:
            self._lock.release()

    def _run(self, url: str, draft: Draft) -> AutoFillResult:
        try:
            text = self.fetch(url)
        except FetchError as exc:
            log.error("Auto-fill fetch failed for %s: %s", url, exc)
            raise AutoFillError(f"Auto-fill failed: {exc}") from exc

        heuristic_id = extract_identifier(url, text)

        try:
            extraction = extract_fields(text, url, self.client)
        except GenerationError as exc:
            log.error("Auto-fill extraction failed for %s: %s", url, exc)
            raise AutoFillError(f"Auto-fill failed: {exc}") from exc

        merged = merge_draft(draft, url, heuristic_id, extraction)
        log.info(
            "Auto-filled %s @ %s (job id %r) from %s",
            merged.job_title or "?", merged.company_name or "?", merged.job_id, url,
        )
        return AutoFillResult(
            draft=merged,
            message=SUCCESS_MESSAGE,
            heuristic_id=heuristic_id,
            extraction=extraction,
        )
