"""Extract structured job fields from page text with the language model."""
from __future__ import annotations

import json
import re
from typing import Any, Callable, Optional

from apptrack.llm import GenerationClient
from apptrack.log import get_logger
from apptrack.models import EXTRACTION_KEYS, ExtractionResult

log = get_logger(__name__)

MAX_PAGE_CHARS = 12000

_SCHEMA = "Return strict JSON with keys: " + ", ".join(EXTRACTION_KEYS) + "."

_INSTRUCTIONS = """\
{schema} If unknown, use empty string. No commentary.
For jobIdCandidate, use the job/requisition identifier from the URL query
parameters (e.g. gh_jid, job_id, jobid, requisitionId) or from labeled text
such as "Job ID", "Requisition ID", "Req ID", "Posting Number" or
"Reference Number". Leave it empty if none is present.

URL: {url}

PAGE:
{page}"""

_BRACES_RE = re.compile(r"\{[\s\S]*\}")


def build_prompt(page_text: str, source_url: str) -> str:
    return _INSTRUCTIONS.format(
        schema=_SCHEMA,
        url=source_url or "",
        page=(page_text or "")[:MAX_PAGE_CHARS],
    )


def _parse_direct(text: str) -> Optional[dict[str, Any]]:
    data = json.loads(text)
    return data if isinstance(data, dict) else None


def _parse_brace_block(text: str) -> Optional[dict[str, Any]]:
    m = _BRACES_RE.search(text)
    if not m:
        return None
    data = json.loads(m.group(0))
    return data if isinstance(data, dict) else None


_PARSERS: tuple[Callable[[str], Optional[dict[str, Any]]], ...] = (_parse_direct, _parse_brace_block)


def parse_json_object(text: str) -> dict[str, Any]:
    """Best-effort JSON object from model output; {} when nothing parses."""
    for parser in _PARSERS:
        try:
            data = parser(text)
        except ValueError:
            continue
        if data is not None:
            return data
    log.warning("MalformedExtraction: model output was not a JSON object (%d chars)", len(text or ""))
    return {}


def extract_fields(page_text: str, source_url: str, client: GenerationClient) -> ExtractionResult:
    """Ask the model for job fields. Raises GenerationError on transport failure only."""
    raw = client.generate(build_prompt(page_text, source_url), json_mode=True)
    result = ExtractionResult.from_payload(parse_json_object(raw or "{}"))
    log.info(
        "Extracted fields for %s: title=%r company=%r id=%r",
        source_url, result.job_title, result.company_name, result.job_id_candidate,
    )
    return result
