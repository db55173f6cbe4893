"""Data models for application records and extraction results."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date
from typing import Any, Iterable

STATUSES: tuple[str, ...] = ("Pending", "Applied", "Interview", "Offer", "Rejected")
DEFAULT_STATUS = "Applied"
ALL_STATUSES = "All"


def _today() -> str:
    return date.today().isoformat()


@dataclass
class Draft:
    """Field values of an application that has not been persisted yet."""

    job_title: str = ""
    company_name: str = ""
    job_id: str = ""
    link: str = ""
    status: str = DEFAULT_STATUS
    date_applied: str = field(default_factory=_today)
    location: str = ""
    employment_type: str = ""
    salary_range: str = ""
    job_description: str = ""
    next_action: str = ""
    reminder_at: str = ""

    def to_fields(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(Draft)}

    @classmethod
    def from_fields(cls, data: dict[str, Any]) -> Draft:
        return cls(**_coerce(data, DRAFT_FIELDS))


@dataclass
class ApplicationRecord(Draft):
    id: str = ""

    def to_draft(self) -> Draft:
        return Draft.from_fields(self.to_fields())

    @classmethod
    def from_fields(cls, data: dict[str, Any]) -> ApplicationRecord:
        return cls(**_coerce(data, DRAFT_FIELDS + ("id",)))

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


DRAFT_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Draft))


def has_duplicate_job_id(records: Iterable[ApplicationRecord], job_id: str, exclude_id: str = "") -> bool:
    """True if another record already uses the non-empty *job_id*."""
    if not job_id:
        return False
    return any(r.job_id == job_id and r.id != exclude_id for r in records)


def _coerce(data: dict[str, Any], names: tuple[str, ...]) -> dict[str, str]:
    """Keep known keys only; None becomes empty string."""
    out: dict[str, str] = {}
    for name in names:
        if name in data:
            value = data[name]
            out[name] = "" if value is None else str(value)
    return out


# camelCase keys of the model's JSON contract -> ExtractionResult attribute
EXTRACTION_KEYS: dict[str, str] = {
    "jobTitle": "job_title",
    "companyName": "company_name",
    "location": "location",
    "employmentType": "employment_type",
    "salaryRange": "salary_range",
    "jobDescription": "job_description",
    "applicationLink": "application_link",
    "jobIdCandidate": "job_id_candidate",
}


@dataclass
class ExtractionResult:
    job_title: str = ""
    company_name: str = ""
    location: str = ""
    employment_type: str = ""
    salary_range: str = ""
    job_description: str = ""
    application_link: str = ""
    job_id_candidate: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ExtractionResult:
        values: dict[str, str] = {}
        for key, attr in EXTRACTION_KEYS.items():
            raw = payload.get(key)
            if isinstance(raw, str):
                values[attr] = raw.strip()
            elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
                values[attr] = str(raw)
        return cls(**values)

    def is_empty(self) -> bool:
        return not any(asdict(self).values())
