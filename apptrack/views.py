"""Sorted and filtered views over the application mirror."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from apptrack.models import ALL_STATUSES, ApplicationRecord

ASCENDING = "ascending"
DESCENDING = "descending"

SEARCH_FIELDS: tuple[str, ...] = ("job_title", "company_name", "job_id")


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = None
    direction: str = ASCENDING


def request_sort(config: SortConfig, key: str) -> SortConfig:
    """Clicking the ascending key again flips it; anything else sorts ascending."""
    if config.key == key and config.direction == ASCENDING:
        return SortConfig(key, DESCENDING)
    return SortConfig(key, ASCENDING)


def sort_records(records: Iterable[ApplicationRecord], config: SortConfig) -> list[ApplicationRecord]:
    items = list(records)
    if config.key is None:
        return items
    # sorted() stays stable with reverse=True
    return sorted(
        items,
        key=lambda r: getattr(r, config.key, "") or "",
        reverse=config.direction == DESCENDING,
    )


def filter_records(
    records: Iterable[ApplicationRecord],
    query: str = "",
    status: str = ALL_STATUSES,
) -> list[ApplicationRecord]:
    q = (query or "").lower()
    out: list[ApplicationRecord] = []
    for r in records:
        matches_query = any(q in (getattr(r, name) or "").lower() for name in SEARCH_FIELDS)
        matches_status = status == ALL_STATUSES or r.status == status
        if matches_query and matches_status:
            out.append(r)
    return out


def visible_records(
    records: Iterable[ApplicationRecord],
    config: SortConfig = SortConfig(),
    query: str = "",
    status: str = ALL_STATUSES,
) -> list[ApplicationRecord]:
    return filter_records(sort_records(records, config), query, status)
