"""Local mirror of one user's applications, kept current by snapshot pushes.

The mirror is only ever assigned by the subscription callback. Writes go to
the remote store after the duplicate job-id check and show up locally once
the store pushes the next snapshot.
"""
from __future__ import annotations

import threading
from typing import Callable

from apptrack.backends.base import RemoteStore, Unsubscribe
from apptrack.errors import (
    DuplicateIdentifierError,
    InvalidRecordError,
    NotSignedInError,
    RecordNotFoundError,
    RemoteWriteError,
)
from apptrack.log import get_logger
from apptrack.models import STATUSES, ApplicationRecord, Draft, has_duplicate_job_id

log = get_logger(__name__)

Listener = Callable[[tuple[ApplicationRecord, ...]], None]


def validate_draft(draft: Draft) -> None:
    if not draft.job_title.strip():
        raise InvalidRecordError("Job title is required.")
    if not draft.company_name.strip():
        raise InvalidRecordError("Company name is required.")
    if draft.status not in STATUSES:
        raise InvalidRecordError(f"Unknown status {draft.status!r}.")


class ApplicationStore:
    def __init__(self, backend: RemoteStore) -> None:
        self.backend = backend
        self.user_id: str | None = None
        self.loading = False
        self._records: tuple[ApplicationRecord, ...] = ()
        self._unsubscribe: Unsubscribe | None = None
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    # ── session ─────────────────────────────────────────────────────────

    @property
    def signed_in(self) -> bool:
        return self.user_id is not None

    @property
    def records(self) -> tuple[ApplicationRecord, ...]:
        return self._records

    def sign_in(self, user_id: str) -> None:
        if self.user_id == user_id:
            return
        if self.signed_in:
            self.sign_out()
        self.user_id = user_id
        self.loading = True
        log.info("Subscribing to applications for %s", user_id)
        self._unsubscribe = self.backend.subscribe(user_id, self._on_snapshot, self._on_error)

    def sign_out(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.user_id = None
        self._replace(())
        self.loading = False

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _on_snapshot(self, records: list[ApplicationRecord]) -> None:
        self._replace(tuple(records))
        self.loading = False
        log.debug("Snapshot: %d application(s)", len(records))

    def _on_error(self, exc: Exception) -> None:
        log.error("Error fetching applications: %s", exc)
        self.loading = False

    def _replace(self, records: tuple[ApplicationRecord, ...]) -> None:
        with self._lock:
            self._records = records
        for listener in list(self._listeners):
            listener(records)

    # ── writes ──────────────────────────────────────────────────────────

    def _require_user(self) -> str:
        if self.user_id is None:
            raise NotSignedInError("Sign in first.")
        return self.user_id

    def _check_unique(self, draft: Draft, exclude_id: str = "") -> None:
        if has_duplicate_job_id(self._records, draft.job_id, exclude_id=exclude_id):
            log.info("Rejected duplicate job id %r", draft.job_id)
            raise DuplicateIdentifierError(draft.job_id)

    def create(self, draft: Draft) -> str:
        """Save a new application and return its id.

        Field validation runs before the duplicate check, so an incomplete
        draft raises InvalidRecordError even when its job id is also taken.
        """
        user_id = self._require_user()
        validate_draft(draft)
        self._check_unique(draft)
        try:
            record_id = self.backend.create(user_id, draft.to_fields())
        except (DuplicateIdentifierError, InvalidRecordError):
            raise
        except Exception as exc:
            log.error("Error adding application: %s", exc)
            raise RemoteWriteError("Could not save the application.") from exc
        log.info("Created %s: %s @ %s", record_id, draft.job_title, draft.company_name)
        return record_id

    def update(self, record_id: str, draft: Draft) -> None:
        """Replace the editable fields of *record_id*; checks run in the same order as create."""
        user_id = self._require_user()
        validate_draft(draft)
        self._check_unique(draft, exclude_id=record_id)
        try:
            self.backend.update(user_id, record_id, draft.to_fields())
        except (DuplicateIdentifierError, RecordNotFoundError):
            raise
        except Exception as exc:
            log.error("Error updating application %s: %s", record_id, exc)
            raise RemoteWriteError("Could not update the application.") from exc
        log.info("Updated %s", record_id)

    def set_status(self, record_id: str, status: str) -> None:
        """Quick status change; writes only the status field."""
        user_id = self._require_user()
        if status not in STATUSES:
            raise InvalidRecordError(f"Unknown status {status!r}.")
        try:
            self.backend.update(user_id, record_id, {"status": status})
        except RecordNotFoundError:
            raise
        except Exception as exc:
            log.error("Quick status update failed for %s: %s", record_id, exc)
            raise RemoteWriteError("Failed to update status") from exc
        log.info("Status of %s → %s", record_id, status)

    def delete(self, record_id: str) -> None:
        user_id = self._require_user()
        try:
            self.backend.delete(user_id, record_id)
        except RecordNotFoundError:
            raise
        except Exception as exc:
            log.error("Error deleting application %s: %s", record_id, exc)
            raise RemoteWriteError("Could not delete the application.") from exc
        log.info("Deleted %s", record_id)

    def get(self, record_id: str) -> ApplicationRecord | None:
        for r in self._records:
            if r.id == record_id:
                return r
        return None
