"""Per-user application collections in CSV files with file locking.

Every write re-reads the file under an exclusive lock, applies the change,
rewrites it and then pushes the full record set to the user's subscribers.
"""
from __future__ import annotations

import csv
import fcntl
import hashlib
import threading
import uuid
from pathlib import Path

from apptrack.backends.base import ErrorCallback, RemoteStore, SnapshotCallback, Unsubscribe
from apptrack.config import DATA_DIR
from apptrack.errors import DuplicateIdentifierError, RecordNotFoundError
from apptrack.log import get_logger
from apptrack.models import DRAFT_FIELDS, ApplicationRecord, has_duplicate_job_id

log = get_logger(__name__)

HEADERS: list[str] = ["id", *DRAFT_FIELDS]


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def _safe_name(user_id: str) -> str:
    """Readable prefix plus a digest of the full id, so distinct users never share a directory."""
    prefix = "".join(c if c.isalnum() or c in "-_" else "_" for c in user_id)[:32]
    digest = hashlib.sha256(user_id.encode("utf-8")).hexdigest()
    return f"{prefix}-{digest}"


class CsvStore(RemoteStore):
    def __init__(self, root: Path | None = None) -> None:
        self.root = root or DATA_DIR / "users"
        self._mutex = threading.RLock()
        self._subscribers: dict[str, list[tuple[SnapshotCallback, ErrorCallback]]] = {}
        self._signatures: dict[str, tuple[int, int]] = {}

    def path_for(self, user_id: str) -> Path:
        return self.root / _safe_name(user_id) / "applications.csv"

    def _ensure_file(self, user_id: str) -> Path:
        path = self.path_for(user_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            with open(path, "w", newline="", encoding="utf-8") as f:
                _lock(f)
                csv.writer(f).writerow(HEADERS)
                _unlock(f)
            log.info("Created application collection → %s", path)
        return path

    def _read(self, user_id: str) -> list[ApplicationRecord]:
        path = self._ensure_file(user_id)
        with open(path, "r", newline="", encoding="utf-8") as f:
            _lock(f, exclusive=False)
            rows = list(csv.DictReader(f))
            _unlock(f)
        return [ApplicationRecord.from_fields(r) for r in rows]

    def _rewrite(self, user_id: str, change) -> object:
        """Apply *change(records)* under an exclusive lock and persist the result."""
        path = self._ensure_file(user_id)
        with self._mutex, open(path, "r+", newline="", encoding="utf-8") as f:
            _lock(f)
            try:
                records = [ApplicationRecord.from_fields(r) for r in csv.DictReader(f)]
                result = change(records)
                f.seek(0)
                f.truncate()
                w = csv.DictWriter(f, fieldnames=HEADERS)
                w.writeheader()
                w.writerows(r.as_dict() for r in records)
            finally:
                _unlock(f)
        return result

    # ── RemoteStore ─────────────────────────────────────────────────────

    def subscribe(self, user_id: str, on_change: SnapshotCallback, on_error: ErrorCallback) -> Unsubscribe:
        entry = (on_change, on_error)
        with self._mutex:
            self._subscribers.setdefault(user_id, []).append(entry)
            self._deliver(user_id, [entry])

        def unsubscribe() -> None:
            with self._mutex:
                subs = self._subscribers.get(user_id, [])
                if entry in subs:
                    subs.remove(entry)

        return unsubscribe

    def create(self, user_id: str, fields: dict[str, str]) -> str:
        record_id = uuid.uuid4().hex[:20]

        def change(records: list[ApplicationRecord]) -> str:
            record = ApplicationRecord.from_fields({**fields, "id": record_id})
            if has_duplicate_job_id(records, record.job_id):
                raise DuplicateIdentifierError(record.job_id)
            records.append(record)
            return record_id

        self._rewrite(user_id, change)
        log.debug("Created %s for %s", record_id, user_id)
        self._publish(user_id)
        return record_id

    def update(self, user_id: str, record_id: str, fields: dict[str, str]) -> None:
        def change(records: list[ApplicationRecord]) -> None:
            for i, r in enumerate(records):
                if r.id == record_id:
                    merged = ApplicationRecord.from_fields({**r.as_dict(), **fields, "id": record_id})
                    if has_duplicate_job_id(records, merged.job_id, exclude_id=record_id):
                        raise DuplicateIdentifierError(merged.job_id)
                    records[i] = merged
                    return
            raise RecordNotFoundError(record_id)

        self._rewrite(user_id, change)
        log.debug("Updated %s for %s", record_id, user_id)
        self._publish(user_id)

    def delete(self, user_id: str, record_id: str) -> None:
        def change(records: list[ApplicationRecord]) -> None:
            before = len(records)
            records[:] = [r for r in records if r.id != record_id]
            if len(records) == before:
                raise RecordNotFoundError(record_id)

        self._rewrite(user_id, change)
        log.debug("Deleted %s for %s", record_id, user_id)
        self._publish(user_id)

    # ── change notification ─────────────────────────────────────────────

    def refresh(self, user_id: str) -> bool:
        """Push a snapshot if another process changed the file since the last push."""
        path = self.path_for(user_id)
        if not path.exists():
            return False
        st = path.stat()
        if self._signatures.get(user_id) == (st.st_mtime_ns, st.st_size):
            return False
        self._publish(user_id)
        return True

    def _publish(self, user_id: str) -> None:
        # Read and delivery share the mutex so snapshots arrive in write order.
        with self._mutex:
            subs = list(self._subscribers.get(user_id, []))
            self._deliver(user_id, subs)

    def _deliver(self, user_id: str, subs: list[tuple[SnapshotCallback, ErrorCallback]]) -> None:
        try:
            records = self._read(user_id)
            st = self.path_for(user_id).stat()
            self._signatures[user_id] = (st.st_mtime_ns, st.st_size)
        except (OSError, csv.Error) as exc:
            log.error("Could not read applications for %s: %s", user_id, exc)
            for _, on_error in subs:
                on_error(exc)
            return
        for on_change, _ in subs:
            on_change(list(records))
