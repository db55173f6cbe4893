"""Exception hierarchy for fetch, generation, auto-fill and store failures."""
from __future__ import annotations


class AppTrackError(Exception):
    """Base class for every error raised by apptrack."""


class FetchError(AppTrackError):
    """The reader proxy returned a non-2xx status or could not be reached."""

    def __init__(self, status: int | None, message: str = "") -> None:
        self.status = status
        if not message:
            message = f"Failed to fetch job page: {status}" if status else "Failed to fetch job page"
        super().__init__(message)


class GenerationError(AppTrackError):
    """The generation service call failed at the transport level."""

    def __init__(self, status: int | None, message: str = "") -> None:
        self.status = status
        if not message:
            message = f"HTTP error! status: {status}" if status else "Generation service unavailable"
        super().__init__(message)


class AutoFillError(AppTrackError):
    """Auto-fill could not complete; the draft was left untouched."""


class AutoFillBusyError(AutoFillError):
    """An auto-fill request is already in flight."""


class StoreError(AppTrackError):
    pass


class NotSignedInError(StoreError):
    pass


class InvalidRecordError(StoreError):
    pass


class RecordNotFoundError(StoreError):
    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"No application with id {record_id!r}")


class DuplicateIdentifierError(StoreError):
    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__("This Job ID already exists. Please use a unique ID.")


class RemoteWriteError(StoreError):
    """Create/update/delete failed after validation passed."""
