from abc import ABC, abstractmethod
from typing import Callable

from apptrack.models import ApplicationRecord

SnapshotCallback = Callable[[list[ApplicationRecord]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class RemoteStore(ABC):
    """Per-user record collection that pushes full snapshots on every change."""

    @abstractmethod
    def subscribe(self, user_id: str, on_change: SnapshotCallback, on_error: ErrorCallback) -> Unsubscribe:
        pass

    @abstractmethod
    def create(self, user_id: str, fields: dict[str, str]) -> str:
        pass

    @abstractmethod
    def update(self, user_id: str, record_id: str, fields: dict[str, str]) -> None:
        pass

    @abstractmethod
    def delete(self, user_id: str, record_id: str) -> None:
        pass
