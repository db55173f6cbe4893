from .base import RemoteStore
from .csv_store import CsvStore

__all__ = ["RemoteStore", "CsvStore"]
