"""Datenspeicher-Modul: Schnittstelle, Arbeitsspeicher- und JSON-Ablage."""

from store.base import ScheduleStore
from store.errors import NotFoundError, StoreError
from store.json_store import JsonScheduleStore
from store.memory import InMemoryScheduleStore

__all__ = [
    "ScheduleStore",
    "StoreError",
    "NotFoundError",
    "InMemoryScheduleStore",
    "JsonScheduleStore",
]
