"""Datenspeicher als JSON-Datei (Pydantic-Serialisierung).

Nach jeder Änderung wird die komplette Datei neu geschrieben, zuerst in eine
temporäre Datei und dann per os.replace an ihren Platz.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.course import Course
from models.group import Group
from models.schedule_entry import ScheduleEntry
from store.errors import StoreError
from store.memory import InMemoryScheduleStore

logger = logging.getLogger(__name__)


class StoreSnapshot(BaseModel):
    """Dateiformat des JSON-Speichers."""

    groups: list[Group] = []
    courses: list[Course] = []
    schedules: list[ScheduleEntry] = []
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"


class JsonScheduleStore(InMemoryScheduleStore):
    """InMemoryScheduleStore, der jeden Zustand in eine JSON-Datei schreibt."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._ready = False
        snapshot = self._read()
        super().__init__(snapshot.groups, snapshot.courses, snapshot.schedules)
        self._ready = True

    def add_group(self, group: Group) -> Group:
        previous = self._groups.get(group.id)
        result = super().add_group(group)
        try:
            self._flush()
        except StoreError:
            self._restore(self._groups, group.id, previous)
            raise
        return result

    def add_course(self, course: Course) -> Course:
        previous = self._courses.get(course.id)
        result = super().add_course(course)
        try:
            self._flush()
        except StoreError:
            self._restore(self._courses, course.id, previous)
            raise
        return result

    def create_schedule(self, entry: ScheduleEntry) -> ScheduleEntry:
        result = super().create_schedule(entry)
        try:
            self._flush()
        except StoreError:
            # Nicht geschriebener Block darf auch im Speicher nicht auftauchen
            del self._schedules[result.id]
            raise
        return result

    def delete_schedule(self, entry_id: str) -> None:
        removed = self._schedules.get(entry_id)
        super().delete_schedule(entry_id)
        try:
            self._flush()
        except StoreError:
            self._schedules[entry_id] = removed
            raise

    @staticmethod
    def _restore(collection: dict, key: str, previous) -> None:
        """Setzt einen Eintrag nach fehlgeschlagenem Schreiben zurück."""
        if previous is None:
            collection.pop(key, None)
        else:
            collection[key] = previous

    # ─── Datei ───

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            groups=list(self._groups.values()),
            courses=list(self._courses.values()),
            schedules=list(self._schedules.values()),
            modified_at=datetime.now(timezone.utc),
        )

    def _read(self) -> StoreSnapshot:
        if not self.path.exists():
            return StoreSnapshot()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return StoreSnapshot.model_validate_json(f.read())
        except (OSError, ValueError) as e:
            raise StoreError(f"Datendatei nicht lesbar: {self.path}: {e}") from e

    def _flush(self) -> None:
        # Beim Laden aus der Datei nicht zurückschreiben
        if not self._ready:
            return
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(self.snapshot().model_dump_json(indent=2))
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"Datendatei konnte nicht geschrieben werden: {self.path}: {e}")
            raise StoreError(f"Datendatei nicht schreibbar: {self.path}: {e}") from e
