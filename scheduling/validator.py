"""Prüfung eines Stundenblock-Satzes für genau einen Kurs.

Reihenfolge (bricht beim ersten Fehler ab, alles-oder-nichts):
  1. Struktur je Block: Raum gesetzt, Beginn < Ende
  2. Schichtfenster je Block
  3. Überschneidung mit Blöcken anderer Kurse derselben Gruppe
  4. Überschneidung innerhalb des eingereichten Satzes

Die billigen Einzelprüfungen laufen vor den paarweisen Vergleichen
(O(n·m) gegen bestehende Blöcke, O(n²) innerhalb des Satzes).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config.schema import EngineConfig
from models.group import Group
from models.schedule_entry import ScheduleEntry
from scheduling.errors import (
    CrossCourseConflict,
    IntraBatchConflict,
    InvalidEntry,
    OutOfShiftWindow,
    ScheduleRejection,
)
from scheduling.overlap import entries_overlap
from scheduling.shift_window import shift_label, shift_window_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    """Ergebnis von ScheduleValidator.check()."""

    entries: list[ScheduleEntry]
    rejection: Optional[ScheduleRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


class ScheduleValidator:
    """Prüft Kandidaten-Blöcke eines Kurses gegen Schicht und Geschwisterkurse."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config

    def validate(
        self,
        target_course_id: str,
        candidates: list[ScheduleEntry],
        group: Group,
        existing: list[ScheduleEntry],
    ) -> list[ScheduleEntry]:
        """Gibt den akzeptierten Satz zurück oder wirft eine ScheduleRejection.

        existing: Blöcke aller Kurse der Gruppe; Blöcke des Zielkurses selbst
        werden ignoriert, da sie durch den neuen Satz ersetzt werden.
        """
        batch = [c.for_course(target_course_id) for c in candidates]
        siblings = [e for e in existing if e.course_id != target_course_id]

        self._check_structure(batch)
        self._check_shift_window(batch, group)
        self._check_cross_course(batch, siblings)
        self._check_intra_batch(batch)

        logger.debug(
            f"Kurs {target_course_id}: {len(batch)} Blöcke akzeptiert "
            f"(geprüft gegen {len(siblings)} Blöcke der Gruppe {group.id})"
        )
        return batch

    def check(
        self,
        target_course_id: str,
        candidates: list[ScheduleEntry],
        group: Group,
        existing: list[ScheduleEntry],
    ) -> ValidationOutcome:
        """Wie validate(), liefert die Ablehnung aber als Wert statt als Ausnahme."""
        try:
            batch = self.validate(target_course_id, candidates, group, existing)
        except ScheduleRejection as rejection:
            logger.info(f"Kurs {target_course_id} abgelehnt: {rejection.message}")
            return ValidationOutcome(entries=list(candidates), rejection=rejection)
        return ValidationOutcome(entries=batch)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_structure(self, batch: list[ScheduleEntry]) -> None:
        for i, entry in enumerate(batch):
            if not entry.room.strip():
                raise InvalidEntry(i, entry, "Alle Blöcke brauchen einen Raum")
            if entry.start_time >= entry.end_time:
                raise InvalidEntry(
                    i, entry,
                    f"Beginn {entry.start_time} muss vor Ende {entry.end_time} liegen",
                )

    def _check_shift_window(self, batch: list[ScheduleEntry], group: Group) -> None:
        window = shift_window_of(group)
        for i, entry in enumerate(batch):
            if not window.contains(entry.start_time, entry.end_time):
                raise OutOfShiftWindow(i, entry, shift_label(group, self.config), window)

    def _check_cross_course(
        self, batch: list[ScheduleEntry], siblings: list[ScheduleEntry]
    ) -> None:
        for i, entry in enumerate(batch):
            for other in siblings:
                if entries_overlap(entry, other):
                    raise CrossCourseConflict(i, entry, other)

    def _check_intra_batch(self, batch: list[ScheduleEntry]) -> None:
        for i in range(len(batch)):
            for j in range(i + 1, len(batch)):
                if entries_overlap(batch[i], batch[j]):
                    raise IntraBatchConflict(i, j, batch[i], batch[j])
