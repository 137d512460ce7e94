"""SchedulingService: verbindet Datenspeicher, Prüfung, Ersetzung und Raster.

Ablauf beim Speichern: Kandidaten → ScheduleValidator → ScheduleReplacer →
aktualisierte Blöcke der Gruppe (daraus wird das Raster neu berechnet).
"""

import logging
from typing import Optional

from config.schema import EngineConfig
from models.group import Group
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday
from scheduling.errors import ScheduleRejection
from scheduling.grid import WeeklyGrid, WeeklyGridProjector
from scheduling.replacement import ScheduleReplacer
from scheduling.validator import ScheduleValidator, ValidationOutcome
from store.base import ScheduleStore

logger = logging.getLogger(__name__)


def group_by_day(entries: list[ScheduleEntry],
                 days: Optional[list[Weekday]] = None) -> dict[Weekday, list[ScheduleEntry]]:
    """Ordnet Blöcke ihren Wochentagen zu; jeder Tag aus `days` ist vorhanden, auch leer.

    Blöcke an Tagen außerhalb von `days` werden hinten angehängt, nicht verworfen.
    """
    by_day: dict[Weekday, list[ScheduleEntry]] = {d: [] for d in (days or list(Weekday))}
    for e in sorted(entries, key=lambda e: (e.day, e.start_time)):
        by_day.setdefault(e.day, []).append(e)
    return by_day


class SchedulingService:

    def __init__(self, store: ScheduleStore, config: Optional[EngineConfig] = None) -> None:
        self.store = store
        self.config = config
        self.validator = ScheduleValidator(config)
        self.replacer = ScheduleReplacer(store)
        self._days = list(config.days) if config else None
        self.projector = WeeklyGridProjector(self._days)

    def _context(self, course_id: str) -> tuple[Group, list[ScheduleEntry]]:
        course = self.store.get_course(course_id)
        group = self.store.get_group(course.group_id)
        return group, self.store.list_schedules_of_group(group.id)

    def validate_course_schedules(
        self, course_id: str, candidates: list[ScheduleEntry]
    ) -> ValidationOutcome:
        """Prüft einen Satz ohne zu speichern."""
        group, existing = self._context(course_id)
        return self.validator.check(course_id, candidates, group, existing)

    def save_course_schedules(
        self, course_id: str, candidates: list[ScheduleEntry]
    ) -> list[ScheduleEntry]:
        """Prüft und speichert einen Satz; wirft ScheduleRejection bei Ablehnung.

        Gibt die aktualisierten Blöcke der ganzen Gruppe zurück.
        """
        group, existing = self._context(course_id)
        try:
            batch = self.validator.validate(course_id, candidates, group, existing)
        except ScheduleRejection as rejection:
            logger.warning(f"Kurs {course_id}: abgelehnt ({rejection.kind}): {rejection.message}")
            raise
        refreshed = self.replacer.replace(course_id, batch)
        logger.info(f"Kurs {course_id} (Gruppe {group.id}): {len(batch)} Blöcke gespeichert")
        return refreshed

    def weekly_grid(self, group_id: str, highlight_course_id: Optional[str] = None) -> WeeklyGrid:
        group = self.store.get_group(group_id)
        entries = self.store.list_schedules_of_group(group_id)
        return self.projector.project(group, entries, highlight_course_id)

    def schedules_by_day_of_group(self, group_id: str) -> dict[Weekday, list[ScheduleEntry]]:
        """Wochenübersicht einer Gruppe als Liste je Tag."""
        self.store.get_group(group_id)
        return group_by_day(self.store.list_schedules_of_group(group_id), self._days)

    def schedules_by_day_of_teacher(self, teacher_name: str) -> dict[Weekday, list[ScheduleEntry]]:
        """Wochenübersicht einer Lehrkraft über alle ihre Gruppen."""
        return group_by_day(self.store.list_schedules_of_teacher(teacher_name), self._days)
