"""Schnittstelle des externen Datenspeichers für Gruppen, Kurse und Stundenblöcke."""

from typing import Protocol

from models.course import Course
from models.group import Group
from models.schedule_entry import ScheduleEntry


class ScheduleStore(Protocol):
    """Minimaler Datenspeicher: Listen, Anlegen, Löschen.

    Fehler werden als store.errors.StoreError (bzw. NotFoundError) gemeldet.
    """

    def list_groups(self) -> list[Group]: ...

    def get_group(self, group_id: str) -> Group: ...

    def get_course(self, course_id: str) -> Course: ...

    def list_courses_of_group(self, group_id: str) -> list[Course]: ...

    def list_schedules_of_group(self, group_id: str) -> list[ScheduleEntry]:
        """Alle Blöcke aller Kurse der Gruppe, mit Kurs- und Lehrkraftnamen."""
        ...

    def list_schedules_of_course(self, course_id: str) -> list[ScheduleEntry]: ...

    def list_schedules_of_teacher(self, teacher_name: str) -> list[ScheduleEntry]:
        """Alle Blöcke der Kurse einer Lehrkraft über alle Gruppen."""
        ...

    def create_schedule(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Speichert einen Block und gibt ihn mit neuer ID zurück."""
        ...

    def delete_schedule(self, entry_id: str) -> None: ...
