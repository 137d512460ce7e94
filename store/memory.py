"""Datenspeicher im Arbeitsspeicher.

Alle Stundenblöcke liegen in genau einer Sammlung, nach ID geschlüsselt.
Sichten pro Gruppe oder Kurs werden durch Filtern abgeleitet, nie kopiert.
"""

import uuid
from typing import Optional

from models.course import Course
from models.group import Group
from models.schedule_entry import ScheduleEntry
from store.errors import NotFoundError, StoreError


class InMemoryScheduleStore:
    """Implementiert ScheduleStore ohne Persistenz (Tests, Demo, JSON-Basis)."""

    def __init__(
        self,
        groups: Optional[list[Group]] = None,
        courses: Optional[list[Course]] = None,
        schedules: Optional[list[ScheduleEntry]] = None,
    ) -> None:
        self._groups: dict[str, Group] = {}
        self._courses: dict[str, Course] = {}
        self._schedules: dict[str, ScheduleEntry] = {}
        for g in groups or []:
            self.add_group(g)
        for c in courses or []:
            self.add_course(c)
        for s in schedules or []:
            self._insert(s)

    # ─── Stammdaten ───

    def add_group(self, group: Group) -> Group:
        self._groups[group.id] = group
        return group

    def add_course(self, course: Course) -> Course:
        if course.group_id not in self._groups:
            raise NotFoundError(f"Gruppe nicht gefunden: {course.group_id}")
        self._courses[course.id] = course
        return course

    def list_groups(self) -> list[Group]:
        return sorted(self._groups.values(), key=lambda g: g.id)

    def get_group(self, group_id: str) -> Group:
        try:
            group = self._groups[group_id]
        except KeyError:
            raise NotFoundError(f"Gruppe nicht gefunden: {group_id}") from None
        course_count = sum(1 for c in self._courses.values() if c.group_id == group_id)
        return group.model_copy(update={"course_count": course_count})

    def get_course(self, course_id: str) -> Course:
        try:
            return self._courses[course_id]
        except KeyError:
            raise NotFoundError(f"Kurs nicht gefunden: {course_id}") from None

    def list_courses_of_group(self, group_id: str) -> list[Course]:
        self.get_group(group_id)
        return [c for c in self._courses.values() if c.group_id == group_id]

    # ─── Stundenblöcke ───

    def list_schedules_of_group(self, group_id: str) -> list[ScheduleEntry]:
        course_ids = {c.id for c in self.list_courses_of_group(group_id)}
        return self._sorted(
            self._denormalize(e) for e in self._schedules.values()
            if e.course_id in course_ids
        )

    def list_schedules_of_course(self, course_id: str) -> list[ScheduleEntry]:
        self.get_course(course_id)
        return self._sorted(
            self._denormalize(e) for e in self._schedules.values()
            if e.course_id == course_id
        )

    def list_schedules_of_teacher(self, teacher_name: str) -> list[ScheduleEntry]:
        """Blöcke aller Kurse einer Lehrkraft, gruppenübergreifend."""
        course_ids = {c.id for c in self._courses.values() if c.teacher_name == teacher_name}
        if not course_ids:
            raise NotFoundError(f"Lehrkraft ohne Kurse: {teacher_name}")
        return self._sorted(
            self._denormalize(e) for e in self._schedules.values()
            if e.course_id in course_ids
        )

    def create_schedule(self, entry: ScheduleEntry) -> ScheduleEntry:
        self.get_course(entry.course_id)
        stored = entry.model_copy(update={
            "id": f"sch-{uuid.uuid4().hex[:12]}",
            "course_name": None,
            "teacher_name": None,
            "group_name": None,
        })
        self._insert(stored)
        return self._denormalize(stored)

    def delete_schedule(self, entry_id: str) -> None:
        if entry_id not in self._schedules:
            raise NotFoundError(f"Stundenblock nicht gefunden: {entry_id}")
        del self._schedules[entry_id]

    # ─── Intern ───

    def _insert(self, entry: ScheduleEntry) -> None:
        if entry.id is None:
            raise StoreError("Gespeicherte Stundenblöcke brauchen eine ID")
        self._schedules[entry.id] = entry

    def _denormalize(self, entry: ScheduleEntry) -> ScheduleEntry:
        course = self._courses.get(entry.course_id)
        if course is None:
            return entry
        group = self._groups.get(course.group_id)
        return entry.model_copy(update={
            "course_name": course.subject_name,
            "teacher_name": course.teacher_name,
            "group_name": group.name if group else None,
        })

    @staticmethod
    def _sorted(entries) -> list[ScheduleEntry]:
        return sorted(entries, key=lambda e: (e.day, e.start_time, e.course_id))

    def __len__(self) -> int:
        return len(self._schedules)

    def __repr__(self) -> str:
        return (
            f"InMemoryScheduleStore({len(self._groups)} Gruppen, "
            f"{len(self._courses)} Kurse, {len(self._schedules)} Blöcke)"
        )
