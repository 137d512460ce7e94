"""Datenmodell für einen wöchentlich wiederkehrenden Stundenblock (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field

from models.timeofday import TIME_PATTERN, format_range
from models.weekday import Weekday


class ScheduleEntry(BaseModel):
    """Ein Stundenblock eines Kurses: Tag, Beginn, Ende und Raum.

    Formatfehler (Uhrzeit, Tag) werden beim Parsen abgewiesen. Inhaltliche
    Regeln (Beginn < Ende, Raum gesetzt, Schichtfenster, Überschneidungen)
    prüft der ScheduleValidator, damit er den betroffenen Eintrag benennen kann.
    """

    id: Optional[str] = None            # None bis zur Speicherung
    course_id: str
    day: Weekday
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    room: str = ""
    # Denormalisiert für die Anzeige (vom Datenspeicher befüllt)
    course_name: Optional[str] = None
    teacher_name: Optional[str] = None
    group_name: Optional[str] = None

    @property
    def time_range(self) -> str:
        """Zeitspanne als Text, z.B. "09:00–10:30"."""
        return format_range(self.start_time, self.end_time)

    @property
    def display_name(self) -> str:
        """Kursname für Anzeigen; fällt auf die Kurs-ID zurück."""
        return self.course_name or self.course_id

    def same_slot_as(self, other: "ScheduleEntry") -> bool:
        """Gleicher Tag, gleiche Zeit, gleicher Raum (Kurs und ID egal)."""
        return (
            self.day == other.day
            and self.start_time == other.start_time
            and self.end_time == other.end_time
            and self.room == other.room
        )

    def for_course(self, course_id: str) -> "ScheduleEntry":
        """Kopie, die dem angegebenen Kurs gehört."""
        if self.course_id == course_id:
            return self
        return self.model_copy(update={"course_id": course_id})

    def __str__(self) -> str:
        return f"{self.day.short} {self.time_range} ({self.room or '—'})"
