"""Projektion der Stundenblöcke einer Gruppe auf ein Tag × Stunde-Belegungsraster.

Das Raster zeigt, was gespeichert ist. Mehrfachbelegungen werden angezeigt,
nicht abgewiesen; das Verbot von Überschneidungen setzt der ScheduleValidator
durch.
"""

from collections import defaultdict
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from models.group import Group
from models.schedule_entry import ScheduleEntry
from models.timeofday import hour_label, hour_of
from models.weekday import Weekday
from scheduling.overlap import overlaps
from scheduling.shift_window import shift_window_of


class CellState(str, Enum):
    FREE = "free"
    OCCUPIED = "occupied"
    THIS_COURSE = "this_course"


class GridCell(BaseModel):
    """Eine Zelle: ein Wochentag und der Stundenslot [HH:00, HH+1:00)."""

    day: Weekday
    hour: int
    state: CellState
    entries: list[ScheduleEntry] = []

    @property
    def course_names(self) -> list[str]:
        """Kursnamen aller belegenden Blöcke in Eintragsreihenfolge."""
        return [e.display_name for e in self.entries]

    @property
    def label(self) -> str:
        """Kursnamen ohne Wiederholungen, kommagetrennt."""
        return ", ".join(dict.fromkeys(self.course_names))

    @property
    def is_free(self) -> bool:
        return self.state == CellState.FREE


class GridRow(BaseModel):
    hour: int
    cells: list[GridCell]     # in Reihenfolge von WeeklyGrid.days

    @property
    def label(self) -> str:
        """Stundenbeginn, z.B. "08:00"."""
        return hour_label(self.hour)


class WeeklyGrid(BaseModel):
    """Belegungsraster einer Gruppe für eine Woche."""

    group_id: str
    days: list[Weekday]
    rows: list[GridRow]
    highlight_course_id: Optional[str] = None

    @property
    def hours(self) -> list[int]:
        return [r.hour for r in self.rows]

    def cell(self, day: Weekday, hour: int) -> GridCell:
        """Gibt die Zelle für (Tag, Stunde) zurück."""
        for row in self.rows:
            if row.hour == hour:
                for c in row.cells:
                    if c.day == day:
                        return c
        raise KeyError((day, hour))

    def occupied_cells(self) -> list[GridCell]:
        return [c for r in self.rows for c in r.cells if not c.is_free]


def hour_slots(group: Group) -> list[int]:
    """Volle Stunden von abgerundetem Schichtbeginn bis einschließlich Schichtende."""
    window = shift_window_of(group)
    return list(range(hour_of(window.start), hour_of(window.end) + 1))


class WeeklyGridProjector:
    """Baut das Belegungsraster aus Schichtfenster und allen Blöcken der Gruppe."""

    def __init__(self, days: Optional[list[Weekday]] = None) -> None:
        self.days = list(days) if days else list(Weekday)

    def project(
        self,
        group: Group,
        entries: list[ScheduleEntry],
        highlight_course_id: Optional[str] = None,
    ) -> WeeklyGrid:
        hours = hour_slots(group)
        index = self._index(entries, hours)

        rows: list[GridRow] = []
        for hour in hours:
            cells: list[GridCell] = []
            for day in self.days:
                occupants = index.get((day, hour), [])
                cells.append(GridCell(
                    day=day,
                    hour=hour,
                    state=self._state(occupants, highlight_course_id),
                    entries=occupants,
                ))
            rows.append(GridRow(hour=hour, cells=cells))

        return WeeklyGrid(
            group_id=group.id,
            days=self.days,
            rows=rows,
            highlight_course_id=highlight_course_id,
        )

    # Index (Tag, Stunde) → Blöcke einmal je Projektion statt Suche pro Zelle
    def _index(
        self, entries: list[ScheduleEntry], hours: list[int]
    ) -> dict[tuple[Weekday, int], list[ScheduleEntry]]:
        index: dict[tuple[Weekday, int], list[ScheduleEntry]] = defaultdict(list)
        for e in entries:
            for hour in hours:
                if overlaps(e.start_time, e.end_time, hour_label(hour), hour_label(hour + 1)):
                    index[(e.day, hour)].append(e)
        return index

    @staticmethod
    def _state(
        occupants: list[ScheduleEntry], highlight_course_id: Optional[str]
    ) -> CellState:
        if not occupants:
            return CellState.FREE
        if highlight_course_id is not None and any(
            e.course_id == highlight_course_id for e in occupants
        ):
            return CellState.THIS_COURSE
        return CellState.OCCUPIED
