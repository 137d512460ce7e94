"""Stundenplan-Prüfung: Überschneidungen, Schichtfenster, Raster und Ersetzung."""

from .errors import (
    ScheduleRejection,
    InvalidEntry,
    OutOfShiftWindow,
    CrossCourseConflict,
    IntraBatchConflict,
    ScheduleReplacementError,
)
from .overlap import overlaps, entries_overlap
from .shift_window import ShiftWindow, shift_window_of
from .validator import ScheduleValidator, ValidationOutcome
from .grid import CellState, GridCell, WeeklyGrid, WeeklyGridProjector
from .replacement import ScheduleReplacer
from .service import SchedulingService, group_by_day

__all__ = [
    "ScheduleRejection",
    "InvalidEntry",
    "OutOfShiftWindow",
    "CrossCourseConflict",
    "IntraBatchConflict",
    "ScheduleReplacementError",
    "overlaps",
    "entries_overlap",
    "ShiftWindow",
    "shift_window_of",
    "ScheduleValidator",
    "ValidationOutcome",
    "CellState",
    "GridCell",
    "WeeklyGrid",
    "WeeklyGridProjector",
    "ScheduleReplacer",
    "SchedulingService",
    "group_by_day",
]
