"""Überschneidungsprüfung für halboffene Zeitintervalle [start, end)."""

from models.schedule_entry import ScheduleEntry


def overlaps(start1: str, end1: str, start2: str, end2: str) -> bool:
    """True wenn sich [start1, end1) und [start2, end2) schneiden.

    Blöcke, die sich nur berühren (Ende des einen = Beginn des anderen),
    überschneiden sich nicht.
    """
    return start1 < end2 and end1 > start2


def entries_overlap(a: ScheduleEntry, b: ScheduleEntry) -> bool:
    """Gleicher Wochentag und überschneidende Zeiten."""
    return a.day == b.day and overlaps(a.start_time, a.end_time, b.start_time, b.end_time)
