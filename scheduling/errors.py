"""Fehlerklassen der Stundenplan-Prüfung und -Speicherung.

Alle Ablehnungen sind vom Nutzer korrigierbare Eingabefehler. Sie tragen die
betroffenen Einträge als Felder, damit eine Oberfläche gezielt darauf hinweisen
kann. Indizes sind 0-basiert, die Meldungstexte zählen ab 1.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.schedule_entry import ScheduleEntry
    from models.weekday import Weekday
    from scheduling.shift_window import ShiftWindow


class ScheduleRejection(Exception):
    """Basisklasse: ein eingereichter Stundenblock-Satz wurde abgelehnt."""

    kind = "rejected"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidEntry(ScheduleRejection):
    """Raum fehlt oder Beginn liegt nicht vor dem Ende."""

    kind = "invalid_entry"

    def __init__(self, index: int, entry: "ScheduleEntry", reason: str) -> None:
        self.index = index
        self.entry = entry
        self.reason = reason
        super().__init__(f"Block {index + 1}: {reason}")


class OutOfShiftWindow(ScheduleRejection):
    """Ein Block liegt (teilweise) außerhalb des Schichtfensters der Gruppe."""

    kind = "out_of_shift_window"

    def __init__(self, index: int, entry: "ScheduleEntry", shift_label: str,
                 window: "ShiftWindow") -> None:
        self.index = index
        self.entry = entry
        self.shift_label = shift_label
        self.window = window
        super().__init__(
            f"Block {index + 1} ({entry.day.label} {entry.time_range}) muss "
            f"innerhalb der Schicht {shift_label} ({window.start} - {window.end}) liegen"
        )


class CrossCourseConflict(ScheduleRejection):
    """Ein Block überschneidet sich mit einem Block eines anderen Kurses der Gruppe."""

    kind = "cross_course_conflict"

    def __init__(self, index: int, entry: "ScheduleEntry",
                 conflicting: "ScheduleEntry") -> None:
        self.index = index
        self.entry = entry
        self.conflicting = conflicting
        self.conflicting_course_id = conflicting.course_id
        self.conflicting_course_name = conflicting.display_name
        self.day = entry.day
        super().__init__(
            f"Der Block {entry.time_range} am {entry.day.label} überschneidet sich "
            f"mit {conflicting.display_name} ({conflicting.time_range})"
        )


class IntraBatchConflict(ScheduleRejection):
    """Zwei Blöcke desselben Satzes überschneiden sich."""

    kind = "intra_batch_conflict"

    def __init__(self, first_index: int, second_index: int,
                 first: "ScheduleEntry", second: "ScheduleEntry") -> None:
        self.first_index = first_index
        self.second_index = second_index
        self.first = first
        self.second = second
        self.day: "Weekday" = first.day
        super().__init__(
            f"Die Blöcke {first_index + 1} ({first.time_range}) und "
            f"{second_index + 1} ({second.time_range}) am {first.day.label} "
            f"überschneiden sich"
        )


class ScheduleReplacementError(Exception):
    """Das Ersetzen der Stundenblöcke eines Kurses ist fehlgeschlagen.

    Der Aufruf gilt als nicht ausgeführt und sollte vollständig wiederholt werden.
    """

    def __init__(self, course_id: str, message: str,
                 leftover_ids: "list[str] | None" = None) -> None:
        self.course_id = course_id
        self.leftover_ids = list(leftover_ids or [])
        super().__init__(f"Kurs {course_id}: {message}")
