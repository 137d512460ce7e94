"""Ermittelt das erlaubte Tageszeitfenster einer Gruppe."""

from typing import NamedTuple

from config.schema import EngineConfig
from models.group import Group, Shift


class ShiftWindow(NamedTuple):
    start: str   # "08:00"
    end: str     # "13:00"

    def contains(self, start: str, end: str) -> bool:
        """True wenn [start, end] vollständig im Fenster liegt."""
        return start >= self.start and end <= self.end

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


def shift_window_of(group: Group) -> ShiftWindow:
    """Schichtfenster einer Gruppe, unverändert aus shift_start/shift_end.

    Alle Prüfungen holen das Fenster über diese Funktion. Sollen die Grenzen
    künftig z.B. pro Wochentag variieren, ändert sich nur diese Stelle.
    """
    return ShiftWindow(group.shift_start, group.shift_end)


def default_window_for(shift: Shift, config: EngineConfig) -> ShiftWindow:
    """Konfiguriertes Standardfenster einer Schicht (für neue Gruppen)."""
    sc = config.shift_config(shift)
    return ShiftWindow(sc.start_time, sc.end_time)


def shift_label(group: Group, config: "EngineConfig | None" = None) -> str:
    """Anzeigename der Schicht einer Gruppe."""
    if config is not None:
        return config.shift_config(group.shift).display_name
    return group.shift.value
