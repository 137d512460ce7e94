"""Wochentage des Stundenrasters (Montag bis Samstag)."""

from enum import IntEnum


_LABELS = {
    1: ("Montag", "Mo"),
    2: ("Dienstag", "Di"),
    3: ("Mittwoch", "Mi"),
    4: ("Donnerstag", "Do"),
    5: ("Freitag", "Fr"),
    6: ("Samstag", "Sa"),
}


class Weekday(IntEnum):
    """Unterrichtstag. Kodierung wie im Datenspeicher: 1=Montag … 6=Samstag."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        """Voller Tagesname, z.B. "Montag"."""
        return _LABELS[self.value][0]

    @property
    def short(self) -> str:
        """Abgekürzter Tagesname, z.B. "Mo"."""
        return _LABELS[self.value][1]

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Liest einen Tag aus Zahl ("1"), Kürzel ("Mo") oder Namen ("montag")."""
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        lowered = text.lower()
        for day in cls:
            if lowered in (day.short.lower(), day.label.lower(), day.name.lower()):
                return day
        raise ValueError(f"Unbekannter Wochentag: '{value}'")
