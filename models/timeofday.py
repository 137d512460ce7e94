"""Hilfsfunktionen für Uhrzeiten im Format "HH:MM".

Uhrzeiten werden als nullgepolsterte 24h-Strings gespeichert. Wegen der festen
Breite ist der lexikografische Vergleich gleichbedeutend mit dem zeitlichen.
"""

import re

TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"

_TIME_RE = re.compile(TIME_PATTERN)


def is_valid_time(value: str) -> bool:
    """True wenn value eine gültige Uhrzeit "HH:MM" ist."""
    return bool(_TIME_RE.match(value))


def hour_of(value: str) -> int:
    """Volle Stunde einer Uhrzeit ("09:30" → 9)."""
    return int(value.split(":")[0])


def hour_label(hour: int) -> str:
    """Stundenbeginn als Uhrzeit (9 → "09:00", 24 → "24:00")."""
    return f"{hour:02d}:00"


def format_range(start: str, end: str) -> str:
    return f"{start}–{end}"
