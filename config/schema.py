from pydantic import BaseModel, Field, model_validator
from typing import Literal

from models.group import Shift
from models.timeofday import TIME_PATTERN
from models.weekday import Weekday


# ─── SCHICHTEN (vollständig konfigurierbar) ───

class ShiftConfig(BaseModel):
    """Standard-Zeitfenster einer Schicht.

    Neue Gruppen übernehmen diese Uhrzeiten. Danach gilt das Fenster, das an
    der Gruppe selbst gespeichert ist.
    """
    # Schicht, für die das Fenster gilt
    shift: Shift
    # Anzeigename, z.B. "Vormittag"
    display_name: str
    # Frühester Unterrichtsbeginn im Format "HH:MM"
    start_time: str = Field(pattern=TIME_PATTERN)
    # Spätestes Unterrichtsende im Format "HH:MM"
    end_time: str = Field(pattern=TIME_PATTERN)

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Schicht '{self.display_name}': Beginn {self.start_time} "
                f"muss vor Ende {self.end_time} liegen")
        return self


# ─── DATENSPEICHER ───

class StoreConfig(BaseModel):
    """Ablage der Gruppen, Kurse und Stundenblöcke."""
    # JSON-Datei des Datenspeichers
    data_path: str = Field("output/schedules.json",
        description="Pfad zur JSON-Datei mit Gruppen, Kursen und Stundenblöcken")


# ─── GESAMT-CONFIG ───

class EngineConfig(BaseModel):
    """Gesamtkonfiguration der Stundenplan-Prüfung."""
    # Name der Schule
    school_name: str = Field("Colegio Modelo",
        description="Name der Schule")
    # Zeitfenster je Schicht (genau eines pro Schicht)
    shifts: list[ShiftConfig] = Field(
        description="Zeitfenster je Schicht")
    # Im Wochenraster angezeigte Tage
    days: list[Weekday] = Field(
        default=list(Weekday),
        description="Angezeigte Unterrichtstage")
    # Ablage der Daten
    store: StoreConfig = Field(default_factory=StoreConfig)
    # Log-Level der CLI
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @model_validator(mode='after')
    def validate_shifts(self):
        """Jede Schicht muss genau einmal konfiguriert sein."""
        seen = [s.shift for s in self.shifts]
        for shift in Shift:
            if seen.count(shift) != 1:
                raise ValueError(
                    f"Schicht '{shift.value}' muss genau einmal konfiguriert sein "
                    f"(gefunden: {seen.count(shift)}x)")
        if not self.days:
            raise ValueError("Mindestens ein Unterrichtstag muss angezeigt werden")
        if len(set(self.days)) != len(self.days):
            raise ValueError("Unterrichtstage dürfen nicht doppelt vorkommen")
        return self

    def shift_config(self, shift: Shift) -> ShiftConfig:
        """Gibt das Zeitfenster einer Schicht zurück."""
        for sc in self.shifts:
            if sc.shift == shift:
                return sc
        raise KeyError(shift)
