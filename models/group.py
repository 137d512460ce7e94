"""Datenmodell für eine Gruppe (Jahrgang + Sektion) mit ihrem Schichtfenster (Pydantic v2)."""

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

from models.timeofday import TIME_PATTERN

if TYPE_CHECKING:
    from config.schema import EngineConfig


class Level(str, Enum):
    INITIAL = "initial"
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Shift(str, Enum):
    """Schicht einer Gruppe. Die Uhrzeiten je Schicht stehen in der Config."""

    MORNING = "morning"
    AFTERNOON = "afternoon"


class Group(BaseModel):
    """Eine Schülergruppe, z.B. "5to A - Primaria (Mañana)".

    Alle Kurse der Gruppe müssen innerhalb [shift_start, shift_end] liegen.
    """

    id: str
    name: str
    level: Level
    shift: Shift
    shift_start: str = Field(pattern=TIME_PATTERN)   # "08:00"
    shift_end: str = Field(pattern=TIME_PATTERN)     # "13:00"
    student_count: int = Field(0, ge=0)
    course_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_shift_bounds(self):
        if self.shift_start >= self.shift_end:
            raise ValueError(
                f"Schichtbeginn {self.shift_start} muss vor Schichtende "
                f"{self.shift_end} liegen (Gruppe {self.id})."
            )
        return self

    @classmethod
    def from_shift(cls, config: "EngineConfig", **fields) -> "Group":
        """Legt eine Gruppe an, deren Schichtfenster aus der Config übernommen wird."""
        sc = config.shift_config(Shift(fields["shift"]))
        fields.setdefault("shift_start", sc.start_time)
        fields.setdefault("shift_end", sc.end_time)
        return cls(**fields)
