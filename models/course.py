"""Datenmodell für einen Kurs (Pydantic v2)."""

from pydantic import BaseModel


class Course(BaseModel):
    """Ein Fach, das eine Lehrkraft genau einer Gruppe unterrichtet."""

    id: str              # "c1"
    subject_name: str    # "Matemáticas"
    teacher_name: str    # "Carlos López"
    group_id: str        # Referenz auf Group.id
