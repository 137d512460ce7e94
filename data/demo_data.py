"""Beispieldaten für die Stundenplan-Prüfung.

Gruppen, Kurse und Stundenblöcke eines kleinen Colegio mit Vor- und
Nachmittagsschicht. Die Gruppe grp1 enthält absichtlich Blöcke außerhalb ihrer
Schicht (Inglés, Educación Física am Nachmittag), wie sie bei übernommenen
Altdaten vorkommen; `python main.py audit grp1` meldet sie.
"""

from config.schema import EngineConfig
from models.course import Course
from models.group import Group, Level, Shift
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday
from store.memory import InMemoryScheduleStore

MO, DI, MI, DO, FR = (Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
                      Weekday.THURSDAY, Weekday.FRIDAY)

# (id, name, level, shift, start, end, students); start/end None = Schicht-Default
_GROUPS = [
    ("grp0", "3 años A - Inicial (Mañana)", Level.INITIAL, Shift.MORNING, "08:00", "12:00", 15),
    ("grp1", "5to A - Primaria (Mañana)", Level.PRIMARY, Shift.MORNING, "07:00", "12:30", 8),
    ("grp2", "5to B - Primaria (Mañana)", Level.PRIMARY, Shift.MORNING, "07:00", "12:30", 8),
    ("grp4", "6to B - Primaria (Tarde)", Level.PRIMARY, Shift.AFTERNOON, None, None, 6),
    ("grp5", "1ro A - Secundaria (Tarde)", Level.SECONDARY, Shift.AFTERNOON, "13:00", "18:30", 6),
]

# (id, Fach, Lehrkraft, Gruppe)
_COURSES = [
    ("c1", "Matemáticas", "Carlos López", "grp1"),
    ("c2", "Comunicación", "Ana Rodríguez", "grp1"),
    ("c4", "Ciencias Naturales", "Diego Flores", "grp1"),
    ("c5", "Inglés", "Miguel Ángel", "grp1"),
    ("c7", "Educación Física", "Roberto Mendoza", "grp1"),
    ("c3", "Matemáticas", "Carlos López", "grp2"),
    ("c9", "Comunicación", "Ana Rodríguez", "grp2"),
    ("c12", "Matemáticas", "Carlos López", "grp4"),
    ("c13", "Comunicación", "Ana Rodríguez", "grp4"),
    ("c14", "Inglés", "Miguel Ángel", "grp4"),
    ("c15", "Matemáticas", "Carlos López", "grp5"),
    ("c17", "Historia", "Rosa Torres", "grp5"),
    ("c18", "Inglés", "Miguel Ángel", "grp5"),
]

# (Kurs, Tag, Beginn, Ende, Raum)
_SCHEDULES = [
    ("c1", MO, "08:00", "09:30", "Aula 101"),
    ("c1", MI, "08:00", "09:30", "Aula 101"),
    ("c1", FR, "08:00", "09:30", "Aula 101"),
    ("c2", DI, "08:00", "09:30", "Aula 101"),
    ("c2", DO, "08:00", "09:30", "Aula 101"),
    ("c4", DI, "10:00", "11:30", "Lab. Ciencias"),
    ("c4", DO, "10:00", "11:30", "Lab. Ciencias"),
    ("c5", MO, "14:00", "15:30", "Aula 101"),
    ("c5", MI, "14:00", "15:30", "Aula 101"),
    ("c7", DI, "14:00", "16:00", "Cancha"),
    ("c3", MO, "10:00", "11:30", "Aula 102"),
    ("c3", MI, "10:00", "11:30", "Aula 102"),
    ("c9", DI, "09:00", "10:30", "Aula 102"),
    ("c12", MO, "14:00", "15:30", "Aula 202"),
    ("c13", DI, "14:00", "15:30", "Aula 202"),
    ("c14", MI, "16:00", "17:30", "Aula 202"),
    ("c15", MO, "13:00", "14:30", "Aula 301"),
    ("c17", FR, "15:00", "17:00", "Aula 301"),
    ("c18", MO, "15:00", "16:30", "Aula 301"),
]


def demo_groups(config: EngineConfig) -> list[Group]:
    groups = []
    for gid, name, level, shift, start, end, students in _GROUPS:
        fields = dict(id=gid, name=name, level=level, shift=shift,
                      student_count=students)
        if start is not None:
            fields.update(shift_start=start, shift_end=end)
        groups.append(Group.from_shift(config, **fields))
    return groups


def demo_courses() -> list[Course]:
    return [
        Course(id=cid, subject_name=subject, teacher_name=teacher, group_id=gid)
        for cid, subject, teacher, gid in _COURSES
    ]


def demo_schedules() -> list[ScheduleEntry]:
    return [
        ScheduleEntry(course_id=cid, day=day, start_time=start, end_time=end, room=room)
        for cid, day, start, end, room in _SCHEDULES
    ]


def populate_store(store: InMemoryScheduleStore, config: EngineConfig) -> dict[str, int]:
    """Schreibt alle Beispieldaten in einen (leeren) Datenspeicher.

    Die Blöcke werden direkt angelegt, ohne Prüfung. Gibt Zähler je Typ zurück.
    """
    groups = demo_groups(config)
    courses = demo_courses()
    schedules = demo_schedules()
    for g in groups:
        store.add_group(g)
    for c in courses:
        store.add_course(c)
    for s in schedules:
        store.create_schedule(s)
    return {"groups": len(groups), "courses": len(courses), "schedules": len(schedules)}
