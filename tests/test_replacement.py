"""Tests für Datenspeicher, ScheduleReplacer und SchedulingService."""

import json

import pytest

from config.defaults import default_engine_config
from models.course import Course
from models.group import Group, Level, Shift
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday
from scheduling.errors import CrossCourseConflict, ScheduleReplacementError
from scheduling.grid import CellState
from scheduling.replacement import ScheduleReplacer
from scheduling.service import SchedulingService, group_by_day
from store.errors import NotFoundError, StoreError
from store.json_store import JsonScheduleStore
from store.memory import InMemoryScheduleStore


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

MON, TUE, WED = Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY


def _entry(course_id: str, day: Weekday, start: str, end: str,
           room: str = "Aula 101") -> ScheduleEntry:
    return ScheduleEntry(course_id=course_id, day=day, start_time=start,
                         end_time=end, room=room)


def _fill(store: InMemoryScheduleStore) -> InMemoryScheduleStore:
    """Gruppe grp1 (08:00–13:00) mit Kursen cA, cB; Gruppe grp2 mit cX."""
    store.add_group(Group(id="grp1", name="5to A", level=Level.PRIMARY,
                          shift=Shift.MORNING, shift_start="08:00", shift_end="13:00"))
    store.add_group(Group(id="grp2", name="5to B", level=Level.PRIMARY,
                          shift=Shift.MORNING, shift_start="08:00", shift_end="13:00"))
    store.add_course(Course(id="cA", subject_name="Matemáticas",
                            teacher_name="Carlos López", group_id="grp1"))
    store.add_course(Course(id="cB", subject_name="Comunicación",
                            teacher_name="Ana Rodríguez", group_id="grp1"))
    store.add_course(Course(id="cX", subject_name="Historia",
                            teacher_name="Rosa Torres", group_id="grp2"))
    store.create_schedule(_entry("cA", MON, "08:00", "09:00"))
    store.create_schedule(_entry("cA", WED, "08:00", "09:00"))
    store.create_schedule(_entry("cB", MON, "10:00", "11:00"))
    store.create_schedule(_entry("cX", MON, "08:00", "09:00"))
    return store


def _slots(entries: list[ScheduleEntry]) -> set[tuple]:
    return {(e.course_id, e.day, e.start_time, e.end_time, e.room) for e in entries}


class FlakyStore(InMemoryScheduleStore):
    """Datenspeicher, der nach einer Anzahl Aufrufen fehlschlägt."""

    def __init__(self, fail_create_after=None, fail_delete_after=None):
        super().__init__()
        self.fail_create_after = fail_create_after
        self.fail_delete_after = fail_delete_after
        self.creates = 0
        self.deletes = 0

    def create_schedule(self, entry):
        if self.fail_create_after is not None and self.creates >= self.fail_create_after:
            raise StoreError("Verbindung unterbrochen")
        self.creates += 1
        return super().create_schedule(entry)

    def delete_schedule(self, entry_id):
        if self.fail_delete_after is not None and self.deletes >= self.fail_delete_after:
            raise StoreError("Verbindung unterbrochen")
        self.deletes += 1
        return super().delete_schedule(entry_id)


class FailingWriteStore(JsonScheduleStore):
    """JSON-Speicher, dessen Schreibvorgang bei ausgewählten Aufrufen scheitert."""

    def __init__(self, path, fail_on=()):
        self.fail_on = set(fail_on)
        self.flushes = 0
        super().__init__(path)

    def fail_after(self, n: int) -> None:
        """Der n-te Schreibvorgang ab jetzt scheitert."""
        self.fail_on = {self.flushes + n}

    def _flush(self):
        if self._ready:
            self.flushes += 1
            if self.flushes in self.fail_on:
                raise StoreError("Datenträger voll")
        super()._flush()


# ─── Tests: InMemoryScheduleStore ─────────────────────────────────────────────

class TestInMemoryStore:

    def test_group_view_filters_by_course(self):
        store = _fill(InMemoryScheduleStore())
        entries = store.list_schedules_of_group("grp1")
        assert {e.course_id for e in entries} == {"cA", "cB"}
        assert len(store.list_schedules_of_group("grp2")) == 1

    def test_entries_are_denormalized(self):
        store = _fill(InMemoryScheduleStore())
        e = store.list_schedules_of_course("cB")[0]
        assert e.course_name == "Comunicación"
        assert e.teacher_name == "Ana Rodríguez"

    def test_entries_sorted_by_day_and_time(self):
        store = _fill(InMemoryScheduleStore())
        entries = store.list_schedules_of_group("grp1")
        keys = [(e.day, e.start_time) for e in entries]
        assert keys == sorted(keys)

    def test_create_assigns_fresh_id(self):
        store = _fill(InMemoryScheduleStore())
        a = store.create_schedule(_entry("cB", TUE, "08:00", "09:00"))
        b = store.create_schedule(_entry("cB", TUE, "08:00", "09:00"))
        assert a.id and b.id and a.id != b.id

    def test_course_count_derived(self):
        store = _fill(InMemoryScheduleStore())
        assert store.get_group("grp1").course_count == 2

    def test_unknown_ids(self):
        store = _fill(InMemoryScheduleStore())
        with pytest.raises(NotFoundError):
            store.get_group("nope")
        with pytest.raises(NotFoundError):
            store.get_course("nope")
        with pytest.raises(NotFoundError):
            store.delete_schedule("nope")
        with pytest.raises(NotFoundError):
            store.create_schedule(_entry("nope", MON, "08:00", "09:00"))

    def test_teacher_view_across_groups(self):
        store = _fill(InMemoryScheduleStore())
        store.add_course(Course(id="cY", subject_name="Matemáticas",
                                teacher_name="Carlos López", group_id="grp2"))
        store.create_schedule(_entry("cY", TUE, "09:00", "10:00"))

        entries = store.list_schedules_of_teacher("Carlos López")
        assert [(e.course_id, e.day) for e in entries] == [("cA", MON), ("cY", TUE), ("cA", WED)]
        assert {e.group_name for e in entries} == {"5to A", "5to B"}

    def test_teacher_without_courses(self):
        store = _fill(InMemoryScheduleStore())
        with pytest.raises(NotFoundError):
            store.list_schedules_of_teacher("Niemand")

    def test_course_needs_existing_group(self):
        with pytest.raises(NotFoundError):
            InMemoryScheduleStore().add_course(
                Course(id="c", subject_name="S", teacher_name="T", group_id="nope"))


# ─── Tests: JsonScheduleStore ─────────────────────────────────────────────────

class TestJsonStore:

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "schedules.json"
        store = _fill(JsonScheduleStore(path))
        assert path.exists()

        reopened = JsonScheduleStore(path)
        assert _slots(reopened.list_schedules_of_group("grp1")) == \
            _slots(store.list_schedules_of_group("grp1"))
        assert reopened.get_course("cA").teacher_name == "Carlos López"

    def test_delete_is_persisted(self, tmp_path):
        path = tmp_path / "schedules.json"
        store = _fill(JsonScheduleStore(path))
        victim = store.list_schedules_of_course("cB")[0]
        store.delete_schedule(victim.id)
        assert JsonScheduleStore(path).list_schedules_of_course("cB") == []

    def test_file_format(self, tmp_path):
        path = tmp_path / "schedules.json"
        _fill(JsonScheduleStore(path))
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert set(raw) >= {"groups", "courses", "schedules"}
        assert all(s["day"] in range(1, 7) for s in raw["schedules"])

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "schedules.json"
        path.write_text("{kaputt", encoding="utf-8")
        with pytest.raises(StoreError):
            JsonScheduleStore(path)

    def test_failed_write_discards_new_block(self, tmp_path):
        path = tmp_path / "schedules.json"
        store = _fill(FailingWriteStore(path))
        store.fail_after(1)
        with pytest.raises(StoreError):
            store.create_schedule(_entry("cB", TUE, "08:00", "09:00"))
        assert len(store.list_schedules_of_course("cB")) == 1
        assert len(JsonScheduleStore(path).list_schedules_of_course("cB")) == 1

    def test_failed_write_keeps_deleted_block(self, tmp_path):
        store = _fill(FailingWriteStore(tmp_path / "schedules.json"))
        victim = store.list_schedules_of_course("cB")[0]
        store.fail_after(1)
        with pytest.raises(StoreError):
            store.delete_schedule(victim.id)
        assert [e.id for e in store.list_schedules_of_course("cB")] == [victim.id]

        store.delete_schedule(victim.id)
        assert store.list_schedules_of_course("cB") == []

    def test_failed_write_discards_new_group(self, tmp_path):
        store = FailingWriteStore(tmp_path / "schedules.json", fail_on={1})
        with pytest.raises(StoreError):
            store.add_group(Group(id="grp9", name="X", level=Level.INITIAL,
                                  shift=Shift.MORNING, shift_start="08:00",
                                  shift_end="12:00"))
        assert store.list_groups() == []

    def test_missing_file_is_empty_store(self, tmp_path):
        store = JsonScheduleStore(tmp_path / "neu.json")
        assert store.list_groups() == []
        assert not (tmp_path / "neu.json").exists()


# ─── Tests: ScheduleReplacer ──────────────────────────────────────────────────

class TestScheduleReplacer:

    def test_full_substitution(self):
        """cA hat 2 Blöcke; Ersetzen durch 3 → genau diese 3, die alten sind weg."""
        store = _fill(InMemoryScheduleStore())
        old_ids = {e.id for e in store.list_schedules_of_course("cA")}
        assert len(old_ids) == 2

        new = [
            _entry("cA", MON, "11:00", "12:00"),
            _entry("cA", TUE, "08:00", "09:00"),
            _entry("cA", WED, "09:00", "10:00", room="Lab. Ciencias"),
        ]
        refreshed = ScheduleReplacer(store).replace("cA", new)

        persisted = store.list_schedules_of_course("cA")
        assert len(persisted) == 3
        assert _slots(persisted) == _slots(new)
        assert not old_ids & {e.id for e in persisted}
        assert _slots(refreshed) == _slots(store.list_schedules_of_group("grp1"))

    def test_other_courses_untouched(self):
        store = _fill(InMemoryScheduleStore())
        before_b = _slots(store.list_schedules_of_course("cB"))
        before_x = _slots(store.list_schedules_of_course("cX"))
        ScheduleReplacer(store).replace("cA", [_entry("cA", TUE, "08:00", "09:00")])
        assert _slots(store.list_schedules_of_course("cB")) == before_b
        assert _slots(store.list_schedules_of_course("cX")) == before_x

    def test_replace_with_empty_set_clears_course(self):
        store = _fill(InMemoryScheduleStore())
        ScheduleReplacer(store).replace("cA", [])
        assert store.list_schedules_of_course("cA") == []

    def test_entry_ids_and_course_are_overwritten(self):
        store = _fill(InMemoryScheduleStore())
        stale = _entry("cB", TUE, "08:00", "09:00").model_copy(update={"id": "sch-alt"})
        ScheduleReplacer(store).replace("cA", [stale])
        persisted = store.list_schedules_of_course("cA")
        assert len(persisted) == 1 and persisted[0].id != "sch-alt"

    def test_failed_create_keeps_old_entries(self):
        store = _fill(FlakyStore())
        store.fail_create_after = store.creates + 1
        old = _slots(store.list_schedules_of_course("cA"))

        new = [_entry("cA", TUE, "08:00", "09:00"), _entry("cA", TUE, "09:00", "10:00")]
        with pytest.raises(ScheduleReplacementError) as exc:
            ScheduleReplacer(store).replace("cA", new)

        assert exc.value.course_id == "cA"
        assert exc.value.leftover_ids == []
        assert _slots(store.list_schedules_of_course("cA")) == old

    def test_failed_delete_never_leaves_course_empty(self):
        store = _fill(FlakyStore())
        store.fail_delete_after = store.deletes + 1
        new = [_entry("cA", TUE, "08:00", "09:00")]

        with pytest.raises(ScheduleReplacementError) as exc:
            ScheduleReplacer(store).replace("cA", new)

        persisted = store.list_schedules_of_course("cA")
        assert len(exc.value.leftover_ids) == 1
        assert _slots(new) <= _slots(persisted)
        assert len(persisted) == 2

    def test_retry_after_failure_converges(self):
        store = _fill(FlakyStore())
        store.fail_delete_after = store.deletes + 1
        new = [_entry("cA", TUE, "08:00", "09:00")]
        with pytest.raises(ScheduleReplacementError):
            ScheduleReplacer(store).replace("cA", new)

        store.fail_delete_after = None
        ScheduleReplacer(store).replace("cA", new)
        assert _slots(store.list_schedules_of_course("cA")) == _slots(new)
        assert len(store.list_schedules_of_course("cA")) == 1

    def test_failed_write_during_create_keeps_old_entries(self, tmp_path):
        """Der zweite neue Block wird nicht geschrieben: nur die alten Blöcke bleiben."""
        path = tmp_path / "schedules.json"
        store = _fill(FailingWriteStore(path))
        old = _slots(store.list_schedules_of_course("cA"))
        store.fail_after(2)

        new = [_entry("cA", TUE, "08:00", "09:00"), _entry("cA", WED, "10:00", "11:00")]
        with pytest.raises(ScheduleReplacementError) as exc:
            ScheduleReplacer(store).replace("cA", new)

        assert exc.value.leftover_ids == []
        assert _slots(store.list_schedules_of_course("cA")) == old
        assert _slots(JsonScheduleStore(path).list_schedules_of_course("cA")) == old

    def test_failed_write_during_delete_reports_leftovers(self, tmp_path):
        store = _fill(FailingWriteStore(tmp_path / "schedules.json"))
        old_ids = [e.id for e in store.list_schedules_of_course("cA")]
        store.fail_after(2)

        new = [_entry("cA", TUE, "08:00", "09:00")]
        with pytest.raises(ScheduleReplacementError) as exc:
            ScheduleReplacer(store).replace("cA", new)

        assert exc.value.leftover_ids == old_ids
        persisted = {e.id for e in store.list_schedules_of_course("cA")}
        assert set(old_ids) <= persisted

        store.fail_on = set()
        ScheduleReplacer(store).replace("cA", new)
        assert _slots(store.list_schedules_of_course("cA")) == _slots(new)

    def test_unknown_course(self):
        store = _fill(InMemoryScheduleStore())
        with pytest.raises(ScheduleReplacementError):
            ScheduleReplacer(store).replace("nope", [])


# ─── Tests: SchedulingService ─────────────────────────────────────────────────

class TestSchedulingService:

    def setup_method(self):
        self.store = _fill(InMemoryScheduleStore())
        self.service = SchedulingService(self.store, default_engine_config())

    def test_save_valid_batch(self):
        batch = [_entry("cB", TUE, "08:00", "09:30"), _entry("cB", MON, "09:00", "10:00")]
        refreshed = self.service.save_course_schedules("cB", batch)
        assert _slots(self.store.list_schedules_of_course("cB")) == _slots(batch)
        assert {e.course_id for e in refreshed} == {"cA", "cB"}

    def test_rejected_batch_leaves_store_unchanged(self):
        before = _slots(self.store.list_schedules_of_group("grp1"))
        with pytest.raises(CrossCourseConflict) as exc:
            self.service.save_course_schedules("cB", [_entry("cB", MON, "08:30", "09:30")])
        assert exc.value.conflicting_course_name == "Matemáticas"
        assert _slots(self.store.list_schedules_of_group("grp1")) == before

    def test_other_group_is_not_a_conflict(self):
        """cX (grp2) belegt Mo 08:00–09:00; für grp1 ist das egal."""
        self.service.save_course_schedules("cB", [_entry("cB", TUE, "08:00", "09:00")])
        self.service.save_course_schedules("cA", [_entry("cA", MON, "08:00", "09:00")])
        assert len(self.store.list_schedules_of_course("cA")) == 1

    def test_resaving_current_entries_is_accepted(self):
        current = self.store.list_schedules_of_course("cA")
        self.service.save_course_schedules("cA", current)
        assert _slots(self.store.list_schedules_of_course("cA")) == _slots(current)

    def test_validate_does_not_write(self):
        outcome = self.service.validate_course_schedules(
            "cB", [_entry("cB", TUE, "08:00", "09:00")])
        assert outcome.accepted
        assert len(self.store.list_schedules_of_course("cB")) == 1

    def test_weekly_grid_after_save(self):
        self.service.save_course_schedules("cB", [_entry("cB", TUE, "08:00", "09:30")])
        grid = self.service.weekly_grid("grp1", highlight_course_id="cB")
        assert grid.cell(TUE, 9).state == CellState.THIS_COURSE
        assert grid.cell(MON, 8).state == CellState.OCCUPIED
        assert grid.cell(MON, 10).is_free

    def test_unknown_course(self):
        with pytest.raises(NotFoundError):
            self.service.save_course_schedules("nope", [])

    def test_group_by_day(self):
        by_day = self.service.schedules_by_day_of_group("grp1")
        assert list(by_day) == list(Weekday)
        assert [e.course_id for e in by_day[MON]] == ["cA", "cB"]
        assert by_day[TUE] == []
        assert [e.course_id for e in by_day[WED]] == ["cA"]

    def test_teacher_by_day(self):
        by_day = self.service.schedules_by_day_of_teacher("Rosa Torres")
        assert [e.course_id for e in by_day[MON]] == ["cX"]
        assert by_day[MON][0].group_name == "5to B"
        assert sum(len(v) for v in by_day.values()) == 1

    def test_unknown_teacher(self):
        with pytest.raises(NotFoundError):
            self.service.schedules_by_day_of_teacher("Niemand")


class TestGroupByDay:

    def test_days_outside_selection_are_kept(self):
        entries = [_entry("cA", WED, "08:00", "09:00"), _entry("cA", MON, "10:00", "11:00"),
                   _entry("cA", MON, "08:00", "09:00")]
        by_day = group_by_day(entries, [MON, TUE])
        assert list(by_day) == [MON, TUE, WED]
        assert [e.start_time for e in by_day[MON]] == ["08:00", "10:00"]
        assert by_day[TUE] == []
