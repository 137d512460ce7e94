"""Ersetzt alle gespeicherten Stundenblöcke eines Kurses durch einen geprüften Satz.

Die Blöcke müssen vorher vom ScheduleValidator akzeptiert worden sein; hier wird
nicht erneut geprüft. Ablauf: neue Blöcke anlegen, erst danach die alten
löschen. Scheitert das Anlegen, werden die bereits angelegten neuen Blöcke
wieder entfernt und die alten bleiben unverändert. Ein Kurs steht dadurch nie
ohne Blöcke da, wenn ein Schritt mittendrin fehlschlägt.

Es gibt weder Sperren noch Versionierung. Bei einem Fehler ist der komplette
Aufruf zu wiederholen, nicht ab der Abbruchstelle.
"""

import logging

from models.schedule_entry import ScheduleEntry
from scheduling.errors import ScheduleReplacementError
from store.base import ScheduleStore
from store.errors import StoreError

logger = logging.getLogger(__name__)


class ScheduleReplacer:
    """Tauscht den Stundenblock-Satz eines Kurses gegen einen neuen aus."""

    def __init__(self, store: ScheduleStore) -> None:
        self.store = store

    def replace(self, course_id: str, entries: list[ScheduleEntry]) -> list[ScheduleEntry]:
        """Gibt danach alle Blöcke der Gruppe des Kurses zurück (frisch gelesen)."""
        try:
            course = self.store.get_course(course_id)
            old = self.store.list_schedules_of_course(course_id)
        except StoreError as e:
            logger.error(f"Kurs {course_id}: bestehende Blöcke nicht lesbar: {e}")
            raise ScheduleReplacementError(course_id, f"Lesen fehlgeschlagen: {e}") from e

        created = self._create_all(course_id, entries)
        self._delete_all(course_id, [e.id for e in old if e.id is not None])

        logger.info(
            f"Kurs {course_id}: {len(old)} alte Blöcke durch {len(created)} neue ersetzt"
        )
        try:
            return self.store.list_schedules_of_group(course.group_id)
        except StoreError as e:
            raise ScheduleReplacementError(
                course_id, f"Blöcke gespeichert, Neuladen fehlgeschlagen: {e}"
            ) from e

    def _create_all(self, course_id: str, entries: list[ScheduleEntry]) -> list[ScheduleEntry]:
        created: list[ScheduleEntry] = []
        for entry in entries:
            staged = entry.model_copy(update={"id": None, "course_id": course_id})
            try:
                created.append(self.store.create_schedule(staged))
            except StoreError as e:
                logger.warning(
                    f"Kurs {course_id}: Anlegen von {staged} fehlgeschlagen, "
                    f"entferne {len(created)} bereits angelegte Blöcke"
                )
                leftovers = self._rollback(created)
                raise ScheduleReplacementError(
                    course_id, f"Anlegen fehlgeschlagen: {e}", leftover_ids=leftovers
                ) from e
        return created

    def _rollback(self, created: list[ScheduleEntry]) -> list[str]:
        """Löscht angelegte Blöcke; gibt die IDs zurück, die nicht löschbar waren."""
        leftovers: list[str] = []
        for entry in created:
            try:
                self.store.delete_schedule(entry.id)
            except StoreError as e:
                logger.error(f"Rückbau von {entry.id} fehlgeschlagen: {e}")
                leftovers.append(entry.id)
        return leftovers

    def _delete_all(self, course_id: str, old_ids: list[str]) -> None:
        for i, entry_id in enumerate(old_ids):
            try:
                self.store.delete_schedule(entry_id)
            except StoreError as e:
                leftovers = old_ids[i:]
                logger.error(
                    f"Kurs {course_id}: Löschen von {entry_id} fehlgeschlagen, "
                    f"{len(leftovers)} alte Blöcke verbleiben"
                )
                raise ScheduleReplacementError(
                    course_id,
                    f"Neue Blöcke gespeichert, alte nicht vollständig gelöscht: {e}",
                    leftover_ids=leftovers,
                ) from e
