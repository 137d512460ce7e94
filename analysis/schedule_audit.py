"""Prüfung bereits gespeicherter Stundenblöcke einer Gruppe.

Prüft den gespeicherten Zustand auf Verletzungen der Datenmodell-Regeln als
Sicherheitsnetz unabhängig vom ScheduleValidator (z.B. nach parallelen
Ersetzungen oder Importen).
"""

from typing import Literal

from pydantic import BaseModel

from models.group import Group
from models.schedule_entry import ScheduleEntry
from scheduling.overlap import entries_overlap
from scheduling.shift_window import shift_window_of


class AuditViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "cross_course_overlap"
    description: str
    entity: str          # Block-ID oder Kurs-ID


class AuditReport(BaseModel):
    """Ergebnis der Prüfung einer Gruppe."""

    group_id: str
    violations: list[AuditViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ KONSISTENT[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title=f"Prüfung Gruppe {self.group_id}",
                            border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=16)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleAuditor:
    """Prüft alle gespeicherten Blöcke einer Gruppe."""

    def audit(self, group: Group, entries: list[ScheduleEntry]) -> AuditReport:
        violations: list[AuditViolation] = []

        violations.extend(self._check_entries(group, entries))
        violations.extend(self._check_overlaps(entries))

        has_errors = any(v.severity == "error" for v in violations)
        return AuditReport(group_id=group.id, violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_entries(
        self, group: Group, entries: list[ScheduleEntry]
    ) -> list[AuditViolation]:
        """Beginn < Ende, Raum gesetzt, innerhalb des Schichtfensters."""
        violations: list[AuditViolation] = []
        window = shift_window_of(group)
        for e in entries:
            entity = e.id or e.course_id
            if e.start_time >= e.end_time:
                violations.append(AuditViolation(
                    severity="error",
                    constraint="invalid_range",
                    entity=entity,
                    description=f"{e.display_name}: {e.day.label} {e.time_range} ist leer oder rückwärts.",
                ))
            if not e.room.strip():
                violations.append(AuditViolation(
                    severity="error",
                    constraint="missing_room",
                    entity=entity,
                    description=f"{e.display_name}: {e.day.label} {e.time_range} ohne Raum.",
                ))
            if not window.contains(e.start_time, e.end_time):
                violations.append(AuditViolation(
                    severity="error",
                    constraint="outside_shift",
                    entity=entity,
                    description=(
                        f"{e.display_name}: {e.day.label} {e.time_range} liegt außerhalb "
                        f"der Schicht ({window})."
                    ),
                ))
        return violations

    def _check_overlaps(self, entries: list[ScheduleEntry]) -> list[AuditViolation]:
        """Überschneidungen verschiedener Kurse sind Fehler, desselben Kurses Warnungen."""
        violations: list[AuditViolation] = []
        for i in range(len(entries)):
            for j in range(i + 1, len(entries)):
                a, b = entries[i], entries[j]
                if not entries_overlap(a, b):
                    continue
                same_course = a.course_id == b.course_id
                violations.append(AuditViolation(
                    severity="warning" if same_course else "error",
                    constraint="same_course_overlap" if same_course else "cross_course_overlap",
                    entity=a.course_id,
                    description=(
                        f"{a.day.label}: {a.display_name} ({a.time_range}) überschneidet "
                        f"sich mit {b.display_name} ({b.time_range})."
                    ),
                ))
        return violations
