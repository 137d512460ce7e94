"""Renderer für die Terminal-Anzeige des Belegungsrasters (Rich)."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rich.table import Table
    from models.group import Group
    from models.schedule_entry import ScheduleEntry
    from models.weekday import Weekday
    from scheduling.grid import WeeklyGrid


def render_grid_rows(grid: "WeeklyGrid") -> list[list[str]]:
    """Gibt Tabellenzeilen für das Raster zurück.

    Jede Zeile: [Stunde, Mo, Di, Mi, Do, Fr, Sa] (Tage laut grid.days).
    """
    from export.helpers import format_cell

    rows: list[list[str]] = []
    for row in grid.rows:
        rows.append([row.label] + [format_cell(c) for c in row.cells])
    return rows


def build_grid_table(grid: "WeeklyGrid", group: "Group",
                     shift_name: Optional[str] = None) -> "Table":
    """Baut eine Rich-Tabelle mit farbig markierten Zellen."""
    from rich.table import Table
    from rich import box
    from export.helpers import RICH_STYLES, format_cell

    title = f"Wochenplan {group.name}"
    if shift_name:
        title += f" — Schicht {shift_name} ({group.shift_start}–{group.shift_end})"
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Std.", style="bold", justify="center")
    for day in grid.days:
        table.add_column(day.short, justify="center", min_width=10)

    for row in grid.rows:
        cells = [
            f"[{RICH_STYLES[c.state]}]{format_cell(c)}[/{RICH_STYLES[c.state]}]"
            for c in row.cells
        ]
        table.add_row(row.label, *cells)

    table.caption = (
        "[green]✓ frei[/green]  [dark_orange]belegt (anderer Kurs)[/dark_orange]  "
        "[bold blue]dieser Kurs[/bold blue]"
    )
    return table


def build_day_table(by_day: "dict[Weekday, list[ScheduleEntry]]", title: str,
                    show_group: bool = False) -> "Table":
    """Wochenübersicht als Liste je Tag (Lehrkraft- oder Gruppenansicht)."""
    from rich.table import Table
    from rich import box

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Tag", style="bold")
    table.add_column("Zeit")
    table.add_column("Kurs")
    if show_group:
        table.add_column("Gruppe")
    table.add_column("Raum")

    for day, entries in by_day.items():
        if not entries:
            table.add_row(day.label, "[dim]—[/dim]", "", *([""] if show_group else []), "")
            continue
        for i, e in enumerate(entries):
            row = [day.label if i == 0 else "", e.time_range, e.display_name]
            if show_group:
                row.append(e.group_name or "")
            row.append(e.room)
            table.add_row(*row)
    return table
