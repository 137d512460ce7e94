"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Export des Belegungsrasters."""

from datetime import date

from scheduling.grid import CellState, GridCell

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "free":        "E2F5E2",
    "occupied":    "FFE0C2",
    "this_course": "C9D8FF",
    "header":      "4472C4",
    "hour":        "EEEEEE",
}

# Rich-Stile für die Terminal-Ausgabe
RICH_STYLES: dict[CellState, str] = {
    CellState.FREE: "green",
    CellState.OCCUPIED: "dark_orange",
    CellState.THIS_COURSE: "bold blue",
}

FREE_MARK = "✓"

# Kursnamen werden im Raster auf diese Länge gekürzt
NAME_WIDTH = 8


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def short_name(name: str, width: int = NAME_WIDTH) -> str:
    return name[:width]


def format_cell(cell: GridCell, width: int = NAME_WIDTH) -> str:
    """Zelleninhalt: "✓" für frei, sonst ein gekürzter Kursname pro Block."""
    if cell.is_free:
        return FREE_MARK
    return "\n".join(short_name(n, width) for n in cell.course_names)


def cell_color(cell: GridCell) -> str:
    """Gibt die Hintergrundfarbe für eine Zelle zurück."""
    return COLORS[cell.state.value]
