"""Excel-Export des Belegungsrasters (openpyxl)."""

from pathlib import Path
from typing import Optional

from models.group import Group
from scheduling.grid import WeeklyGrid

from export.helpers import COLORS, cell_color, format_cell, today_str


class GridExcelExporter:
    """Exportiert das Belegungsraster einer Gruppe in eine Excel-Datei."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_HOUR_W = 8
    COL_DAY_W  = 18

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_HOUR_H   = 36

    # Erste Zeile des Rasters (darüber Titel und Datum)
    FIRST_ROW = 4

    def __init__(self, grid: WeeklyGrid, group: Group,
                 school_name: Optional[str] = None):
        self.grid = grid
        self.group = group
        self.school_name = school_name

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei und gibt den Pfad zurück."""
        from openpyxl import Workbook
        wb = Workbook()
        ws = wb.active
        ws.title = self._sheet_title()

        self._write_title(ws)
        self._setup_sheet(ws)
        self._write_header_row(ws)
        self._write_grid(ws)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _sheet_title(self) -> str:
        # Excel erlaubt max. 31 Zeichen und keine Sonderzeichen wie / oder :
        title = self.group.id
        for ch in '[]:*?/\\':
            title = title.replace(ch, "_")
        return title[:31]

    def _setup_sheet(self, ws) -> None:
        from openpyxl.utils import get_column_letter
        ws.column_dimensions["A"].width = self.COL_HOUR_W
        for col in range(2, 2 + len(self.grid.days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

    # ─── Inhalt ───────────────────────────────────────────────────────────────

    def _write_title(self, ws) -> None:
        from openpyxl.styles import Font
        ws.cell(row=1, column=1, value=f"Wochenplan {self.group.name}").font = Font(bold=True, size=14)
        info = f"Schicht {self.group.shift_start}–{self.group.shift_end} | Erstellt: {today_str()}"
        if self.school_name:
            info = f"{self.school_name} | {info}"
        ws.cell(row=2, column=1, value=info)

    def _write_header_row(self, ws) -> None:
        """Schreibt die Kopfzeile (Std. | Mo | Di | …)."""
        from openpyxl.styles import Font
        headers = ["Std."] + [d.short for d in self.grid.days]
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=self.FIRST_ROW - 1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[self.FIRST_ROW - 1].height = self.ROW_HEADER_H

    def _write_grid(self, ws) -> int:
        """Schreibt das Raster; gibt die letzte verwendete Excel-Zeile zurück."""
        from openpyxl.styles import Font
        border = self._thin_border()
        excel_row = self.FIRST_ROW

        for row in self.grid.rows:
            c = ws.cell(row=excel_row, column=1, value=row.label)
            c.fill = self._fill(COLORS["hour"])
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            for col, cell in enumerate(row.cells, 2):
                content = format_cell(cell, width=20)
                c = ws.cell(row=excel_row, column=col, value=content)
                c.fill = self._fill(cell_color(cell))
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)

            ws.row_dimensions[excel_row].height = self.ROW_HOUR_H
            excel_row += 1

        return excel_row - 1
