"""Export-Modul: Terminal (Rich) und Excel (openpyxl) für das Belegungsraster."""

from export.excel_export import GridExcelExporter
from export.tui_renderer import build_day_table, build_grid_table, render_grid_rows

__all__ = ["GridExcelExporter", "build_day_table", "build_grid_table", "render_grid_rows"]
