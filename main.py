"""Wochenplan — Haupt-CLI der Stundenplan-Prüfung.

Verwendung:
  python main.py init                                Default-Konfiguration anlegen
  python main.py config show                         Konfiguration anzeigen
  python main.py seed                                Beispieldaten in den Speicher schreiben
  python main.py groups                              Gruppen und Kurse auflisten
  python main.py show <gruppe> [--course <kurs>|--list]  Wochenraster anzeigen
  python main.py teacher "<name>"                    Wochenplan einer Lehrkraft
  python main.py check <kurs> -e "Mo 08:00 09:30 Aula 101" ...   Blöcke nur prüfen
  python main.py set <kurs> -e "Mo 08:00 09:30 Aula 101" ...     Blöcke prüfen + ersetzen
  python main.py audit <gruppe>                      Gespeicherte Blöcke prüfen
  python main.py export <gruppe> [-o datei.xlsx]     Raster als Excel exportieren
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py init[/bold] aus."
        )
        sys.exit(1)
    try:
        config = mgr.load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _setup_logging(config.log_level)
    return mgr, config


def _open_store(config):
    from store.json_store import JsonScheduleStore
    from store.errors import StoreError
    try:
        return JsonScheduleStore(Path(config.store.data_path))
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _parse_entries(course_id: str, raw_entries: tuple[str, ...]):
    """Parst "TAG BEGINN ENDE [RAUM]" (z.B. "Mo 08:00 09:30 Aula 101")."""
    from pydantic import ValidationError
    from models.schedule_entry import ScheduleEntry
    from models.weekday import Weekday

    entries = []
    for i, raw in enumerate(raw_entries, 1):
        parts = raw.split(maxsplit=3)
        if len(parts) < 3:
            raise click.BadParameter(
                f"Block {i}: erwartet 'TAG BEGINN ENDE [RAUM]', erhalten '{raw}'",
                param_hint="--entry",
            )
        try:
            entries.append(ScheduleEntry(
                course_id=course_id,
                day=Weekday.parse(parts[0]),
                start_time=parts[1],
                end_time=parts[2],
                room=parts[3] if len(parts) > 3 else "",
            ))
        except (ValueError, ValidationError) as e:
            raise click.BadParameter(f"Block {i} ('{raw}'): {e}", param_hint="--entry")
    return entries


def _print_rejection(rejection) -> None:
    console.print(Panel(
        f"[red]{rejection.message}[/red]",
        title=f"✗ Abgelehnt ({rejection.kind})",
        border_style="red",
    ))


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def cmd_init(force: bool):
    """Legt die Default-Konfiguration an."""
    from config.manager import ConfigManager
    from config.defaults import default_engine_config

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    path = mgr.save(default_engine_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")
    console.print("Führen Sie jetzt [bold]python main.py seed[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config_or_abort()

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  Speicher: {config.store.data_path}",
        title="Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Schichten", box=box.ROUNDED)
    table.add_column("Schicht")
    table.add_column("Name")
    table.add_column("Beginn")
    table.add_column("Ende")
    for sc in config.shifts:
        table.add_row(sc.shift.value, sc.display_name, sc.start_time, sc.end_time)
    console.print(table)

    console.print(
        f"\n[bold]Unterrichtstage:[/bold] {', '.join(d.short for d in config.days)} | "
        f"[bold]Log-Level:[/bold] {config.log_level}"
    )


# ─── SEED ─────────────────────────────────────────────────────────────────────

@click.command("seed")
def cmd_seed():
    """Schreibt Beispieldaten (Gruppen, Kurse, Blöcke) in einen leeren Speicher."""
    mgr, config = _load_config_or_abort()
    from data.demo_data import populate_store

    store = _open_store(config)
    if store.list_groups():
        console.print(
            f"[yellow]Der Speicher {config.store.data_path} enthält bereits Daten.[/yellow]"
        )
        sys.exit(1)
    counts = populate_store(store, config)
    console.print(
        f"[green]✓[/green] {counts['groups']} Gruppen, {counts['courses']} Kurse, "
        f"{counts['schedules']} Blöcke gespeichert: {config.store.data_path}"
    )


# ─── GROUPS ───────────────────────────────────────────────────────────────────

@click.command("groups")
def cmd_groups():
    """Listet Gruppen mit Schicht und Kursen auf."""
    mgr, config = _load_config_or_abort()
    store = _open_store(config)

    groups = store.list_groups()
    if not groups:
        console.print("[dim]Keine Gruppen vorhanden.[/dim]")
        return

    table = Table(title="Gruppen", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Schicht")
    table.add_column("Schüler", justify="right")
    table.add_column("Kurse")
    for g in groups:
        courses = store.list_courses_of_group(g.id)
        shift_name = config.shift_config(g.shift).display_name
        table.add_row(
            g.id, g.name, f"{shift_name} {g.shift_start}–{g.shift_end}",
            str(g.student_count),
            ", ".join(f"{c.id} {c.subject_name}" for c in courses) or "—",
        )
    console.print(table)


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("group_id")
@click.option("--course", "course_id", default=None,
              help="Kurs hervorheben (Kurs-ID).")
@click.option("--list", "as_list", is_flag=True, default=False,
              help="Blöcke als Liste je Tag statt als Raster.")
def cmd_show(group_id: str, course_id, as_list: bool):
    """Zeigt das Wochenraster einer Gruppe."""
    mgr, config = _load_config_or_abort()
    from export.tui_renderer import build_day_table, build_grid_table
    from scheduling.service import SchedulingService
    from store.errors import NotFoundError

    store = _open_store(config)
    service = SchedulingService(store, config)
    try:
        group = store.get_group(group_id)
        if as_list:
            by_day = service.schedules_by_day_of_group(group_id)
        else:
            grid = service.weekly_grid(group_id, highlight_course_id=course_id)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    if as_list:
        console.print(build_day_table(by_day, f"Wochenplan {group.name}"))
        return
    console.print(build_grid_table(grid, group, config.shift_config(group.shift).display_name))


# ─── TEACHER ──────────────────────────────────────────────────────────────────

@click.command("teacher")
@click.argument("teacher_name")
def cmd_teacher(teacher_name: str):
    """Zeigt den Wochenplan einer Lehrkraft über alle Gruppen."""
    mgr, config = _load_config_or_abort()
    from export.tui_renderer import build_day_table
    from scheduling.service import SchedulingService
    from store.errors import NotFoundError

    service = SchedulingService(_open_store(config), config)
    try:
        by_day = service.schedules_by_day_of_teacher(teacher_name)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    console.print(build_day_table(by_day, f"Wochenplan {teacher_name}", show_group=True))


# ─── CHECK / SET ──────────────────────────────────────────────────────────────

@click.command("check")
@click.argument("course_id")
@click.option("--entry", "-e", "raw_entries", multiple=True,
              help='Block "TAG BEGINN ENDE RAUM", mehrfach angebbar.')
def cmd_check(course_id: str, raw_entries: tuple[str, ...]):
    """Prüft Blöcke für einen Kurs, ohne zu speichern."""
    mgr, config = _load_config_or_abort()
    from scheduling.service import SchedulingService
    from store.errors import NotFoundError

    entries = _parse_entries(course_id, raw_entries)
    service = SchedulingService(_open_store(config), config)
    try:
        outcome = service.validate_course_schedules(course_id, entries)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if not outcome.accepted:
        _print_rejection(outcome.rejection)
        sys.exit(1)
    console.print(f"[green]✓[/green] {len(entries)} Blöcke für Kurs {course_id} zulässig.")


@click.command("set")
@click.argument("course_id")
@click.option("--entry", "-e", "raw_entries", multiple=True,
              help='Block "TAG BEGINN ENDE RAUM", mehrfach angebbar.')
def cmd_set(course_id: str, raw_entries: tuple[str, ...]):
    """Prüft Blöcke und ersetzt damit alle Blöcke des Kurses."""
    mgr, config = _load_config_or_abort()
    from export.tui_renderer import build_grid_table
    from scheduling.errors import ScheduleRejection, ScheduleReplacementError
    from scheduling.service import SchedulingService
    from store.errors import NotFoundError

    entries = _parse_entries(course_id, raw_entries)
    store = _open_store(config)
    service = SchedulingService(store, config)
    try:
        service.save_course_schedules(course_id, entries)
    except ScheduleRejection as rejection:
        _print_rejection(rejection)
        sys.exit(1)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ScheduleReplacementError as e:
        console.print(
            f"[red bold]Speichern nicht abgeschlossen:[/red bold] {e}\n"
            "Bitte den Befehl vollständig wiederholen."
        )
        sys.exit(1)

    console.print(f"[green]✓[/green] Blöcke für Kurs {course_id} gespeichert.")
    group = store.get_group(store.get_course(course_id).group_id)
    grid = service.weekly_grid(group.id, highlight_course_id=course_id)
    console.print(build_grid_table(grid, group, config.shift_config(group.shift).display_name))


# ─── AUDIT ────────────────────────────────────────────────────────────────────

@click.command("audit")
@click.argument("group_id")
def cmd_audit(group_id: str):
    """Prüft die gespeicherten Blöcke einer Gruppe auf Regelverletzungen."""
    mgr, config = _load_config_or_abort()
    from analysis.schedule_audit import ScheduleAuditor
    from store.errors import NotFoundError

    store = _open_store(config)
    try:
        group = store.get_group(group_id)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    report = ScheduleAuditor().audit(group, store.list_schedules_of_group(group_id))
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("group_id")
@click.option("--course", "course_id", default=None, help="Kurs hervorheben (Kurs-ID).")
@click.option("--output", "-o", default=None,
              help="Ausgabepfad (Default: output/wochenplan_<gruppe>.xlsx).")
def cmd_export(group_id: str, course_id, output):
    """Exportiert das Wochenraster einer Gruppe als Excel-Datei."""
    mgr, config = _load_config_or_abort()
    from export.excel_export import GridExcelExporter
    from scheduling.service import SchedulingService
    from store.errors import NotFoundError

    store = _open_store(config)
    try:
        group = store.get_group(group_id)
        grid = SchedulingService(store, config).weekly_grid(group_id, course_id)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    out_path = Path(output) if output else Path(f"output/wochenplan_{group_id}.xlsx")
    GridExcelExporter(grid, group, config.school_name).export(out_path)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Wochenplan: Stundenblöcke von Kursen prüfen, speichern und anzeigen.

    Starten Sie mit: python main.py init
    """


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_seed)
cli.add_command(cmd_groups)
cli.add_command(cmd_show)
cli.add_command(cmd_teacher)
cli.add_command(cmd_check)
cli.add_command(cmd_set)
cli.add_command(cmd_audit)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
