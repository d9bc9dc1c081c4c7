"""Lernplaner — Haupt-CLI.

Verwendung:
  python main.py init                             Konfiguration + Demo-Bestand anlegen
  python main.py config show                      Konfiguration anzeigen
  python main.py slot list <schüler>              Wochenblöcke anzeigen
  python main.py slot add <schüler> <tag> <start> <fach>
  python main.py slot move <block> <tag> <start>  Block verschieben
  python main.py slot resize <block> top|bottom <zeit>
  python main.py slot remove <block>              Block löschen
  python main.py plan show <schüler>              Wochenvorschau berechnen
  python main.py plan apply <schüler>             Vorschau ins Fortschrittsbuch buchen
  python main.py plan export <schüler>            Vorschau als Excel exportieren
  python main.py progress show <schüler>          Fortschritt anzeigen
  python main.py progress reset <schüler> <thema> Thema zurücksetzen
  python main.py progress done <schüler> <thema>  Thema als erledigt markieren
  python main.py workload <schüler>               Wochenlast prüfen
  python main.py validate <schüler>               Vorschau validieren
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from planner.errors import PlannerError

console = Console()


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
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_planner_or_abort(config):
    """Lädt den gespeicherten Bestand als StudyPlanner."""
    from models.planner_state import PlannerState
    from planner.service import StudyPlanner

    state_path = Path(config.storage.state_path)
    if not state_path.exists():
        console.print(
            f"[red]Kein Datenbestand gefunden: {state_path}[/red]\n"
            "Führen Sie zunächst [bold]python main.py init[/bold] aus."
        )
        sys.exit(1)
    try:
        return StudyPlanner.from_state(PlannerState.load_json(state_path))
    except (PlannerError, ValueError) as e:
        console.print(f"[red bold]Datenbestand ungültig:[/red bold] {e}")
        sys.exit(1)


def _abort(error: Exception) -> None:
    console.print(f"[red]✗ {error}[/red]")
    sys.exit(1)


def _resolve_week(week: Optional[datetime]) -> date:
    """Montag der gewählten (oder aktuellen) Woche."""
    from planner.allocator import monday_of
    return monday_of(week.date() if week is not None else date.today())


_week_option = click.option(
    "--week", "-w",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Ein Datum der Zielwoche (YYYY-MM-DD); Standard: aktuelle Woche.",
)


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration und Daten überschreiben.")
@click.option("--empty", is_flag=True, default=False,
              help="Ohne Demo-Katalog anlegen.")
def cmd_init(force: bool, empty: bool):
    """Legt Konfiguration und einen Datenbestand mit Demo-Katalog an."""
    from config.defaults import default_planner_config, demo_catalog
    from config.manager import ConfigManager
    from models.catalog import Catalog
    from models.planner_state import PlannerState

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] neu anlegen."
        )
        return

    config = default_planner_config()
    mgr.save(config)

    catalog = Catalog() if empty else demo_catalog()
    state = PlannerState(catalog=catalog)
    state.save_json(Path(config.storage.state_path))
    console.print(f"[green]✓[/green] Datenbestand gespeichert: {config.storage.state_path}")
    console.print(f"\n[dim]{state.summary()}[/dim]")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config_or_abort()

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  "
        f"Datenbestand: {config.storage.state_path}",
        title="Lernplaner-Konfiguration",
        border_style="cyan",
    ))

    tg = config.time_grid
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Nr.")
    table.add_column("Tag")
    for i, name in enumerate(tg.day_names, 1):
        table.add_row(str(i), name)
    console.print(table)

    wl = config.workload
    console.print(
        f"\n[bold]Raster:[/bold] 07:00–24:00, 30 min | "
        f"Neue Blöcke: {tg.default_slot_minutes} min"
    )
    console.print(
        f"[bold]Wochenlast:[/bold] {wl.min_weekly_minutes}–{wl.max_weekly_minutes} min"
    )


# ─── SLOT ─────────────────────────────────────────────────────────────────────

@click.group("slot")
def cmd_slot():
    """Wochenblöcke anzeigen und bearbeiten."""


@cmd_slot.command("list")
@click.argument("student")
def slot_list(student: str):
    """Listet die Wochenblöcke eines Schülers."""
    from export.tui_renderer import render_slot_rows

    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    slots = planner.list_slots(student)
    if not slots:
        console.print(f"[dim]Keine Blöcke für {student}.[/dim]")
        return

    table = Table(title=f"Wochenblöcke {student}", box=box.ROUNDED)
    for col in ("ID", "Tag", "Zeit", "Dauer", "Fach"):
        table.add_column(col)
    for row in render_slot_rows(slots, planner.catalog, config):
        table.add_row(*row)
    console.print(table)
    console.print(f"[bold]Summe:[/bold] {planner.weekly_total_minutes(student)} min/Woche")


@cmd_slot.command("add")
@click.argument("student")
@click.argument("day", type=click.IntRange(1, 7))
@click.argument("start")
@click.argument("subject")
@click.option("--minutes", "-m", type=int, default=None,
              help="Dauer in Minuten (Standard aus der Konfiguration).")
def slot_add(student: str, day: int, start: str, subject: str, minutes: Optional[int]):
    """Legt einen Block an (Beginn wird ins Raster eingerastet)."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    duration = minutes or config.time_grid.default_slot_minutes
    try:
        slot = planner.create_slot(student, day, start, subject, duration)
    except (PlannerError, ValueError) as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(
        f"[green]✓[/green] Block {slot.id}: "
        f"{config.time_grid.day_names[slot.day - 1]} {slot.start}–{slot.end} ({slot.subject_id})"
    )


@cmd_slot.command("move")
@click.argument("slot_id")
@click.argument("day", type=click.IntRange(1, 7))
@click.argument("start")
def slot_move(slot_id: str, day: int, start: str):
    """Verschiebt einen Block (Dauer bleibt erhalten)."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    try:
        slot = planner.move_slot(slot_id, day, start)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(
        f"[green]✓[/green] Block {slot.id}: "
        f"{config.time_grid.day_names[slot.day - 1]} {slot.start}–{slot.end}"
    )


@cmd_slot.command("resize")
@click.argument("slot_id")
@click.argument("edge", type=click.Choice(["top", "bottom"]))
@click.argument("time")
def slot_resize(slot_id: str, edge: str, time: str):
    """Zieht die obere oder untere Kante eines Blocks."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    try:
        slot = planner.resize_slot(slot_id, edge, time)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(f"[green]✓[/green] Block {slot.id}: {slot.start}–{slot.end}")


@cmd_slot.command("remove")
@click.argument("slot_id")
def slot_remove(slot_id: str):
    """Löscht einen Block."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    try:
        planner.remove_slot(slot_id)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(f"[green]✓[/green] Block {slot_id} entfernt.")


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.group("plan")
def cmd_plan():
    """Wochenvorschau berechnen, übernehmen, exportieren."""


def _print_plan(plan, planner, config) -> None:
    from export.tui_renderer import render_plan_rows

    table = Table(
        title=f"Wochenplan {plan.student_id} ab {plan.week_start.strftime('%d.%m.%Y')}",
        box=box.ROUNDED,
        show_lines=False,
    )
    table.add_column("Tag", style="bold")
    table.add_column("Zeit")
    table.add_column("Fach — Thema")
    table.add_column("Min.", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Fortschritt")
    for row in render_plan_rows(plan, planner.catalog, config):
        table.add_row(*row)
    console.print(table)
    console.print(f"[bold]Verplant:[/bold] {plan.total_minutes} min")


@cmd_plan.command("show")
@click.argument("student")
@_week_option
def plan_show(student: str, week: Optional[datetime]):
    """Zeigt die Zuteilungs-Vorschau (ohne zu speichern)."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    plan = planner.preview(student, _resolve_week(week))
    if not plan.entries:
        console.print("[dim]Keine offenen Themen in den Wochenblöcken.[/dim]")
        return
    _print_plan(plan, planner, config)


@cmd_plan.command("apply")
@click.argument("student")
@_week_option
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage buchen.")
def plan_apply(student: str, week: Optional[datetime], yes: bool):
    """Bucht die Vorschau der Woche ins Fortschrittsbuch."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    plan = planner.preview(student, _resolve_week(week))
    if not plan.entries:
        console.print("[dim]Nichts zu buchen.[/dim]")
        return

    _print_plan(plan, planner, config)
    if not yes and not click.confirm("Plan übernehmen?", default=True):
        return
    try:
        count = planner.apply_plan(student, plan.entries)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(f"[green]✓[/green] {count} Einträge gebucht ({plan.total_minutes} min).")


@cmd_plan.command("export")
@click.argument("student")
@_week_option
@click.option("--output", "-o", default=None, help="Ausgabepfad (.xlsx).")
def plan_export(student: str, week: Optional[datetime], output: Optional[str]):
    """Exportiert die Vorschau als Excel-Datei."""
    from export.excel_export import PlanExcelExporter

    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    plan = planner.preview(student, _resolve_week(week))
    out_path = Path(output) if output else (
        Path(config.storage.export_dir) / f"lernplan_{student}_{plan.week_start.isoformat()}.xlsx"
    )
    PlanExcelExporter(plan, planner.catalog, config, planner.get_progress(student)).export(out_path)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── PROGRESS ─────────────────────────────────────────────────────────────────

@click.group("progress")
def cmd_progress():
    """Fortschrittsbuch anzeigen und korrigieren."""


@cmd_progress.command("show")
@click.argument("student")
def progress_show(student: str):
    """Zeigt den Fortschritt pro Thema."""
    from export.tui_renderer import render_progress_rows

    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    if planner.ensure_progress_for_student(student):
        planner.save(Path(config.storage.state_path))

    table = Table(title=f"Fortschritt {student}", box=box.ROUNDED)
    for col in ("Fach", "Thema", "Minuten", "Status"):
        table.add_column(col)
    for row in render_progress_rows(planner.get_progress(student), planner.catalog):
        table.add_row(*row)
    console.print(table)


@cmd_progress.command("reset")
@click.argument("student")
@click.argument("topic_id")
def progress_reset(student: str, topic_id: str):
    """Setzt ein Thema auf unbegonnen zurück."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    try:
        planner.reset_topic_progress(student, topic_id)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    console.print(f"[green]✓[/green] {topic_id} zurückgesetzt.")


@cmd_progress.command("done")
@click.argument("student")
@click.argument("topic_id")
@click.option("--undo", is_flag=True, default=False, help="Markierung aufheben.")
def progress_done(student: str, topic_id: str, undo: bool):
    """Markiert ein Thema als erledigt."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    try:
        planner.set_completed(student, topic_id, not undo)
    except PlannerError as e:
        _abort(e)
    planner.save(Path(config.storage.state_path))
    state = "offen" if undo else "erledigt"
    console.print(f"[green]✓[/green] {topic_id}: {state}.")


# ─── WORKLOAD ─────────────────────────────────────────────────────────────────

@click.command("workload")
@click.argument("student")
def cmd_workload(student: str):
    """Prüft die wöchentliche Lernzeit eines Schülers."""
    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    summary = planner.workload(student, config.workload)
    summary.print_rich(config.time_grid.day_names)


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("student")
@_week_option
def cmd_validate(student: str, week: Optional[datetime]):
    """Prüft Blöcke und Wochenvorschau auf Regelverletzungen."""
    from analysis.plan_validator import PlanValidator

    mgr, config = _load_config_or_abort()
    planner = _load_planner_or_abort(config)
    plan = planner.preview(student, _resolve_week(week))
    report = PlanValidator().validate(
        planner.calendar.slots, plan, planner.catalog, planner.ledger
    )
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Lernplaner: Wochenblöcke und Themenfortschritt pro Schüler.

    Starten Sie mit: python main.py init
    """
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_slot)
cli.add_command(cmd_plan)
cli.add_command(cmd_progress)
cli.add_command(cmd_workload)
cli.add_command(cmd_validate)


if __name__ == "__main__":
    main()
