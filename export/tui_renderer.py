"""Gemeinsamer Renderer für die Terminal-Anzeige von Wochenplan und Fortschritt.

Wird von `plan show`, `progress show` und `slot list` (Rich) verwendet.
"""

from typing import TYPE_CHECKING

from planner.allocator import slot_date

if TYPE_CHECKING:
    from config.schema import PlannerConfig
    from models.catalog import Catalog
    from models.topic_progress import TopicProgress
    from models.weekly_slot import WeeklySlot
    from planner.allocator import WeekPlan


def render_plan_rows(
    plan: "WeekPlan",
    catalog: "Catalog",
    config: "PlannerConfig",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Wochenplan zurück.

    Jede Zeile: [Tag, Zeit, Fach — Thema, Minuten, Rest, Fortschritt]
    Tage ohne Einträge erscheinen als eine Zeile mit '—'; nach jedem Tag
    folgt eine Summenzeile.
    """
    from export.helpers import completion_percent, entry_label, progress_bar

    day_names = config.time_grid.day_names
    grouped = plan.by_date()
    rows: list[list[str]] = []

    for day in range(1, 8):
        current = slot_date(plan.week_start, day)
        head = f"{day_names[day - 1]}\n{current.strftime('%d.%m.')}"
        entries = grouped.get(current, [])
        if not entries:
            rows.append([head, "—", "—", "", "", ""])
            continue
        for i, e in enumerate(entries):
            pct = completion_percent(e, catalog)
            rows.append([
                head if i == 0 else "",
                f"{e.start}–{e.end}",
                entry_label(e, catalog),
                f"{e.allocated_minutes} dk",
                f"{e.remaining_after} dk",
                f"{progress_bar(pct)} {pct}%",
            ])
        total = sum(e.allocated_minutes for e in entries)
        rows.append(["", "", "[dim]Toplam[/dim]", f"[dim]{total} dk[/dim]", "", ""])

    return rows


def render_progress_rows(
    progress: list["TopicProgress"],
    catalog: "Catalog",
) -> list[list[str]]:
    """Zeilen für das Fortschrittsbuch: [Fach, Thema, erledigt/Soll, Status]."""
    from export.helpers import progress_bar

    rows: list[list[str]] = []
    for p in progress:
        topic = catalog.get_topic(p.topic_id)
        if topic is None:
            continue
        subject = catalog.get_subject(topic.subject_id)
        status = "[green]✓[/green]" if p.completed_flag else f"{progress_bar(p.percent)} {p.percent}%"
        rows.append([
            subject.label if subject else topic.subject_id,
            f"{topic.name} [dim]({topic.id})[/dim]",
            f"{p.completed_minutes}/{topic.avg_minutes} dk",
            status,
        ])
    return rows


def render_slot_rows(
    slots: list["WeeklySlot"],
    catalog: "Catalog",
    config: "PlannerConfig",
) -> list[list[str]]:
    """Zeilen für die Blockliste: [ID, Tag, Zeit, Dauer, Fach]."""
    day_names = config.time_grid.day_names
    rows: list[list[str]] = []
    for s in slots:
        subject = catalog.get_subject(s.subject_id)
        rows.append([
            s.id,
            day_names[s.day - 1],
            f"{s.start}–{s.end}",
            f"{s.duration_minutes} dk",
            subject.label if subject else s.subject_id,
        ])
    return rows
