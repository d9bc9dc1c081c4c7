"""Wochenlast: aggregierte Lernminuten pro Schüler mit Warnschwellen.

Reine Auswertung ohne Seiteneffekte; wird vom Aufrufer genutzt, um zu dünn
(< 5 h) oder zu voll (> 10 h) geplante Schüler zu markieren.
"""

import logging
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel

from config.schema import WorkloadConfig

if TYPE_CHECKING:
    from planner.allocator import WeekPlan
    from planner.weekly_calendar import WeeklyCalendar

logger = logging.getLogger(__name__)

WorkloadStatus = Literal["low", "ok", "high"]


class WorkloadSummary(BaseModel):
    """Wochenlast eines Schülers."""

    student_id: str
    total_minutes: int
    minutes_by_day: dict[int, int]        # 1=Mo .. 7=So
    minutes_by_subject: dict[str, int]
    idle_minutes: int = 0                 # nur bei Plan-Auswertung
    status: WorkloadStatus
    warnings: list[str]

    @property
    def total_hours(self) -> float:
        return round(self.total_minutes / 60, 1)

    def print_rich(self, day_names: Optional[list[str]] = None) -> None:
        """Gibt die Auswertung formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        names = day_names or ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]
        color = {"low": "yellow", "ok": "green", "high": "red"}[self.status]
        lines = [
            f"[bold {color}]{self.status.upper()}[/bold {color}]  "
            f"{self.total_hours} h/Woche ({self.total_minutes} min)"
        ]
        for w in self.warnings:
            lines.append(f"  [{color}]• {w}[/{color}]")
        console.print(Panel("\n".join(lines), title=f"Wochenlast {self.student_id}",
                            border_style="cyan"))

        table = Table(box=box.ROUNDED)
        table.add_column("Tag")
        table.add_column("Minuten", justify="right")
        for day in range(1, 8):
            table.add_row(names[day - 1], str(self.minutes_by_day.get(day, 0)))
        console.print(table)


def _classify(total: int, config: WorkloadConfig) -> tuple[WorkloadStatus, list[str]]:
    if total < config.min_weekly_minutes:
        return "low", [
            f"Zu wenig Lernzeit: {total} min < {config.min_weekly_minutes} min pro Woche."
        ]
    if total > config.max_weekly_minutes:
        return "high", [
            f"Plan sehr voll: {total} min > {config.max_weekly_minutes} min pro Woche."
        ]
    return "ok", []


def summarize_calendar(
    calendar: "WeeklyCalendar",
    student_id: str,
    config: Optional[WorkloadConfig] = None,
) -> WorkloadSummary:
    """Wochenlast aus den wiederkehrenden Blöcken eines Schülers."""
    config = config or WorkloadConfig()
    by_day: dict[int, int] = {}
    by_subject: dict[str, int] = {}
    for slot in calendar.list_slots(student_id):
        by_day[slot.day] = by_day.get(slot.day, 0) + slot.duration_minutes
        by_subject[slot.subject_id] = by_subject.get(slot.subject_id, 0) + slot.duration_minutes

    total = calendar.weekly_total_minutes(student_id)
    status, warnings = _classify(total, config)
    if status != "ok":
        logger.warning(f"Wochenlast {student_id}: {warnings[0]}")
    return WorkloadSummary(
        student_id=student_id,
        total_minutes=total,
        minutes_by_day=by_day,
        minutes_by_subject=by_subject,
        status=status,
        warnings=warnings,
    )


def summarize_plan(
    plan: "WeekPlan",
    capacity_minutes: Optional[int] = None,
    config: Optional[WorkloadConfig] = None,
) -> WorkloadSummary:
    """Wochenlast aus einer Zuteilung (tatsächlich verplante Minuten).

    capacity_minutes: Summe der Blockdauern; daraus ergibt sich die Leerlaufzeit.
    """
    config = config or WorkloadConfig()
    by_day: dict[int, int] = {}
    for e in plan.entries:
        weekday = e.date.isoweekday()
        by_day[weekday] = by_day.get(weekday, 0) + e.allocated_minutes

    total = plan.total_minutes
    status, warnings = _classify(total, config)
    idle = max(0, capacity_minutes - total) if capacity_minutes is not None else 0
    if idle:
        warnings.append(f"{idle} min Blockzeit ohne offenes Thema (Leerlauf).")
    return WorkloadSummary(
        student_id=plan.student_id,
        total_minutes=total,
        minutes_by_day=by_day,
        minutes_by_subject=plan.minutes_by_subject(),
        idle_minutes=idle,
        status=status,
        warnings=warnings,
    )
