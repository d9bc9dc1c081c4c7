"""Validierung von Kalender und Wochenplan.

Prüft Blöcke und eine fertige Zuteilung auf Regelverletzungen als
Sicherheitsnetz unabhängig von Kalender und Zuteilung.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.catalog import Catalog
from models.timeslot import to_minutes
from models.weekly_slot import WeeklySlot
from planner.allocator import WeekPlan, slot_date
from planner.progress_ledger import ProgressLedger


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "slot_overlap"
    description: str
    entity: str          # slot_id / topic_id / student_id


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
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
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=22)
        table.add_column("Entität", width=14)
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


class PlanValidator:
    """Prüft Wochenblöcke und eine WeekPlan-Vorschau."""

    def validate(
        self,
        slots: list[WeeklySlot],
        plan: WeekPlan,
        catalog: Catalog,
        ledger: ProgressLedger,
    ) -> ValidationReport:
        """Führt alle Prüfungen durch und gibt einen ValidationReport zurück.

        `ledger` muss den Stand vor der Übernahme des Plans zeigen.
        """
        violations: list[ValidationViolation] = []
        own_slots = [s for s in slots if s.student_id == plan.student_id]

        violations.extend(self.check_slots(own_slots))
        violations.extend(self._check_entries_in_slots(own_slots, plan))
        violations.extend(self._check_slot_capacity(own_slots, plan))
        violations.extend(self._check_topic_budget(plan, catalog, ledger))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def check_slots(self, slots: list[WeeklySlot]) -> list[ValidationViolation]:
        """Keine zwei Blöcke desselben Schülers dürfen sich am selben Tag überlappen."""
        violations: list[ValidationViolation] = []
        by_day: dict[tuple, list[WeeklySlot]] = defaultdict(list)
        for s in slots:
            by_day[(s.student_id, s.day)].append(s)

        for (student_id, day), day_slots in by_day.items():
            ordered = sorted(day_slots, key=lambda s: s.start_minutes)
            for a, b in zip(ordered, ordered[1:]):
                if a.overlaps(b):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="slot_overlap",
                        entity=a.id,
                        description=(
                            f"Tag {day}: {a.start}–{a.end} überschneidet "
                            f"{b.start}–{b.end} ({b.id})."
                        ),
                    ))
        return violations

    def _check_entries_in_slots(
        self, slots: list[WeeklySlot], plan: WeekPlan
    ) -> list[ValidationViolation]:
        """Jeder Eintrag muss innerhalb eines Blocks mit passendem Fach liegen."""
        violations: list[ValidationViolation] = []
        for e in plan.entries:
            start, end = to_minutes(e.start), to_minutes(e.end)
            containing = [
                s for s in slots
                if slot_date(plan.week_start, s.day) == e.date
                and s.start_minutes <= start and end <= s.end_minutes
            ]
            if not containing:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="entry_outside_slot",
                    entity=e.topic_id,
                    description=f"{e.date.isoformat()} {e.start}–{e.end} liegt in keinem Block.",
                ))
                continue
            if all(s.subject_id != e.subject_id for s in containing):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="wrong_subject",
                    entity=e.topic_id,
                    description=(
                        f"{e.date.isoformat()} {e.start}–{e.end}: Fach {e.subject_id} "
                        f"passt nicht zum Block ({containing[0].subject_id})."
                    ),
                ))
        return violations

    def _check_slot_capacity(
        self, slots: list[WeeklySlot], plan: WeekPlan
    ) -> list[ValidationViolation]:
        """Summe der Minuten pro Block ≤ Blockdauer."""
        violations: list[ValidationViolation] = []
        used: dict[str, int] = defaultdict(int)
        for e in plan.entries:
            if e.slot_id:
                used[e.slot_id] += e.allocated_minutes
        capacity = {s.id: s.duration_minutes for s in slots}
        for slot_id, minutes in used.items():
            if slot_id in capacity and minutes > capacity[slot_id]:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="slot_overbooked",
                    entity=slot_id,
                    description=f"{minutes} min verplant bei {capacity[slot_id]} min Blockdauer.",
                ))
        return violations

    def _check_topic_budget(
        self, plan: WeekPlan, catalog: Catalog, ledger: ProgressLedger
    ) -> list[ValidationViolation]:
        """Minuten pro Thema ≤ Restzeit zu Planbeginn; remaining_after fortlaufend."""
        violations: list[ValidationViolation] = []
        running: dict[str, int] = {}
        for e in plan.entries:
            if catalog.get_topic(e.topic_id) is None:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_topic",
                    entity=e.topic_id,
                    description="Thema fehlt im Katalog.",
                ))
                continue
            if e.topic_id not in running:
                running[e.topic_id] = ledger.remaining_for(plan.student_id, e.topic_id)
            running[e.topic_id] -= e.allocated_minutes
            if running[e.topic_id] < 0:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="topic_overallocated",
                    entity=e.topic_id,
                    description=f"Mehr Zeit verplant als offen ({-running[e.topic_id]} min zu viel).",
                ))
                running[e.topic_id] = 0
            elif running[e.topic_id] != e.remaining_after:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="remaining_mismatch",
                    entity=e.topic_id,
                    description=(
                        f"remaining_after={e.remaining_after}, erwartet {running[e.topic_id]}."
                    ),
                ))
        return violations
