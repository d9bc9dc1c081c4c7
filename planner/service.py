"""StudyPlanner: Fassade über Kalender, Fortschrittsbuch und Zuteilung.

Verwendung:
    planner = StudyPlanner.from_state(PlannerState.load_json(path))
    entries = planner.plan_week("42", monday_of(date.today()))
    planner.apply_plan("42", entries)
    planner.save(path)
"""

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from models.catalog import Catalog
from models.planner_state import PlannerState
from models.topic_progress import TopicProgress
from models.weekly_slot import WeeklySlot
from planner.allocator import PlanEntry, WeekPlan, plan_week
from planner.commit import apply_plan
from planner.progress_ledger import ProgressLedger
from planner.weekly_calendar import Edge, WeeklyCalendar

if TYPE_CHECKING:
    from analysis.workload import WorkloadSummary
    from config.schema import WorkloadConfig

logger = logging.getLogger(__name__)


class StudyPlanner:
    """Öffentliche Schnittstelle des Lernplaners für einen Datenbestand."""

    def __init__(
        self,
        catalog: Catalog,
        calendar: Optional[WeeklyCalendar] = None,
        ledger: Optional[ProgressLedger] = None,
        state: Optional[PlannerState] = None,
    ) -> None:
        self.catalog = catalog
        self.calendar = calendar or WeeklyCalendar()
        self.ledger = ledger or ProgressLedger(catalog)
        self._state = state

    @classmethod
    def from_state(cls, state: PlannerState) -> "StudyPlanner":
        """Baut Kalender und Fortschrittsbuch aus einem gespeicherten Bestand."""
        return cls(
            catalog=state.catalog,
            calendar=WeeklyCalendar(state.slots),
            ledger=ProgressLedger(state.catalog, state.progress),
            state=state,
        )

    def to_state(self) -> PlannerState:
        """Momentaufnahme des aktuellen Bestands."""
        state = PlannerState(
            catalog=self.catalog,
            slots=self.calendar.slots,
            progress=self.ledger.rows,
        )
        if self._state is not None:
            state.created_at = self._state.created_at
            state.modified_at = self._state.modified_at
        return state

    def save(self, path: Path) -> None:
        state = self.to_state()
        state.save_json(path)
        self._state = state

    # ─── Kalender ─────────────────────────────────────────────────────────────

    def list_slots(self, student_id: str) -> list[WeeklySlot]:
        return self.calendar.list_slots(student_id)

    def add_slot(self, slot: WeeklySlot) -> WeeklySlot:
        self._check_subject(slot.subject_id)
        return self.calendar.add_slot(slot)

    def create_slot(self, student_id: str, day: int, start, subject_id: str,
                    duration_minutes: int = 60) -> WeeklySlot:
        self._check_subject(subject_id)
        return self.calendar.create_slot(student_id, day, start, subject_id, duration_minutes)

    def move_slot(self, slot_id: str, day: int, start) -> WeeklySlot:
        return self.calendar.move_slot(slot_id, day, start)

    def resize_slot(self, slot_id: str, edge: Edge, new_time) -> WeeklySlot:
        return self.calendar.resize_slot(slot_id, edge, new_time)

    def remove_slot(self, slot_id: str) -> None:
        self.calendar.remove_slot(slot_id)

    def weekly_total_minutes(self, student_id: str) -> int:
        return self.calendar.weekly_total_minutes(student_id)

    # ─── Fortschritt ──────────────────────────────────────────────────────────

    def ensure_progress_for_student(self, student_id: str) -> int:
        return self.ledger.ensure_progress_for_student(student_id)

    def get_progress(self, student_id: str) -> list[TopicProgress]:
        return self.ledger.get_progress(student_id)

    def reset_topic_progress(self, student_id: str, topic_id: str) -> None:
        self.ledger.reset_topic_progress(student_id, topic_id)

    def set_completed(self, student_id: str, topic_id: str, done: bool = True) -> None:
        self.ledger.set_completed(student_id, topic_id, done)

    # ─── Planung ──────────────────────────────────────────────────────────────

    def plan_week(self, student_id: str, week_start: date) -> list[PlanEntry]:
        """Vorschau der Wochenzuteilung; verändert keinen Zustand."""
        return plan_week(
            student_id, week_start,
            self.calendar.list_slots(student_id), self.catalog, self.ledger,
        )

    def preview(self, student_id: str, week_start: date) -> WeekPlan:
        return WeekPlan(
            student_id=student_id,
            week_start=week_start,
            entries=self.plan_week(student_id, week_start),
        )

    def apply_plan(self, student_id: str, entries: list[PlanEntry]) -> int:
        return apply_plan(self.ledger, student_id, entries)

    def workload(self, student_id: str, config: Optional["WorkloadConfig"] = None) -> "WorkloadSummary":
        from analysis.workload import summarize_calendar
        return summarize_calendar(self.calendar, student_id, config)

    # ─── Intern ───────────────────────────────────────────────────────────────

    def _check_subject(self, subject_id: str) -> None:
        if self.catalog.get_subject(subject_id) is None:
            raise ValueError(f"Unbekanntes Fach: {subject_id}")
