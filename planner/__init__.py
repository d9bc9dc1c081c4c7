"""Lernplaner: Wochenkalender, Fortschrittsbuch und greedy Wochen-Zuteilung."""

from .errors import PlannerError, ScheduleConflict, InvalidBoundary, UnknownSlot, UnknownTopic
from .weekly_calendar import WeeklyCalendar
from .progress_ledger import ProgressLedger
from .allocator import PlanEntry, WeekPlan, plan_week, monday_of
from .commit import apply_plan
from .service import StudyPlanner

__all__ = [
    "PlannerError",
    "ScheduleConflict",
    "InvalidBoundary",
    "UnknownSlot",
    "UnknownTopic",
    "WeeklyCalendar",
    "ProgressLedger",
    "PlanEntry",
    "WeekPlan",
    "plan_week",
    "monday_of",
    "apply_plan",
    "StudyPlanner",
]
