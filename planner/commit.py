"""Übernahme einer Wochenvorschau in das Fortschrittsbuch."""

import logging

from planner.allocator import PlanEntry
from planner.progress_ledger import ProgressLedger

logger = logging.getLogger(__name__)


def apply_plan(ledger: ProgressLedger, student_id: str, entries: list[PlanEntry]) -> int:
    """Bucht alle Einträge einer Vorschau in der erzeugten Reihenfolge.

    Jede Buchung ist für sich atomar; schlägt eine fehl, bleiben die bereits
    gebuchten Einträge bestehen und der Fehler wird weitergereicht.

    Returns:
        Anzahl gebuchter Einträge.
    """
    for entry in entries:
        ledger.update_progress(student_id, entry.topic_id, entry.allocated_minutes)
    logger.info(
        f"Plan übernommen: {student_id}, {len(entries)} Einträge, "
        f"{sum(e.allocated_minutes for e in entries)} min"
    )
    return len(entries)
