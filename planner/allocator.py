"""Wochen-Zuteilung: verteilt offene Themen-Lernzeit auf die Blöcke einer Woche.

Ablauf (greedy, deterministisch, ohne Vorausschau):
  1. Jeder Wochenblock wird auf ein konkretes Datum abgebildet
     (week_start + day - 1).
  2. Die Blöcke werden chronologisch sortiert: Datum, dann Beginn.
     Diese Reihenfolge bestimmt, welcher Block knappe Themenzeit zuerst erhält.
  3. Pro Fach zeigt ein Cursor auf das erste Thema mit Restzeit; die
     Restzeiten werden in einer Arbeitskopie fortgeschrieben, damit
     Verbrauch zwischen Blöcken übertragen wird, ohne das Fortschrittsbuch
     zu verändern.
  4. Jeder Block wird von links nach rechts gefüllt. Ist ein Thema fertig,
     rückt der Cursor zum nächsten offenen Thema. Bleibt kein Thema übrig,
     ist der Rest des Blocks Leerlauf.
"""

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.catalog import Catalog
from models.timeslot import format_minutes
from models.weekly_slot import WeeklySlot
from planner.progress_ledger import ProgressLedger

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class PlanEntry(BaseModel):
    """Ein zusammenhängender Abschnitt eines Blocks für genau ein Thema."""

    date: date
    start: str                 # "HH:MM"
    end: str                   # "HH:MM"
    subject_id: str
    topic_id: str
    allocated_minutes: int
    remaining_after: int       # Restzeit des Themas nach diesem Abschnitt
    slot_id: Optional[str] = None


class WeekPlan(BaseModel):
    """Vorschau der Zuteilung für eine Woche (wird nicht gespeichert)."""

    student_id: str
    week_start: date
    entries: list[PlanEntry]

    @property
    def total_minutes(self) -> int:
        return sum(e.allocated_minutes for e in self.entries)

    def by_date(self) -> dict[date, list[PlanEntry]]:
        """Einträge gruppiert nach Datum (jeweils nach Beginn sortiert)."""
        grouped: dict[date, list[PlanEntry]] = {}
        for e in self.entries:
            grouped.setdefault(e.date, []).append(e)
        for entries in grouped.values():
            entries.sort(key=lambda e: e.start)
        return grouped

    def minutes_by_subject(self) -> dict[str, int]:
        totals: dict[str, int] = {}
        for e in self.entries:
            totals[e.subject_id] = totals.get(e.subject_id, 0) + e.allocated_minutes
        return totals

    def topic_totals(self) -> dict[str, int]:
        """Summe der zugeteilten Minuten pro Thema."""
        totals: dict[str, int] = {}
        for e in self.entries:
            totals[e.topic_id] = totals.get(e.topic_id, 0) + e.allocated_minutes
        return totals

    def save_json(self, path: Path) -> None:
        """Speichert den Plan als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "WeekPlan":
        """Lädt einen gespeicherten Plan aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Plan nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


# ─── Datums-Hilfen ────────────────────────────────────────────────────────────

def monday_of(day: date) -> date:
    """Montag der Woche, in der `day` liegt."""
    return day - timedelta(days=day.isoweekday() - 1)


def slot_date(week_start: date, day: int) -> date:
    """Konkretes Datum eines Wochentags (1=Mo) in der Woche ab week_start."""
    return week_start + timedelta(days=day - 1)


# ─── Zuteilung ────────────────────────────────────────────────────────────────

class _SubjectCursor:
    """Zeiger in die geordnete Themenliste eines Fachs mit Arbeitskopie der Restzeiten."""

    def __init__(self, topic_ids: list[str], remaining: dict[str, int]) -> None:
        self._topic_ids = topic_ids
        self._remaining = remaining
        self._pos = 0
        self._skip_done()

    def current(self) -> Optional[str]:
        if self._pos < len(self._topic_ids):
            return self._topic_ids[self._pos]
        return None

    def remaining(self, topic_id: str) -> int:
        return self._remaining[topic_id]

    def consume(self, topic_id: str, minutes: int) -> int:
        """Zieht Minuten ab und rückt bei Abschluss weiter. Gibt den Rest zurück."""
        self._remaining[topic_id] -= minutes
        if self._remaining[topic_id] == 0:
            self._skip_done()
        return self._remaining[topic_id]

    def _skip_done(self) -> None:
        while self._pos < len(self._topic_ids) and self._remaining[self._topic_ids[self._pos]] <= 0:
            self._pos += 1


def plan_week(
    student_id: str,
    week_start: date,
    slots: list[WeeklySlot],
    catalog: Catalog,
    ledger: ProgressLedger,
) -> list[PlanEntry]:
    """Berechnet die Zuteilungs-Vorschau für eine Woche (reine Funktion).

    Args:
        student_id: Schüler, dessen Blöcke und Fortschritt verwendet werden.
        week_start: Montag der Zielwoche (siehe monday_of).
        slots: Wochenblöcke; Blöcke anderer Schüler werden ignoriert.
        catalog: Fächer- und Themenkatalog.
        ledger: Fortschrittsbuch (wird nur gelesen).

    Returns:
        Geordnete Liste von PlanEntry; leer bei leerem Kalender oder
        vollständig erledigtem Katalog.
    """
    if week_start.isoweekday() != 1:
        raise ValueError(f"week_start muss ein Montag sein: {week_start.isoformat()}")

    resolved = sorted(
        ((slot_date(week_start, s.day), s) for s in slots if s.student_id == student_id),
        key=lambda item: (item[0], item[1].start_minutes, item[1].id),
    )

    cursors: dict[str, _SubjectCursor] = {}
    entries: list[PlanEntry] = []

    for day, slot in resolved:
        cursor = cursors.get(slot.subject_id)
        if cursor is None:
            cursor = _build_cursor(student_id, slot.subject_id, catalog, ledger)
            cursors[slot.subject_id] = cursor

        capacity = slot.duration_minutes
        position = slot.start_minutes
        while capacity > 0:
            topic_id = cursor.current()
            if topic_id is None:
                break
            allocated = min(capacity, cursor.remaining(topic_id))
            remaining_after = cursor.consume(topic_id, allocated)
            entries.append(PlanEntry(
                date=day,
                start=format_minutes(position),
                end=format_minutes(position + allocated),
                subject_id=slot.subject_id,
                topic_id=topic_id,
                allocated_minutes=allocated,
                remaining_after=remaining_after,
                slot_id=slot.id,
            ))
            capacity -= allocated
            position += allocated

        logger.debug(
            f"  {day.isoformat()} {slot.start}–{slot.end} {slot.subject_id}: "
            f"{slot.duration_minutes - capacity}/{slot.duration_minutes} min belegt"
        )

    logger.info(
        f"Wochenplan {student_id} ab {week_start.isoformat()}: "
        f"{len(entries)} Einträge aus {len(resolved)} Blöcken"
    )
    return entries


def _build_cursor(
    student_id: str, subject_id: str, catalog: Catalog, ledger: ProgressLedger
) -> _SubjectCursor:
    topics = catalog.list_topics(subject_id)
    remaining = {t.id: ledger.remaining_for(student_id, t.id) for t in topics}
    return _SubjectCursor([t.id for t in topics], remaining)
