"""Fehlerarten des Lernplaners.

Alle Kalender-Fehler sind beim Aufrufer behebbar: der Kalender bleibt
unverändert, der Nutzer kann mit anderen Parametern erneut versuchen.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.weekly_slot import WeeklySlot


class PlannerError(Exception):
    """Basisklasse aller Planer-Fehler."""


class ScheduleConflict(PlannerError):
    """Ein Block würde einen anderen Block desselben Tages überlappen."""

    def __init__(self, candidate: "WeeklySlot", conflicts: list["WeeklySlot"]):
        self.candidate = candidate
        self.conflicts = conflicts
        others = ", ".join(f"{s.start}–{s.end}" for s in conflicts)
        super().__init__(
            f"Zeitkonflikt: {candidate.start}–{candidate.end} an Tag {candidate.day} "
            f"überschneidet sich mit {others}"
        )


class InvalidBoundary(PlannerError, ValueError):
    """Uhrzeit außerhalb 07:00–24:00, nicht im 30-Minuten-Raster oder end ≤ start."""


class UnknownSlot(PlannerError, KeyError):
    """Operation auf einer nicht existierenden Block-ID."""

    def __init__(self, slot_id: str):
        self.slot_id = slot_id
        super().__init__(f"Unbekannter Block: {slot_id}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownTopic(PlannerError, KeyError):
    """Operation auf einer nicht existierenden Themen-ID."""

    def __init__(self, topic_id: str, student_id: Optional[str] = None):
        self.topic_id = topic_id
        self.student_id = student_id
        super().__init__(f"Unbekanntes Thema: {topic_id}")

    def __str__(self) -> str:
        return self.args[0]
