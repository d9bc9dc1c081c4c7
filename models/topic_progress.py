"""Datenmodell für den Lernfortschritt eines Schülers in einem Thema (Pydantic v2)."""

from pydantic import BaseModel, Field


class TopicProgress(BaseModel):
    """Eintrag im Fortschrittsbuch.

    Invariante: completed_minutes + remaining_minutes == topic.avg_minutes,
    completed_flag genau dann wenn remaining_minutes == 0.
    """

    student_id: str
    topic_id: str
    completed_minutes: int = Field(0, ge=0)
    remaining_minutes: int = Field(ge=0)
    completed_flag: bool = False

    @property
    def required_minutes(self) -> int:
        return self.completed_minutes + self.remaining_minutes

    @property
    def percent(self) -> int:
        """Abschluss in Prozent (0–100, gerundet)."""
        total = self.required_minutes
        if total <= 0:
            return 0
        return round(self.completed_minutes / total * 100)
