"""Datenmodell für einen wiederkehrenden Wochen-Lernblock (Pydantic v2)."""

from pydantic import BaseModel, Field, field_validator

from models.timeslot import TimeBlock, format_minutes, to_minutes


class WeeklySlot(BaseModel):
    """Ein Lernblock, der sich jede Woche am selben Wochentag wiederholt.

    Der Block ist an genau ein Fach gebunden und hat kein Kalenderdatum.
    Raster- und Überlappungsregeln prüft der WeeklyCalendar beim Einfügen.
    """

    id: str
    student_id: str
    day: int = Field(ge=1, le=7)   # 1=Mo .. 7=So
    start: str                     # "HH:MM"
    end: str                       # "HH:MM" (exklusiv)
    subject_id: str

    @field_validator("start", "end")
    @classmethod
    def _normalize_time(cls, v: str) -> str:
        # "9:00" → "09:00"
        return format_minutes(to_minutes(v))

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    @property
    def duration_minutes(self) -> int:
        """Dauer in Minuten (0 falls end ≤ start)."""
        return max(0, self.end_minutes - self.start_minutes)

    @property
    def block(self) -> TimeBlock:
        return TimeBlock(day=self.day, start=self.start_minutes, end=self.end_minutes)

    def overlaps(self, other: "WeeklySlot") -> bool:
        """Kollision mit einem anderen Block desselben Schülers."""
        return self.student_id == other.student_id and self.block.overlaps(other.block)
