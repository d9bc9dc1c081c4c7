"""Uhrzeit-Hilfen und Zeitblöcke im wöchentlichen Lernraster.

Das Raster läuft täglich von 07:00 bis 24:00 in 30-Minuten-Schritten.
Uhrzeiten werden intern als Minuten seit Mitternacht geführt.
"""

import re
from dataclasses import dataclass

DAY_START = 7 * 60     # 07:00
DAY_END = 24 * 60      # 24:00
STEP_MINUTES = 30

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_minutes(value: str) -> int:
    """Wandelt "HH:MM" in Minuten seit Mitternacht um ("24:00" → 1440)."""
    m = _HHMM.match(value.strip()) if isinstance(value, str) else None
    if m is None:
        raise ValueError(f"Ungültige Uhrzeit: {value!r} (erwartet HH:MM)")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if minutes >= 60 or hours > 24 or (hours == 24 and minutes != 0):
        raise ValueError(f"Ungültige Uhrzeit: {value!r}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Wandelt Minuten seit Mitternacht in "HH:MM" um (1440 → "24:00")."""
    if minutes < 0 or minutes > DAY_END:
        raise ValueError(f"Minutenwert außerhalb des Tages: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def snap_to_grid(minutes: int, step: int = STEP_MINUTES) -> int:
    """Rundet auf den nächsten Rasterpunkt (halbe Schritte runden auf)."""
    return ((minutes + step // 2) // step) * step


def is_on_grid(minutes: int, step: int = STEP_MINUTES) -> bool:
    return minutes % step == 0


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Überlappungsprädikat für halboffene Intervalle [start, end).

    Aneinandergrenzende Blöcke (end_a == start_b) überlappen nicht.
    """
    return max(start_a, start_b) < min(end_a, end_b)


@dataclass(frozen=True)
class TimeBlock:
    """Ein Zeitblock an einem Wochentag.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    # Wochentag (1=Montag, ..., 7=Sonntag)
    day: int
    # Beginn in Minuten seit Mitternacht
    start: int
    # Ende in Minuten seit Mitternacht (exklusiv)
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeBlock") -> bool:
        """True wenn beide Blöcke am selben Tag zeitlich kollidieren."""
        return self.day == other.day and overlaps(self.start, self.end, other.start, other.end)

    def __str__(self) -> str:
        return f"Tag {self.day} {format_minutes(self.start)}–{format_minutes(self.end)}"
