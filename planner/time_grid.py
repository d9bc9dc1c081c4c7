"""Rasterregeln für Blockgrenzen: Einrasten, Begrenzen, Prüfen.

Die Drag-and-Drop- und Resize-Logik der Oberfläche ruft nur diese
Funktionen auf; die Zeigerbehandlung selbst gehört nicht hierher.
"""

from models.timeslot import (
    DAY_END,
    DAY_START,
    STEP_MINUTES,
    is_on_grid,
    snap_to_grid,
    to_minutes,
)
from planner.errors import InvalidBoundary


def parse_boundary(value) -> int:
    """Liest eine Grenze als "HH:MM" oder Minutenwert ein."""
    if isinstance(value, bool):
        raise InvalidBoundary(f"Ungültige Uhrzeit: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return to_minutes(value)
    except ValueError as e:
        raise InvalidBoundary(str(e)) from e


def snap_start(value) -> int:
    """Startzeit einrasten und auf [07:00, 24:00 - Schritt] begrenzen."""
    minutes = snap_to_grid(parse_boundary(value))
    return max(DAY_START, min(minutes, DAY_END - STEP_MINUTES))


def snap_end(value) -> int:
    """Endzeit einrasten und auf [07:00 + Schritt, 24:00] begrenzen."""
    minutes = snap_to_grid(parse_boundary(value))
    return max(DAY_START + STEP_MINUTES, min(minutes, DAY_END))


def snap_duration(minutes: int) -> int:
    """Dauer auf ganze Schritte runden, mindestens ein Schritt."""
    return max(STEP_MINUTES, snap_to_grid(minutes))


def check_range(start: int, end: int) -> None:
    """Prüft einen Block streng (ohne Einrasten).

    Raises:
        InvalidBoundary: außerhalb des Tagesfensters, nicht im Raster
            oder end ≤ start.
    """
    if start < DAY_START or end > DAY_END:
        raise InvalidBoundary(
            f"Block {start // 60:02d}:{start % 60:02d}–{end // 60:02d}:{end % 60:02d} "
            f"liegt außerhalb von 07:00–24:00"
        )
    if not (is_on_grid(start) and is_on_grid(end)):
        raise InvalidBoundary(
            f"Blockgrenzen müssen im {STEP_MINUTES}-Minuten-Raster liegen"
        )
    if end <= start:
        raise InvalidBoundary("Blockende muss nach dem Blockbeginn liegen")


def place_block(start: int, duration: int) -> tuple[int, int]:
    """Platziert einen Block fester Dauer im Tagesfenster.

    Läuft der Block über 24:00 hinaus, wird der Beginn so weit
    vorgezogen, dass die volle Dauer passt.
    """
    duration = min(snap_duration(duration), DAY_END - DAY_START)
    start = snap_start(start)
    end = min(start + duration, DAY_END)
    if end - start < duration:
        start = max(DAY_START, DAY_END - duration)
        end = start + duration
    return start, end
