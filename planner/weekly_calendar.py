"""Wöchentlicher Blockkalender pro Schüler.

Invariante: Für jeden (Schüler, Wochentag) überlappen sich keine zwei Blöcke.
Jede verändernde Operation baut zuerst den Kandidaten-Block, prüft ihn gegen
alle anderen Blöcke desselben Tages und übernimmt ihn erst danach
(atomar: bei Fehlern bleibt der Kalender unverändert).
"""

import logging
import uuid
from typing import Literal, Optional

from models.timeslot import DAY_END, DAY_START, STEP_MINUTES, format_minutes, snap_to_grid
from models.weekly_slot import WeeklySlot
from planner.errors import InvalidBoundary, ScheduleConflict, UnknownSlot
from planner.time_grid import check_range, parse_boundary, place_block

logger = logging.getLogger(__name__)

Edge = Literal["top", "bottom"]


class WeeklyCalendar:
    """Verwaltet die wiederkehrenden Lernblöcke aller Schüler eines Bestands.

    Verwendung:
        cal = WeeklyCalendar()
        cal.add_slot(WeeklySlot(id="s1", student_id="42", day=1,
                                start="09:00", end="10:30", subject_id="mat"))
        cal.move_slot("s1", 2, "14:00")
    """

    def __init__(self, slots: Optional[list[WeeklySlot]] = None) -> None:
        self._slots: list[WeeklySlot] = []
        for slot in slots or []:
            self.add_slot(slot)

    # ─── Lesen ────────────────────────────────────────────────────────────────

    @property
    def slots(self) -> list[WeeklySlot]:
        """Alle Blöcke (Kopie der Liste)."""
        return list(self._slots)

    def get_slot(self, slot_id: str) -> WeeklySlot:
        for slot in self._slots:
            if slot.id == slot_id:
                return slot
        raise UnknownSlot(slot_id)

    def list_slots(self, student_id: str) -> list[WeeklySlot]:
        """Blöcke eines Schülers, chronologisch nach Wochentag und Beginn."""
        return sorted(
            (s for s in self._slots if s.student_id == student_id),
            key=lambda s: (s.day, s.start_minutes),
        )

    def slots_on_day(self, student_id: str, day: int) -> list[WeeklySlot]:
        return [s for s in self.list_slots(student_id) if s.day == day]

    def students(self) -> list[str]:
        """Alle Schüler-IDs mit mindestens einem Block."""
        return sorted({s.student_id for s in self._slots})

    def weekly_total_minutes(self, student_id: str) -> int:
        """Summe der Blockdauern pro Woche (reine Aggregation)."""
        return sum(s.duration_minutes for s in self._slots if s.student_id == student_id)

    def find_conflicts(self, candidate: WeeklySlot) -> list[WeeklySlot]:
        """Alle anderen Blöcke desselben Schülers/Tages, die den Kandidaten überlappen."""
        return [
            s for s in self._slots
            if s.id != candidate.id and candidate.overlaps(s)
        ]

    def free_windows(self, student_id: str, day: int) -> list[tuple[str, str]]:
        """Freie Zeitfenster eines Tages als ("HH:MM", "HH:MM")-Paare."""
        windows: list[tuple[str, str]] = []
        cursor = DAY_START
        for slot in self.slots_on_day(student_id, day):
            if slot.start_minutes > cursor:
                windows.append((format_minutes(cursor), slot.start))
            cursor = max(cursor, slot.end_minutes)
        if cursor < DAY_END:
            windows.append((format_minutes(cursor), format_minutes(DAY_END)))
        return windows

    # ─── Verändern ────────────────────────────────────────────────────────────

    def add_slot(self, slot: WeeklySlot) -> WeeklySlot:
        """Fügt einen Block ein.

        Raises:
            InvalidBoundary: Grenzen außerhalb 07:00–24:00, nicht im Raster
                oder end ≤ start.
            ScheduleConflict: Überlappung mit einem bestehenden Block.
        """
        if any(s.id == slot.id for s in self._slots):
            raise ValueError(f"Block-ID existiert bereits: {slot.id}")
        self._check_candidate(slot)
        self._slots.append(slot)
        logger.info(
            f"Block hinzugefügt: {slot.id} ({slot.student_id}, Tag {slot.day}, "
            f"{slot.start}–{slot.end}, {slot.subject_id})"
        )
        return slot

    def create_slot(
        self,
        student_id: str,
        day: int,
        start,
        subject_id: str,
        duration_minutes: int = 60,
    ) -> WeeklySlot:
        """Legt einen neuen Block an einer Zeigerposition an (wird eingerastet)."""
        _check_day(day)
        start_min, end_min = place_block(parse_boundary(start), duration_minutes)
        slot = WeeklySlot(
            id=uuid.uuid4().hex[:12],
            student_id=student_id,
            day=day,
            start=format_minutes(start_min),
            end=format_minutes(end_min),
            subject_id=subject_id,
        )
        return self.add_slot(slot)

    def move_slot(self, slot_id: str, new_day: int, new_start) -> WeeklySlot:
        """Verschiebt einen Block unter Beibehaltung seiner Dauer."""
        existing = self.get_slot(slot_id)
        _check_day(new_day)
        start, end = place_block(parse_boundary(new_start), existing.duration_minutes)
        candidate = existing.model_copy(update={
            "day": new_day,
            "start": format_minutes(start),
            "end": format_minutes(end),
        })
        self._check_candidate(candidate)
        self._replace(candidate)
        logger.info(
            f"Block verschoben: {slot_id} → Tag {new_day}, {candidate.start}–{candidate.end}"
        )
        return candidate

    def resize_slot(self, slot_id: str, edge: Edge, new_boundary) -> WeeklySlot:
        """Zieht die obere ("top") oder untere ("bottom") Kante eines Blocks.

        Die neue Grenze wird eingerastet und begrenzt: der Block behält
        mindestens einen Rasterschritt und kann benachbarte Blöcke desselben
        Tages nicht überdecken.
        """
        existing = self.get_slot(slot_id)
        orig_start, orig_end = existing.start_minutes, existing.end_minutes
        min_start, max_end = self._neighbour_bounds(existing)
        value = snap_to_grid(parse_boundary(new_boundary))

        if edge == "top":
            start = max(min_start, min(value, orig_end - STEP_MINUTES))
            end = orig_end
        elif edge == "bottom":
            start = orig_start
            end = min(max_end, max(value, orig_start + STEP_MINUTES))
        else:
            raise ValueError(f"Unbekannte Kante: {edge!r} (erwartet 'top' oder 'bottom')")

        candidate = existing.model_copy(update={
            "start": format_minutes(start),
            "end": format_minutes(end),
        })
        self._check_candidate(candidate)
        self._replace(candidate)
        logger.info(
            f"Blockgröße geändert: {slot_id} → {candidate.start}–{candidate.end}"
        )
        return candidate

    def remove_slot(self, slot_id: str) -> None:
        slot = self.get_slot(slot_id)
        self._slots = [s for s in self._slots if s.id != slot_id]
        logger.info(f"Block entfernt: {slot_id} ({slot.student_id}, Tag {slot.day})")

    # ─── Intern ───────────────────────────────────────────────────────────────

    def _check_candidate(self, candidate: WeeklySlot) -> None:
        check_range(candidate.start_minutes, candidate.end_minutes)
        conflicts = self.find_conflicts(candidate)
        if conflicts:
            logger.debug(
                f"Konflikt für {candidate.id}: {[c.id for c in conflicts]}"
            )
            raise ScheduleConflict(candidate, conflicts)

    def _replace(self, candidate: WeeklySlot) -> None:
        self._slots = [candidate if s.id == candidate.id else s for s in self._slots]

    def _neighbour_bounds(self, slot: WeeklySlot) -> tuple[int, int]:
        """Nächstes Ende davor und nächster Beginn danach am selben Tag."""
        min_start, max_end = DAY_START, DAY_END
        for other in self.slots_on_day(slot.student_id, slot.day):
            if other.id == slot.id:
                continue
            if slot.start_minutes >= other.end_minutes > min_start:
                min_start = other.end_minutes
            if slot.end_minutes <= other.start_minutes < max_end:
                max_end = other.start_minutes
        return min_start, max_end

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"WeeklyCalendar({len(self._slots)} slots)"


def _check_day(day: int) -> None:
    if not isinstance(day, int) or isinstance(day, bool) or not 1 <= day <= 7:
        raise InvalidBoundary(f"Ungültiger Wochentag: {day!r} (erwartet 1–7)")
