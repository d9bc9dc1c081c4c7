"""Tests für Uhrzeit-Hilfen und Datenmodelle (Pydantic v2)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import demo_catalog
from models.catalog import Catalog
from models.planner_state import PlannerState
from models.subject import Subject, SubjectCategory
from models.timeslot import (
    TimeBlock, format_minutes, is_on_grid, overlaps, snap_to_grid, to_minutes,
)
from models.topic import Topic
from models.topic_progress import TopicProgress
from models.weekly_slot import WeeklySlot


# ─── UHRZEIT-HILFEN ───────────────────────────────────────────────────────────

class TestTimeHelpers:
    def test_to_minutes(self):
        """HH:MM wird in Minuten seit Mitternacht umgerechnet."""
        assert to_minutes("07:00") == 420
        assert to_minutes("9:30") == 570
        assert to_minutes("24:00") == 1440

    @pytest.mark.parametrize("value", ["", "7", "07:60", "25:00", "24:30", "ab:cd", None])
    def test_to_minutes_invalid(self, value):
        """Ungültige Uhrzeiten → ValueError."""
        with pytest.raises(ValueError):
            to_minutes(value)

    def test_format_minutes(self):
        assert format_minutes(420) == "07:00"
        assert format_minutes(1440) == "24:00"
        with pytest.raises(ValueError):
            format_minutes(1470)

    def test_snap_to_grid_rounds_to_nearest(self):
        """Auf den nächsten 30-Minuten-Punkt runden, halbe Schritte aufrunden."""
        assert snap_to_grid(554) == 540
        assert snap_to_grid(555) == 570
        assert snap_to_grid(569) == 570
        assert is_on_grid(570)
        assert not is_on_grid(575)

    def test_overlap_predicate(self):
        """Halboffene Intervalle: Berührung ist keine Überlappung."""
        assert overlaps(540, 600, 570, 630)
        assert not overlaps(540, 600, 600, 660)
        assert overlaps(540, 660, 570, 600)

    def test_timeblock_same_day_only(self):
        a = TimeBlock(day=2, start=840, end=900)
        b = TimeBlock(day=2, start=870, end=930)
        c = TimeBlock(day=3, start=870, end=930)
        assert a.overlaps(b)
        assert not a.overlaps(c)
        assert a.duration == 60
        assert str(a) == "Tag 2 14:00–15:00"


# ─── WEEKLY SLOT ──────────────────────────────────────────────────────────────

class TestWeeklySlot:
    def test_normalizes_time(self):
        slot = WeeklySlot(id="s1", student_id="42", day=1, start="9:00",
                          end="10:30", subject_id="tyt-mat")
        assert slot.start == "09:00"
        assert slot.duration_minutes == 90

    @pytest.mark.parametrize("day", [0, 8])
    def test_day_out_of_range(self, day):
        with pytest.raises(ValidationError):
            WeeklySlot(id="s1", student_id="42", day=day, start="09:00",
                       end="10:00", subject_id="tyt-mat")

    def test_overlap_requires_same_student(self):
        a = WeeklySlot(id="a", student_id="42", day=1, start="09:00", end="10:00", subject_id="x")
        b = WeeklySlot(id="b", student_id="42", day=1, start="09:30", end="10:30", subject_id="x")
        c = b.model_copy(update={"student_id": "43"})
        assert a.overlaps(b)
        assert not a.overlaps(c)


# ─── KATALOG ──────────────────────────────────────────────────────────────────

class TestCatalog:
    def test_demo_catalog_valid(self):
        """Demo-Katalog lässt sich ohne Fehler erstellen."""
        catalog = demo_catalog()
        assert len(catalog.list_subjects()) == 6
        assert catalog.get_subject("tyt-mat").label == "Matematik (TYT)"
        assert [s.id for s in catalog.subjects_by_category("TYT")] == [
            "tyt-mat", "tyt-tur", "tyt-fiz",
        ]

    def test_list_topics_follows_order_field(self):
        """Themen werden nach `order` sortiert, nicht nach Listenposition."""
        catalog = Catalog(
            subjects=[Subject(id="m", name="Mat", category=SubjectCategory.TYT)],
            topics=[
                Topic(id="b", subject_id="m", name="B", avg_minutes=30, order=2),
                Topic(id="a", subject_id="m", name="A", avg_minutes=30, order=1),
                Topic(id="c", subject_id="m", name="C", avg_minutes=30, order=2),
            ],
        )
        # Gleichstand b/c: Katalog-Position entscheidet
        assert [t.id for t in catalog.list_topics("m")] == ["a", "b", "c"]

    def test_unknown_subject_reference_raises(self):
        with pytest.raises(ValidationError):
            Catalog(subjects=[], topics=[Topic(id="t", subject_id="x", name="T", avg_minutes=10)])

    def test_duplicate_topic_ids_raise(self):
        subj = Subject(id="m", name="Mat", category=SubjectCategory.TYT)
        with pytest.raises(ValidationError):
            Catalog(subjects=[subj], topics=[
                Topic(id="t", subject_id="m", name="T1", avg_minutes=10),
                Topic(id="t", subject_id="m", name="T2", avg_minutes=10),
            ])

    def test_topic_requires_positive_minutes(self):
        with pytest.raises(ValidationError):
            Topic(id="t", subject_id="m", name="T", avg_minutes=0)


# ─── FORTSCHRITT ──────────────────────────────────────────────────────────────

class TestTopicProgress:
    def test_percent(self):
        p = TopicProgress(student_id="42", topic_id="t", completed_minutes=30, remaining_minutes=90)
        assert p.required_minutes == 120
        assert p.percent == 25

    def test_negative_remaining_rejected(self):
        with pytest.raises(ValidationError):
            TopicProgress(student_id="42", topic_id="t", remaining_minutes=-1)


# ─── DATENBESTAND (JSON) ──────────────────────────────────────────────────────

class TestPlannerState:
    def test_json_roundtrip(self, tmp_path: Path):
        """Bestand speichern und laden: Katalog, Blöcke und Fortschritt bleiben erhalten."""
        state = PlannerState(
            catalog=demo_catalog(),
            slots=[WeeklySlot(id="s1", student_id="42", day=1, start="09:00",
                              end="10:30", subject_id="tyt-mat")],
            progress=[TopicProgress(student_id="42", topic_id="tyt-mat-01",
                                    completed_minutes=60, remaining_minutes=60)],
        )
        path = tmp_path / "state.json"
        state.save_json(path)
        assert state.created_at is not None
        assert state.modified_at is not None

        loaded = PlannerState.load_json(path)
        assert loaded.slots == state.slots
        assert loaded.progress == state.progress
        assert len(loaded.catalog.topics) == len(state.catalog.topics)
        assert "Wochenblöcke: 1" in loaded.summary()

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PlannerState.load_json(tmp_path / "fehlt.json")
