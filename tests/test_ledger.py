"""Tests für das Fortschrittsbuch (ProgressLedger)."""

import pytest

from config.defaults import demo_catalog
from models.catalog import Catalog
from models.topic_progress import TopicProgress
from planner.errors import UnknownTopic
from planner.progress_ledger import ProgressLedger


@pytest.fixture
def catalog() -> Catalog:
    return demo_catalog()


@pytest.fixture
def ledger(catalog: Catalog) -> ProgressLedger:
    return ProgressLedger(catalog)


def _assert_invariants(ledger: ProgressLedger, catalog: Catalog) -> None:
    for row in ledger.rows:
        topic = catalog.get_topic(row.topic_id)
        assert row.completed_minutes + row.remaining_minutes == topic.avg_minutes
        assert row.remaining_minutes >= 0
        assert row.completed_flag == (row.remaining_minutes == 0)


class TestEnsureProgress:
    def test_creates_rows_for_all_topics(self, ledger: ProgressLedger, catalog: Catalog):
        created = ledger.ensure_progress_for_student("42")
        assert created == len(catalog.topics)
        rows = ledger.get_progress("42")
        assert [r.topic_id for r in rows] == [t.id for t in catalog.all_topics()]
        assert all(r.completed_minutes == 0 and not r.completed_flag for r in rows)
        _assert_invariants(ledger, catalog)

    def test_idempotent(self, ledger: ProgressLedger):
        """Zweiter Aufruf legt nichts an und verändert nichts."""
        ledger.ensure_progress_for_student("42")
        ledger.update_progress("42", "tyt-mat-01", 30)
        assert ledger.ensure_progress_for_student("42") == 0
        assert ledger.get_entry("42", "tyt-mat-01").completed_minutes == 30

    def test_students_are_separate(self, ledger: ProgressLedger):
        ledger.ensure_progress_for_student("42")
        assert ledger.get_progress("43") == []


class TestUpdateProgress:
    def test_books_minutes(self, ledger: ProgressLedger, catalog: Catalog):
        row = ledger.update_progress("42", "tyt-mat-01", 45)
        assert (row.completed_minutes, row.remaining_minutes) == (45, 75)
        assert not row.completed_flag
        _assert_invariants(ledger, catalog)

    def test_creates_row_lazily(self, ledger: ProgressLedger):
        assert ledger.get_entry("42", "tyt-mat-02") is None
        ledger.update_progress("42", "tyt-mat-02", 10)
        assert ledger.get_entry("42", "tyt-mat-02").remaining_minutes == 80

    def test_excess_is_discarded(self, ledger: ProgressLedger, catalog: Catalog):
        """Mehr Minuten als offen: Rest auf 0 begrenzt, Überschuss verfällt."""
        row = ledger.update_progress("42", "tyt-mat-01", 500)
        assert (row.completed_minutes, row.remaining_minutes) == (120, 0)
        assert row.completed_flag
        # kein Übertrag auf das nächste Thema
        assert ledger.remaining_for("42", "tyt-mat-02") == 90
        _assert_invariants(ledger, catalog)

    def test_zero_minutes_noop(self, ledger: ProgressLedger):
        row = ledger.update_progress("42", "tyt-mat-01", 0)
        assert row.remaining_minutes == 120

    def test_negative_minutes_raise(self, ledger: ProgressLedger):
        with pytest.raises(ValueError):
            ledger.update_progress("42", "tyt-mat-01", -5)
        assert ledger.get_entry("42", "tyt-mat-01") is None

    def test_unknown_topic(self, ledger: ProgressLedger):
        with pytest.raises(UnknownTopic):
            ledger.update_progress("42", "gibts-nicht", 10)
        with pytest.raises(KeyError):
            ledger.remaining_for("42", "gibts-nicht")


class TestResetAndComplete:
    def test_reset_only_affects_one_topic(self, ledger: ProgressLedger, catalog: Catalog):
        ledger.update_progress("42", "tyt-mat-01", 120)
        ledger.update_progress("42", "tyt-mat-02", 30)
        row = ledger.reset_topic_progress("42", "tyt-mat-01")
        assert (row.completed_minutes, row.remaining_minutes, row.completed_flag) == (0, 120, False)
        assert ledger.get_entry("42", "tyt-mat-02").completed_minutes == 30
        _assert_invariants(ledger, catalog)

    def test_set_completed(self, ledger: ProgressLedger, catalog: Catalog):
        row = ledger.set_completed("42", "tyt-tur-03", True)
        assert (row.completed_minutes, row.remaining_minutes, row.completed_flag) == (180, 0, True)
        row = ledger.set_completed("42", "tyt-tur-03", False)
        assert (row.completed_minutes, row.remaining_minutes) == (0, 180)
        _assert_invariants(ledger, catalog)


class TestQueries:
    def test_next_topic_for_subject(self, ledger: ProgressLedger):
        assert ledger.next_topic_for_subject("42", "tyt-fiz") == ("tyt-fiz-01", 60)
        ledger.update_progress("42", "tyt-fiz-01", 60)
        ledger.update_progress("42", "tyt-fiz-02", 20)
        assert ledger.next_topic_for_subject("42", "tyt-fiz") == ("tyt-fiz-02", 100)

    def test_next_topic_none_when_done(self, ledger: ProgressLedger):
        ledger.set_completed("42", "lgs-fen-01", True)
        ledger.set_completed("42", "lgs-fen-02", True)
        assert ledger.next_topic_for_subject("42", "lgs-fen") is None

    def test_subject_completion(self, ledger: ProgressLedger):
        # lgs-fen: 90 + 120 = 210
        ledger.set_completed("42", "lgs-fen-01", True)
        assert ledger.subject_completion("42", "lgs-fen") == pytest.approx(90 / 210)
        assert ledger.subject_completion("42", "unbekannt") == 0.0


class TestLoadRows:
    def test_unknown_topic_rows_dropped(self, catalog: Catalog):
        ledger = ProgressLedger(catalog, [
            TopicProgress(student_id="42", topic_id="weg", remaining_minutes=10),
        ])
        assert ledger.rows == []

    def test_changed_required_minutes_rederived(self, catalog: Catalog):
        """Geänderte Soll-Zeit: completed bleibt, remaining wird neu berechnet."""
        ledger = ProgressLedger(catalog, [
            TopicProgress(student_id="42", topic_id="tyt-mat-01",
                          completed_minutes=100, remaining_minutes=0, completed_flag=True),
        ])
        row = ledger.get_entry("42", "tyt-mat-01")
        assert (row.completed_minutes, row.remaining_minutes, row.completed_flag) == (100, 20, False)
        _assert_invariants(ledger, catalog)
