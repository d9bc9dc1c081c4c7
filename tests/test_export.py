"""Tests für Terminal-Renderer und Excel-Export."""

from datetime import date
from pathlib import Path

import pytest

from config.defaults import default_planner_config, demo_catalog
from export.excel_export import PlanExcelExporter
from export.helpers import (
    completion_percent, entry_label, get_subject_color, hex_to_rgb, progress_bar,
)
from export.tui_renderer import render_plan_rows, render_progress_rows, render_slot_rows
from models.subject import Subject, SubjectCategory
from models.weekly_slot import WeeklySlot
from planner.allocator import PlanEntry, WeekPlan
from planner.service import StudyPlanner

MONDAY = date(2024, 9, 2)


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def planner() -> StudyPlanner:
    """Demo-Katalog mit zwei Blöcken für Schüler 42."""
    planner = StudyPlanner(demo_catalog())
    planner.add_slot(WeeklySlot(id="s1", student_id="42", day=1, start="16:00",
                                end="18:30", subject_id="tyt-mat"))
    planner.add_slot(WeeklySlot(id="s2", student_id="42", day=3, start="19:00",
                                end="20:00", subject_id="ydt-ing"))
    return planner


@pytest.fixture
def plan(planner: StudyPlanner) -> WeekPlan:
    return planner.preview("42", MONDAY)


# ─── HELPERS ──────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FF8000") == (255, 128, 0)

    def test_progress_bar(self):
        assert progress_bar(0) == "░" * 10
        assert progress_bar(40) == "████░░░░░░"
        assert progress_bar(150) == "█" * 10

    def test_subject_color_from_category(self):
        catalog = demo_catalog()
        assert get_subject_color("tyt-mat", catalog) == "B3D4FF"
        assert get_subject_color("unbekannt", catalog) == "E0E0E0"

    def test_subject_color_override(self):
        catalog = demo_catalog().model_copy(update={"subjects": [
            Subject(id="x", name="X", category=SubjectCategory.AYT, color="#123456"),
        ], "topics": []})
        assert get_subject_color("x", catalog) == "123456"

    def test_entry_label_and_percent(self, plan: WeekPlan):
        catalog = demo_catalog()
        first, second = plan.entries[0], plan.entries[1]
        assert entry_label(first, catalog) == "Matematik (TYT) — Temel Kavramlar"
        assert completion_percent(first, catalog) == 100
        # Sayı Basamakları: 30 von 90 min
        assert completion_percent(second, catalog) == 33

    def test_entry_label_unknown_ids(self):
        entry = PlanEntry(date=MONDAY, start="09:00", end="10:00", subject_id="x",
                          topic_id="y", allocated_minutes=60, remaining_after=0)
        assert entry_label(entry, demo_catalog()) == "x — y"


# ─── TERMINAL-RENDERER ────────────────────────────────────────────────────────

class TestTuiRenderer:
    def test_plan_rows_cover_all_days(self, plan: WeekPlan):
        rows = render_plan_rows(plan, demo_catalog(), default_planner_config())
        # Mo: 2 Einträge + Summe, Mi: 1 Eintrag + Summe, 5 leere Tage
        assert len(rows) == 3 + 2 + 5
        assert rows[0][0].startswith("Pazartesi")
        assert rows[0][0].endswith("02.09.")

    def test_plan_rows_values(self, plan: WeekPlan):
        rows = render_plan_rows(plan, demo_catalog(), default_planner_config())
        assert rows[0][1:5] == ["16:00–18:00", "Matematik (TYT) — Temel Kavramlar",
                                "120 dk", "0 dk"]
        assert rows[1][0] == ""
        assert "150 dk" in rows[2][3]
        assert rows[3][1] == "—"   # Dienstag leer

    def test_progress_rows(self, planner: StudyPlanner):
        planner.ensure_progress_for_student("42")
        planner.set_completed("42", "tyt-mat-01")
        rows = render_progress_rows(planner.get_progress("42"), planner.catalog)
        assert len(rows) == len(planner.catalog.topics)
        assert "✓" in rows[0][3]
        assert rows[0][2] == "120/120 dk"
        assert rows[1][2] == "0/90 dk"

    def test_slot_rows(self, planner: StudyPlanner):
        rows = render_slot_rows(planner.list_slots("42"), planner.catalog,
                                default_planner_config())
        assert rows == [
            ["s1", "Pazartesi", "16:00–18:30", "150 dk", "Matematik (TYT)"],
            ["s2", "Çarşamba", "19:00–20:00", "60 dk", "İngilizce (YDT)"],
        ]


# ─── EXCEL-EXPORT ─────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_export_creates_workbook(self, tmp_path: Path, planner: StudyPlanner, plan: WeekPlan):
        from openpyxl import load_workbook

        planner.ensure_progress_for_student("42")
        out = tmp_path / "sub" / "plan.xlsx"
        PlanExcelExporter(plan, planner.catalog, default_planner_config(),
                          planner.get_progress("42")).export(out)
        assert out.exists()

        wb = load_workbook(out)
        assert wb.sheetnames == ["Wochenplan", "Fortschritt"]
        ws = wb["Wochenplan"]
        assert ws.cell(row=1, column=1).value == "Tag"
        assert ws.cell(row=2, column=2).value == "16:00–18:00"
        assert ws.cell(row=2, column=4).value == 120
        assert ws.cell(row=2, column=1).fill.start_color.rgb.endswith("B3D4FF")
        # Summenzeile nach einer Leerzeile
        assert ws.cell(row=len(plan.entries) + 3, column=4).value == plan.total_minutes

        progress = wb["Fortschritt"]
        assert progress.max_row == 1 + len(planner.catalog.topics)

    def test_export_without_progress(self, tmp_path: Path, planner: StudyPlanner, plan: WeekPlan):
        from openpyxl import load_workbook

        out = tmp_path / "plan.xlsx"
        PlanExcelExporter(plan, planner.catalog, default_planner_config()).export(out)
        assert load_workbook(out).sheetnames == ["Wochenplan"]
