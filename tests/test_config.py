"""Tests für das Konfigurationssystem (Schema, Defaults, YAML)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    DEMO_SUBJECTS,
    DEMO_TOPICS,
    default_planner_config,
    default_time_grid,
    default_workload,
    demo_catalog,
)
from config.manager import ConfigManager
from config.schema import PlannerConfig, TimeGridConfig, WorkloadConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_time_grid_valid(self):
        """Default-Zeitraster: türkische Tagesnamen, 60-Minuten-Blöcke."""
        tg = default_time_grid()
        assert len(tg.day_names) == 7
        assert tg.day_names[0] == "Pazartesi"
        assert tg.default_slot_minutes == 60

    def test_default_workload(self):
        wl = default_workload()
        assert (wl.min_weekly_minutes, wl.max_weekly_minutes) == (300, 600)

    def test_default_planner_config_valid(self):
        config = default_planner_config()
        assert config.school_name == "Rehberlik Servisi"
        assert config.storage.state_path == "output/planner_state.json"

    def test_demo_catalog_matches_tables(self):
        """Demo-Katalog enthält alle Fächer und Themen in Lehrplan-Reihenfolge."""
        catalog = demo_catalog()
        assert [s.id for s in catalog.subjects] == list(DEMO_SUBJECTS)
        assert len(catalog.topics) == sum(len(v) for v in DEMO_TOPICS.values())
        names = [t.name for t in catalog.list_topics("tyt-mat")]
        assert names == [name for name, _ in DEMO_TOPICS["tyt-mat"]]


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_day_names_need_seven(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(day_names=["Mo", "Di"])

    @pytest.mark.parametrize("minutes", [20, 45, 300])
    def test_default_slot_minutes_invalid(self, minutes):
        with pytest.raises(ValidationError):
            TimeGridConfig(default_slot_minutes=minutes)

    def test_default_slot_minutes_valid(self):
        assert TimeGridConfig(default_slot_minutes=90).default_slot_minutes == 90

    def test_workload_bounds(self):
        with pytest.raises(ValidationError):
            WorkloadConfig(min_weekly_minutes=300, max_weekly_minutes=300)

    def test_partial_dict_uses_defaults(self):
        config = PlannerConfig.model_validate({"workload": {"max_weekly_minutes": 900}})
        assert config.workload.max_weekly_minutes == 900
        assert config.workload.min_weekly_minutes == 300
        assert len(config.time_grid.day_names) == 7


# ─── YAML SPEICHERN / LADEN ───────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren: vollständiger Roundtrip."""
        config = default_planner_config().model_copy(update={"school_name": "Test-Okulu"})
        mgr = ConfigManager(tmp_path / "planner_config.yaml")

        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load()
        assert loaded == config

    def test_yaml_has_section_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        mgr.save(default_planner_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Zeitraster ───" in text
        assert "─── Wochenlast ───" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_planner_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Laden einer nicht-existenten Datei → FileNotFoundError."""
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "planner_config.yaml"
        path.write_text(
            "workload:\n  min_weekly_minutes: 900\n  max_weekly_minutes: 100\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "fehlt.yaml")
        assert mgr.load_or_default() == default_planner_config()
