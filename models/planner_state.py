"""PlannerState: persistierter Gesamtbestand des Lernplaners (Pydantic v2).

Enthält Katalog, Wochenblöcke und Fortschrittseinträge aller Schüler und
wird als ein JSON-Dokument gespeichert.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.catalog import Catalog
from models.topic_progress import TopicProgress
from models.weekly_slot import WeeklySlot


class PlannerState(BaseModel):
    """Vollständiger Datenbestand: Katalog, Blöcke, Fortschritt."""

    catalog: Catalog
    slots: list[WeeklySlot] = []
    progress: list[TopicProgress] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    def summary(self) -> str:
        """Kurze Übersicht über den Datenbestand."""
        students = {s.student_id for s in self.slots} | {p.student_id for p in self.progress}
        lines = [
            self.catalog.summary(),
            f"Schüler: {len(students)}",
            f"Wochenblöcke: {len(self.slots)}",
            f"Fortschrittseinträge: {len(self.progress)}",
        ]
        return "\n".join(lines)

    # ─── JSON ───

    def save_json(self, path: Path) -> None:
        """Speichert den Bestand als JSON (setzt Zeitstempel)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        if self.created_at is None:
            self.created_at = now
        self.modified_at = now
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "PlannerState":
        """Lädt einen gespeicherten Bestand aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
