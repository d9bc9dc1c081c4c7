"""Fächer- und Themenkatalog (globale, schreibgeschützte Stammdaten)."""

from typing import Optional

from pydantic import BaseModel, model_validator

from models.subject import Subject
from models.topic import Topic


class Catalog(BaseModel):
    """Geordnete Fächerliste und pro Fach geordnete Themenliste.

    Der Katalog wird vom Planer nur gelesen und kann zwischen Schülern
    geteilt werden.
    """

    subjects: list[Subject] = []
    topics: list[Topic] = []

    @model_validator(mode="after")
    def _check_references(self):
        subject_ids = [s.id for s in self.subjects]
        if len(subject_ids) != len(set(subject_ids)):
            raise ValueError("Doppelte Fach-IDs im Katalog")
        topic_ids = [t.id for t in self.topics]
        if len(topic_ids) != len(set(topic_ids)):
            raise ValueError("Doppelte Themen-IDs im Katalog")
        known = set(subject_ids)
        for t in self.topics:
            if t.subject_id not in known:
                raise ValueError(
                    f"Thema '{t.id}' verweist auf unbekanntes Fach '{t.subject_id}'"
                )
        return self

    # ─── Lesezugriff ───

    def list_subjects(self) -> list[Subject]:
        """Alle Fächer in Katalog-Reihenfolge."""
        return list(self.subjects)

    def list_topics(self, subject_id: str) -> list[Topic]:
        """Themen eines Fachs in Lehrplan-Reihenfolge.

        Sortiert stabil nach `order`; bei Gleichstand gilt die Katalog-Position.
        """
        return sorted(
            (t for t in self.topics if t.subject_id == subject_id),
            key=lambda t: t.order,
        )

    def all_topics(self) -> list[Topic]:
        """Alle Themen, gruppiert nach Fach-Reihenfolge, je Fach im Lehrplan."""
        ordered: list[Topic] = []
        for subject in self.subjects:
            ordered.extend(self.list_topics(subject.id))
        return ordered

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self.subjects if s.id == subject_id), None)

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        return next((t for t in self.topics if t.id == topic_id), None)

    def subjects_by_category(self, category: str) -> list[Subject]:
        """Filtert Fächer nach Prüfungsbereich (z.B. "TYT")."""
        return [s for s in self.subjects if s.category.value == category]

    def summary(self) -> str:
        """Kurze Übersicht über den Katalog."""
        total = sum(t.avg_minutes for t in self.topics)
        return (
            f"Fächer: {len(self.subjects)} | Themen: {len(self.topics)} | "
            f"Soll-Lernzeit gesamt: {total} min ({total / 60:.1f} h)"
        )
