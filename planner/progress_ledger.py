"""Fortschrittsbuch: kumulierte Lernminuten pro (Schüler, Thema).

Invarianten pro Eintrag:
  completed + remaining == topic.avg_minutes
  remaining ≥ 0
  completed_flag ⇔ remaining == 0
"""

import logging
from typing import Optional

from models.catalog import Catalog
from models.topic import Topic
from models.topic_progress import TopicProgress
from planner.errors import UnknownTopic

logger = logging.getLogger(__name__)


class ProgressLedger:
    """Hält die TopicProgress-Einträge aller Schüler gegen einen Katalog."""

    def __init__(self, catalog: Catalog, rows: Optional[list[TopicProgress]] = None) -> None:
        self.catalog = catalog
        self._rows: dict[tuple[str, str], TopicProgress] = {}
        for row in rows or []:
            # Einträge zu gelöschten Themen werden nicht übernommen
            topic = catalog.get_topic(row.topic_id)
            if topic is None:
                logger.warning(f"Fortschritt für unbekanntes Thema verworfen: {row.topic_id}")
                continue
            if (row.required_minutes != topic.avg_minutes
                    or row.completed_flag != (row.remaining_minutes == 0)):
                # Soll-Zeit geändert oder Flag inkonsistent: aus completed neu ableiten
                completed = min(row.completed_minutes, topic.avg_minutes)
                row = row.model_copy(update={
                    "completed_minutes": completed,
                    "remaining_minutes": topic.avg_minutes - completed,
                    "completed_flag": completed == topic.avg_minutes,
                })
            self._rows[(row.student_id, row.topic_id)] = row

    # ─── Lesen ────────────────────────────────────────────────────────────────

    @property
    def rows(self) -> list[TopicProgress]:
        return list(self._rows.values())

    def get_progress(self, student_id: str) -> list[TopicProgress]:
        """Alle Einträge eines Schülers in Katalog-Reihenfolge."""
        result = []
        for topic in self.catalog.all_topics():
            row = self._rows.get((student_id, topic.id))
            if row is not None:
                result.append(row)
        return result

    def get_entry(self, student_id: str, topic_id: str) -> Optional[TopicProgress]:
        return self._rows.get((student_id, topic_id))

    def remaining_for(self, student_id: str, topic_id: str) -> int:
        """Restminuten; fehlt der Eintrag, gilt das Thema als unbegonnen."""
        row = self._rows.get((student_id, topic_id))
        if row is not None:
            return row.remaining_minutes
        return self._topic(topic_id).avg_minutes

    def next_topic_for_subject(self, student_id: str, subject_id: str) -> Optional[tuple[str, int]]:
        """Erstes Thema des Fachs mit Restzeit als (topic_id, remaining)."""
        for topic in self.catalog.list_topics(subject_id):
            remaining = self.remaining_for(student_id, topic.id)
            if remaining > 0:
                return topic.id, remaining
        return None

    def subject_completion(self, student_id: str, subject_id: str) -> float:
        """Anteil erledigter Minuten eines Fachs (0.0–1.0)."""
        topics = self.catalog.list_topics(subject_id)
        total = sum(t.avg_minutes for t in topics)
        if total == 0:
            return 0.0
        done = sum(t.avg_minutes - self.remaining_for(student_id, t.id) for t in topics)
        return done / total

    # ─── Verändern ────────────────────────────────────────────────────────────

    def ensure_progress_for_student(self, student_id: str) -> int:
        """Legt fehlende Einträge für alle Katalog-Themen an (idempotent).

        Returns:
            Anzahl neu angelegter Einträge.
        """
        created = 0
        for topic in self.catalog.all_topics():
            key = (student_id, topic.id)
            if key not in self._rows:
                self._rows[key] = self._initial(student_id, topic)
                created += 1
        if created:
            logger.info(f"Fortschritt angelegt: {student_id} ({created} Themen)")
        return created

    def update_progress(self, student_id: str, topic_id: str, minutes: int) -> TopicProgress:
        """Bucht Lernminuten auf ein Thema.

        Überschüssige Minuten (mehr als die Restzeit) verfallen; sie werden
        nicht auf das nächste Thema übertragen.
        """
        if minutes < 0:
            raise ValueError(f"Minuten dürfen nicht negativ sein: {minutes}")
        topic = self._topic(topic_id)
        row = self._rows.get((student_id, topic_id)) or self._initial(student_id, topic)

        booked = min(minutes, row.remaining_minutes)
        if booked < minutes:
            logger.debug(
                f"{minutes - booked} überschüssige Minuten für {topic_id} verworfen"
            )
        completed = row.completed_minutes + booked
        remaining = topic.avg_minutes - completed
        updated = row.model_copy(update={
            "completed_minutes": completed,
            "remaining_minutes": remaining,
            "completed_flag": remaining == 0,
        })
        self._rows[(student_id, topic_id)] = updated
        return updated

    def reset_topic_progress(self, student_id: str, topic_id: str) -> TopicProgress:
        """Setzt ein Thema auf den unbegonnenen Zustand zurück."""
        topic = self._topic(topic_id)
        row = self._initial(student_id, topic)
        self._rows[(student_id, topic_id)] = row
        logger.info(f"Fortschritt zurückgesetzt: {student_id}/{topic_id}")
        return row

    def set_completed(self, student_id: str, topic_id: str, done: bool) -> TopicProgress:
        """Markiert ein Thema explizit als erledigt (oder setzt es zurück)."""
        if not done:
            return self.reset_topic_progress(student_id, topic_id)
        topic = self._topic(topic_id)
        row = TopicProgress(
            student_id=student_id,
            topic_id=topic_id,
            completed_minutes=topic.avg_minutes,
            remaining_minutes=0,
            completed_flag=True,
        )
        self._rows[(student_id, topic_id)] = row
        return row

    # ─── Intern ───────────────────────────────────────────────────────────────

    def _topic(self, topic_id: str) -> Topic:
        topic = self.catalog.get_topic(topic_id)
        if topic is None:
            raise UnknownTopic(topic_id)
        return topic

    @staticmethod
    def _initial(student_id: str, topic: Topic) -> TopicProgress:
        return TopicProgress(
            student_id=student_id,
            topic_id=topic.id,
            completed_minutes=0,
            remaining_minutes=topic.avg_minutes,
            completed_flag=False,
        )

    def __repr__(self) -> str:
        return f"ProgressLedger({len(self._rows)} rows)"
