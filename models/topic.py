"""Datenmodell für ein Lernthema innerhalb eines Fachs (Pydantic v2)."""

from pydantic import BaseModel, Field


class Topic(BaseModel):
    """Ein Thema mit fester Soll-Lernzeit.

    Die Reihenfolge innerhalb eines Fachs wird über `order` explizit
    vorgegeben (Lehrplan-Reihenfolge). Bei gleichem `order` entscheidet die
    Position im Katalog.
    """

    id: str
    subject_id: str
    name: str
    avg_minutes: int = Field(gt=0)   # Benötigte Gesamt-Lernzeit in Minuten
    order: int = 0                   # Position im Lehrplan (aufsteigend)
