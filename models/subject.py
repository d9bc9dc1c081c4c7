"""Datenmodell für ein Lernfach aus dem Fächerkatalog (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SubjectCategory(str, Enum):
    """Prüfungsbereich, dem ein Fach zugeordnet ist."""

    LGS = "LGS"
    YKS = "YKS"
    TYT = "TYT"
    AYT = "AYT"
    YDT = "YDT"


class Subject(BaseModel):
    """Repräsentiert ein Fach (z.B. "Matematik" im Bereich TYT)."""

    id: str
    name: str
    category: SubjectCategory
    code: Optional[str] = None    # Kurzbezeichnung, z.B. "MAT"
    color: Optional[str] = None   # RRGGBB für Export, sonst Kategorie-Farbe

    @property
    def label(self) -> str:
        """Anzeigename mit Kategorie, z.B. "Matematik (TYT)"."""
        return f"{self.name} ({self.category.value})"
