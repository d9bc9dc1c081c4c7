"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Export."""

from datetime import date

from config.defaults import CATEGORY_COLORS
from models.catalog import Catalog
from planner.allocator import PlanEntry

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    **CATEGORY_COLORS,
    "sonstig":  "E0E0E0",
    "free":     "F5F5F5",
    "header":   "4472C4",
}


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Fach-Farbe und Beschriftung ──────────────────────────────────────────────

def get_subject_color(subject_id: str, catalog: Catalog) -> str:
    """Hex-Farbe eines Fachs: eigene Farbe, sonst Farbe der Kategorie."""
    subject = catalog.get_subject(subject_id)
    if subject is None:
        return COLORS["sonstig"]
    if subject.color:
        return subject.color.lstrip("#")
    return COLORS.get(subject.category.value, COLORS["sonstig"])


def entry_label(entry: PlanEntry, catalog: Catalog) -> str:
    """"Matematik (TYT) — Problemler" oder IDs, falls nicht im Katalog."""
    subject = catalog.get_subject(entry.subject_id)
    topic = catalog.get_topic(entry.topic_id)
    subj = subject.label if subject else entry.subject_id
    top = topic.name if topic else entry.topic_id
    return f"{subj} — {top}"


def completion_percent(entry: PlanEntry, catalog: Catalog) -> int:
    """Abschluss des Themas nach diesem Eintrag in Prozent (0–100)."""
    topic = catalog.get_topic(entry.topic_id)
    if topic is None or topic.avg_minutes <= 0:
        return 0
    pct = round((topic.avg_minutes - entry.remaining_after) / topic.avg_minutes * 100)
    return max(0, min(100, pct))


def progress_bar(percent: int, width: int = 10) -> str:
    """Textbalken, z.B. 40 % → "████░░░░░░"."""
    filled = round(max(0, min(100, percent)) / 100 * width)
    return "█" * filled + "░" * (width - filled)
