from config.schema import (
    PlannerConfig,
    StorageConfig,
    TimeGridConfig,
    WorkloadConfig,
)
from models.catalog import Catalog
from models.subject import Subject, SubjectCategory
from models.topic import Topic


# Fach-ID → (Name, Kategorie, Kürzel)
DEMO_SUBJECTS: dict[str, tuple[str, str, str]] = {
    "tyt-mat": ("Matematik", "TYT", "MAT"),
    "tyt-tur": ("Türkçe", "TYT", "TUR"),
    "tyt-fiz": ("Fizik", "TYT", "FIZ"),
    "ayt-mat": ("Matematik", "AYT", "MAT2"),
    "ydt-ing": ("İngilizce", "YDT", "ING"),
    "lgs-fen": ("Fen Bilimleri", "LGS", "FEN"),
}

# Fach-ID → Themen in Lehrplan-Reihenfolge: (Name, Soll-Minuten)
DEMO_TOPICS: dict[str, list[tuple[str, int]]] = {
    "tyt-mat": [
        ("Temel Kavramlar", 120),
        ("Sayı Basamakları", 90),
        ("Bölme ve Bölünebilme", 90),
        ("Rasyonel Sayılar", 120),
        ("Problemler", 240),
    ],
    "tyt-tur": [
        ("Sözcükte Anlam", 90),
        ("Cümlede Anlam", 90),
        ("Paragraf", 180),
    ],
    "tyt-fiz": [
        ("Fizik Bilimine Giriş", 60),
        ("Madde ve Özellikleri", 120),
        ("Hareket ve Kuvvet", 180),
    ],
    "ayt-mat": [
        ("Fonksiyonlar", 180),
        ("Polinomlar", 150),
        ("Limit ve Süreklilik", 210),
    ],
    "ydt-ing": [
        ("Grammar: Tenses", 120),
        ("Vocabulary", 90),
        ("Reading", 150),
    ],
    "lgs-fen": [
        ("Mevsimler ve İklim", 90),
        ("DNA ve Genetik Kod", 120),
    ],
}

# Farbpalette pro Kategorie (RRGGBB, ohne #)
CATEGORY_COLORS: dict[str, str] = {
    "LGS": "E0E0E0",
    "YKS": "D4B3FF",
    "TYT": "B3D4FF",
    "AYT": "B3FFB3",
    "YDT": "FFF2B3",
}


def default_time_grid() -> TimeGridConfig:
    """Standard: türkische Tagesnamen, neue Blöcke 60 Minuten."""
    return TimeGridConfig()


def default_workload() -> WorkloadConfig:
    """Standard: Warnung unter 5 h und über 10 h pro Woche."""
    return WorkloadConfig(min_weekly_minutes=300, max_weekly_minutes=600)


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        school_name="Rehberlik Servisi",
        time_grid=default_time_grid(),
        workload=default_workload(),
        storage=StorageConfig(),
    )


def demo_catalog() -> Catalog:
    """Kleiner Beispielkatalog (TYT/AYT/YDT/LGS) für Ersteinrichtung und Tests."""
    subjects = [
        Subject(id=sid, name=name, category=SubjectCategory(cat), code=code)
        for sid, (name, cat, code) in DEMO_SUBJECTS.items()
    ]
    topics = [
        Topic(
            id=f"{sid}-{i:02d}",
            subject_id=sid,
            name=name,
            avg_minutes=minutes,
            order=i,
        )
        for sid, items in DEMO_TOPICS.items()
        for i, (name, minutes) in enumerate(items, start=1)
    ]
    return Catalog(subjects=subjects, topics=topics)
