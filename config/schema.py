from pydantic import BaseModel, Field, field_validator, model_validator


# ─── ZEITRASTER ───

class TimeGridConfig(BaseModel):
    """Darstellung und Vorgaben für neue Blöcke.

    Das Tagesfenster (07:00–24:00) und der 30-Minuten-Schritt sind fest;
    konfigurierbar sind nur Anzeige und Standard-Blockdauer.
    """
    # Namen der Wochentage (Mo..So), genau 7 Einträge
    day_names: list[str] = Field(
        default=["Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma", "Cumartesi", "Pazar"],
        description="Namen der Wochentage (Mo..So)")
    # Dauer eines neu angelegten Blocks in Minuten
    default_slot_minutes: int = Field(60, ge=30, le=240,
        description="Standard-Dauer neuer Blöcke (Minuten)")

    @field_validator("day_names")
    @classmethod
    def validate_day_names(cls, v: list[str]) -> list[str]:
        if len(v) != 7:
            raise ValueError(f"Genau 7 Wochentage erwartet, erhalten: {len(v)}")
        return v

    @field_validator("default_slot_minutes")
    @classmethod
    def validate_default_duration(cls, v: int) -> int:
        if v % 30 != 0:
            raise ValueError("Standard-Dauer muss ein Vielfaches von 30 Minuten sein")
        return v


# ─── WOCHENLAST ───

class WorkloadConfig(BaseModel):
    """Schwellen für Warnungen zur wöchentlichen Lernzeit."""
    # Unter diesem Wert gilt der Plan als zu dünn (5 h)
    min_weekly_minutes: int = Field(300, ge=0,
        description="Untergrenze Wochen-Lernzeit (Minuten)")
    # Über diesem Wert gilt der Plan als zu voll (10 h)
    max_weekly_minutes: int = Field(600, ge=0,
        description="Obergrenze Wochen-Lernzeit (Minuten)")

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.min_weekly_minutes >= self.max_weekly_minutes:
            raise ValueError(
                f"min_weekly_minutes ({self.min_weekly_minutes}) muss kleiner als "
                f"max_weekly_minutes ({self.max_weekly_minutes}) sein")
        return self


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablageorte für Datenbestand und Exporte."""
    # JSON-Datei mit Katalog, Blöcken und Fortschritt
    state_path: str = Field("output/planner_state.json",
        description="Pfad des Datenbestands (JSON)")
    # Verzeichnis für Excel-Exporte
    export_dir: str = Field("output",
        description="Verzeichnis für Exporte")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Lernplaners."""
    # Name der Schule / Beratungsstelle
    school_name: str = Field("Rehberlik Servisi",
        description="Name der Schule")
    # Anzeige und Standard-Blockdauer
    time_grid: TimeGridConfig = Field(default_factory=TimeGridConfig)
    # Warnschwellen für die Wochenlast
    workload: WorkloadConfig = Field(default_factory=WorkloadConfig)
    # Ablageorte
    storage: StorageConfig = Field(default_factory=StorageConfig)
