"""Excel-Export für Wochenplan und Fortschritt (openpyxl)."""

from pathlib import Path

from config.schema import PlannerConfig
from models.catalog import Catalog
from models.topic_progress import TopicProgress
from planner.allocator import WeekPlan, slot_date

from export.helpers import (
    COLORS, completion_percent, entry_label, get_subject_color, today_str,
)


class PlanExcelExporter:
    """Exportiert einen WeekPlan in eine Excel-Datei (Wochenplan + Fortschritt)."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_DAY_W   = 14
    COL_ZEIT_W  = 13
    COL_TEXT_W  = 46
    COL_NUM_W   = 10

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22

    def __init__(
        self,
        plan: WeekPlan,
        catalog: Catalog,
        config: PlannerConfig,
        progress: list[TopicProgress] | None = None,
    ):
        self.plan      = plan
        self.catalog   = catalog
        self.config    = config
        self.progress  = progress or []
        self.day_names = config.time_grid.day_names

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit Wochenplan- und Fortschrittsblatt."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_wochenplan(wb)
        if self.progress:
            self._sheet_fortschritt(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], widths: list[int]) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, (text, width) in enumerate(zip(headers, widths), 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.row_dimensions[1].height = self.ROW_HEADER_H

    # ─── Blätter ──────────────────────────────────────────────────────────────

    def _sheet_wochenplan(self, wb) -> None:
        """Ein Eintrag pro Zeile, Tage in Wochenreihenfolge, Fachfarbe als Hintergrund."""
        from openpyxl.styles import Font

        ws = wb.create_sheet("Wochenplan")
        self._write_header_row(
            ws,
            ["Tag", "Zeit", "Fach — Thema", "Minuten", "Rest", "%"],
            [self.COL_DAY_W, self.COL_ZEIT_W, self.COL_TEXT_W,
             self.COL_NUM_W, self.COL_NUM_W, self.COL_NUM_W],
        )
        border = self._thin_border()
        grouped = self.plan.by_date()

        row = 2
        for day in range(1, 8):
            current = slot_date(self.plan.week_start, day)
            for e in grouped.get(current, []):
                values = [
                    f"{self.day_names[day - 1]} {current.strftime('%d.%m.')}",
                    f"{e.start}–{e.end}",
                    entry_label(e, self.catalog),
                    e.allocated_minutes,
                    e.remaining_after,
                    completion_percent(e, self.catalog),
                ]
                color = get_subject_color(e.subject_id, self.catalog)
                for col, value in enumerate(values, 1):
                    c = ws.cell(row=row, column=col, value=value)
                    c.fill = self._fill(color)
                    c.border = border
                    c.font = Font(size=9)
                    if col != 3:
                        c.alignment = self._center_align(wrap=False)
                row += 1

        c = ws.cell(row=row + 1, column=3, value=f"Gesamt ({today_str()})")
        c.font = Font(bold=True, size=9)
        c = ws.cell(row=row + 1, column=4, value=self.plan.total_minutes)
        c.font = Font(bold=True, size=9)
        ws.freeze_panes = "A2"

    def _sheet_fortschritt(self, wb) -> None:
        """Ein Thema pro Zeile mit erledigten und offenen Minuten."""
        from openpyxl.styles import Font

        ws = wb.create_sheet("Fortschritt")
        self._write_header_row(
            ws,
            ["Fach", "Thema", "Erledigt", "Offen", "%"],
            [self.COL_TEXT_W // 2, self.COL_TEXT_W, self.COL_NUM_W,
             self.COL_NUM_W, self.COL_NUM_W],
        )
        border = self._thin_border()
        row = 2
        for p in self.progress:
            topic = self.catalog.get_topic(p.topic_id)
            if topic is None:
                continue
            subject = self.catalog.get_subject(topic.subject_id)
            values = [
                subject.label if subject else topic.subject_id,
                topic.name,
                p.completed_minutes,
                p.remaining_minutes,
                p.percent,
            ]
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                c.font = Font(size=9, bold=p.completed_flag)
            row += 1
        ws.freeze_panes = "A2"
