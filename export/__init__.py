"""Export-Modul: Excel (openpyxl) und Terminal-Renderer für den Lernplan."""

from export.excel_export import PlanExcelExporter

__all__ = ["PlanExcelExporter"]
