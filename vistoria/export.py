# vistoria/export.py
from io import BytesIO
from typing import Iterable, List

import pandas as pd

from vistoria.models import (
    STATUS_DEFECTIVE,
    STATUS_LABELS,
    Inspection,
)
from vistoria.registry import CompanyInspectionRegistry
from vistoria.settings import EXPORT_SHEET_NAME, TIMESTAMP_FORMAT

EXPORT_COLUMNS = [
    "Data/Hora da Vistoria",
    "Hora Início da Empresa",
    "Empresa",
    "Equipamento",
    "Modelo",
    "Status",
    "Analista",
    "Áreas com Problema",
]

# export column -> dashboard column
DISPLAY_COLUMNS = {
    "Data/Hora da Vistoria": "Data/Hora",
    "Hora Início da Empresa": "Início Vistoria",
    "Empresa": "Empresa",
    "Equipamento": "Equipamento",
    "Modelo": "Modelo",
    "Status": "Status",
    "Áreas com Problema": "Problemas",
    "Analista": "Analista",
}

SUMMARY_COLUMNS = ["Empresa", "Início Vistoria", "Vistorias", "Com Defeito"]


def status_label(inspection: Inspection) -> str:
    if inspection.status == STATUS_DEFECTIVE:
        return f"{STATUS_LABELS[STATUS_DEFECTIVE]} {inspection.defect_type}"
    return STATUS_LABELS.get(inspection.status, inspection.status)


def to_table(inspections: Iterable[Inspection]) -> pd.DataFrame:
    """Flatten inspections into spreadsheet rows, keeping the input order."""
    rows = [
        {
            "Data/Hora da Vistoria": i.timestamp.strftime(TIMESTAMP_FORMAT),
            "Hora Início da Empresa": i.company_inspection_time.strftime(TIMESTAMP_FORMAT),
            "Empresa": i.company,
            "Equipamento": i.equipment,
            "Modelo": i.model,
            "Status": status_label(i),
            "Analista": i.analyst,
            "Áreas com Problema": ", ".join(i.problem_areas),
        }
        for i in inspections
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def to_display_table(inspections: Iterable[Inspection]) -> pd.DataFrame:
    df = to_table(inspections)
    return df[list(DISPLAY_COLUMNS)].rename(columns=DISPLAY_COLUMNS)


def to_excel_bytes(table: pd.DataFrame) -> BytesIO:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        table.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
    buf.seek(0)
    return buf


def to_csv_bytes(table: pd.DataFrame) -> bytes:
    return table.to_csv(index=False).encode("utf-8")


def company_summary(registry: CompanyInspectionRegistry, inspections: Iterable[Inspection]) -> pd.DataFrame:
    """One row per company in first-seen order: start time, inspections, defective ones."""
    items: List[Inspection] = list(inspections)
    rows = []
    for record in registry:
        mine = [i for i in items if i.company == record.company]
        rows.append({
            "Empresa": record.company,
            "Início Vistoria": record.start_time.strftime(TIMESTAMP_FORMAT),
            "Vistorias": len(mine),
            "Com Defeito": sum(1 for i in mine if i.status == STATUS_DEFECTIVE),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
