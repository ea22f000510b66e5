# vistoria/models.py
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from vistoria.settings import COMPANY_SEGMENTS, COMPANY_SEGMENT_LENGTH, COMPANY_SEPARATOR

# ======================================================
# Status / severity vocabularies
# ======================================================
STATUS_IN_USE = "em_uso"
STATUS_NOT_IN_USE = "nao_em_uso"
STATUS_DEFECTIVE = "defeito"

STATUS_LABELS: Dict[str, str] = {
    STATUS_IN_USE: "Em Uso",
    STATUS_NOT_IN_USE: "Não em Uso",
    STATUS_DEFECTIVE: "Defeito",
}

DEFECT_LIGHT = "leve"
DEFECT_MEDIUM = "medio"
DEFECT_SEVERE = "grave"

DEFECT_LABELS: Dict[str, str] = {
    DEFECT_LIGHT: "Leve",
    DEFECT_MEDIUM: "Médio",
    DEFECT_SEVERE: "Grave",
}

AREA_NAMES = ["Tela", "Fio", "Corpo", "Energia", "Leitor"]


# ======================================================
# Records
# ======================================================
@dataclass(frozen=True)
class InspectionArea:
    name: str
    has_issue: bool = False


@dataclass(frozen=True)
class Equipment:
    id: str
    name: str
    models: Tuple[str, ...]


@dataclass(frozen=True)
class CompanyInspection:
    company: str
    start_time: datetime


@dataclass(frozen=True)
class Inspection:
    id: str
    timestamp: datetime
    company: str
    equipment: str
    model: str
    status: str
    defect_type: Optional[str]
    analyst: str
    analyst_code: str
    inspection_areas: Tuple[InspectionArea, ...]
    company_inspection_time: datetime

    @property
    def problem_areas(self) -> List[str]:
        return [a.name for a in self.inspection_areas if a.has_issue]


EQUIPMENTS: Tuple[Equipment, ...] = (
    Equipment(id="1", name="Pistola Leitora", models=("MC-330K", "LI4278", "DS2208")),
    Equipment(id="2", name="Impressora Térmica", models=("ZT411", "ZD420", "GC420t")),
)


def find_equipment(equipment_id: Optional[str]) -> Optional[Equipment]:
    for eq in EQUIPMENTS:
        if eq.id == equipment_id:
            return eq
    return None


# ======================================================
# Checklist helpers
# ======================================================
def default_areas() -> Tuple[InspectionArea, ...]:
    """Fresh five-area checklist with nothing flagged."""
    return tuple(InspectionArea(name) for name in AREA_NAMES)


def toggle_area(areas: Sequence[InspectionArea], index: int) -> Tuple[InspectionArea, ...]:
    """Return a new checklist with the flag at ``index`` flipped; the input is untouched."""
    if not 0 <= index < len(areas):
        raise IndexError(f"area index {index} out of range")
    flipped = replace(areas[index], has_issue=not areas[index].has_issue)
    return tuple(areas[:index]) + (flipped,) + tuple(areas[index + 1:])


# ======================================================
# Company code
# ======================================================
def clip_segment(value: Optional[str]) -> str:
    return (value or "")[:COMPANY_SEGMENT_LENGTH]


def normalize_company(segments: Sequence[Optional[str]]) -> str:
    """Join the company boxes as ``aaa-bbb-ccc``; each box keeps at most 3 characters."""
    parts = [clip_segment(s) for s in segments]
    parts += [""] * (COMPANY_SEGMENTS - len(parts))
    return COMPANY_SEPARATOR.join(parts[:COMPANY_SEGMENTS])


# ======================================================
# Form draft
# ======================================================
class MissingRequiredField(ValueError):
    """A required form input was absent at submission time."""

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__("Missing required field(s): " + ", ".join(self.fields))


@dataclass
class InspectionDraft:
    """In-progress, unsaved state of the new-inspection form."""

    company: List[str] = field(default_factory=lambda: [""] * COMPANY_SEGMENTS)
    equipment_id: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None
    defect_type: Optional[str] = None
    areas: Tuple[InspectionArea, ...] = field(default_factory=default_areas)

    def missing_fields(self) -> List[str]:
        missing = []
        if not any(clip_segment(s).strip() for s in self.company):
            missing.append("company")
        equipment = find_equipment(self.equipment_id)
        if equipment is None:
            missing.append("equipment")
        if not self.model or (equipment is not None and self.model not in equipment.models):
            missing.append("model")
        if self.status not in STATUS_LABELS:
            missing.append("status")
        elif self.status == STATUS_DEFECTIVE and self.defect_type not in DEFECT_LABELS:
            missing.append("defect_type")
        return missing

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise MissingRequiredField(missing)
