# =============================================================================
# core/models/logbook.py - Hygiene and Lab Test Schemas
# =============================================================================
# Daily hygiene photos (one per area per day) and monthly lab test reports.
# =============================================================================

from datetime import date as Date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HygieneArea(str, Enum):
    """Areas that must be photographed after cleaning each day."""
    TOILETS = "toilets"
    STORAGE_AREA = "storage_area"
    PACKAGING_AREA = "packaging_area"
    PROCESSING_AREA = "processing_area"
    OFFICE_AREA = "office_area"


HYGIENE_AREA_LABELS: dict[HygieneArea, str] = {
    HygieneArea.TOILETS: "Clean Toilets",
    HygieneArea.STORAGE_AREA: "Cleaned Storage Area",
    HygieneArea.PACKAGING_AREA: "Cleaned Packaging Area",
    HygieneArea.PROCESSING_AREA: "Cleaned Processing Area",
    HygieneArea.OFFICE_AREA: "Clean Office Area",
}


class LabTestType(str, Enum):
    FINISHED_GOOD = "finished_good"
    RAW_MATERIAL = "raw_material"


class LabTestCategory(str, Enum):
    TAMARIND_JELLY = "tamarind_jelly"
    MANGO_JELLY = "mango_jelly"
    POPSICLES = "popsicles"
    WATER = "water"
    SUGAR = "sugar"
    TAMARIND = "tamarind"


# (type, label, required every month)
LAB_TEST_CATALOG: dict[LabTestCategory, tuple[LabTestType, str, bool]] = {
    LabTestCategory.TAMARIND_JELLY: (LabTestType.FINISHED_GOOD, "Tamarind Jelly", True),
    LabTestCategory.MANGO_JELLY: (LabTestType.FINISHED_GOOD, "Mango Jelly", True),
    LabTestCategory.POPSICLES: (LabTestType.FINISHED_GOOD, "Popsicles", False),
    LabTestCategory.WATER: (LabTestType.RAW_MATERIAL, "Water", True),
    LabTestCategory.SUGAR: (LabTestType.RAW_MATERIAL, "Sugar", True),
    LabTestCategory.TAMARIND: (LabTestType.RAW_MATERIAL, "Tamarind", True),
}


# =============================================================================
# Hygiene
# =============================================================================

class HygieneRecordResponse(BaseModel):
    """Hygiene photo record as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    worker_id: str
    worker_name: str
    date: Date
    area: str
    photo_url: str
    notes: str | None = None
    created_at: datetime | None = None


class HygieneAreaStatus(BaseModel):
    """Whether one area has been photographed on a given day."""

    area: HygieneArea
    label: str
    completed: bool
    record: HygieneRecordResponse | None = None


class HygieneChecklist(BaseModel):
    date: Date
    completed: int
    total: int
    areas: list[HygieneAreaStatus] = Field(default_factory=list)


# =============================================================================
# Lab Tests
# =============================================================================

class LabTestRecordResponse(BaseModel):
    """Lab test record as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    test_type: str
    category: str
    product_name: str
    month: str
    file_url: str
    notes: str | None = None
    created_at: datetime | None = None


class LabTestCategoryStatus(BaseModel):
    category: LabTestCategory
    test_type: LabTestType
    label: str
    required: bool
    completed: bool


class LabTestChecklist(BaseModel):
    month: str
    missing_required: list[LabTestCategory] = Field(default_factory=list)
    categories: list[LabTestCategoryStatus] = Field(default_factory=list)
