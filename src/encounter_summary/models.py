"""Pydantic data models for encounter-summary.

Record models mirror the record store's export shape: they accept both
snake_case and camelCase keys and are immutable once loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from encounter_summary.core.text import format_number

# ── Record models ────────────────────────────────────────────────────


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Patient(_Record):
    """Demographics for the patient being summarized."""

    id: str
    hospital_number: str = ""
    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    gender: str | None = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and value:
            return value[:10]
        return value or None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Diagnosis(_Record):
    name: str | None = None
    description: str | None = None
    code: str | None = None
    status: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.description or ""


class ClinicalEncounter(_Record):
    """A single clinical visit."""

    id: str
    patient_id: str = ""
    type: str = ""
    status: str | None = None
    chief_complaint: str = ""
    physical_examination: dict[str, str | None] | None = None
    diagnoses: list[Diagnosis] = Field(
        default_factory=list,
        validation_alias=AliasChoices("diagnosis", "diagnoses"),
    )
    treatment_plan: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


# Lab flag codes spelled out so keyword matching sees them.
_RESULT_FLAGS: dict[str, str] = {
    "L": "low",
    "LL": "critically low",
    "H": "high",
    "HH": "critically high",
    "A": "abnormal",
}


def _render_result(item: Any) -> str:
    """``{"parameter": "Sodium", "value": 130, "unit": "mmol/L", "flag": "L"}`` -> ``Sodium 130mmol/L (low)``."""
    if not isinstance(item, dict):
        return str(item)
    value = item.get("value")
    reading = f"{format_number(value)}{item.get('unit') or ''}" if value not in (None, "") else ""
    flag = item.get("flag")
    status = item.get("status") or _RESULT_FLAGS.get(flag or "", flag)
    parts = [str(item.get("parameter") or ""), reading]
    if status:
        parts.append(f"({status})")
    return " ".join(part for part in parts if part)


class Investigation(_Record):
    """A requested lab/imaging test and, once completed, its result text."""

    id: str
    patient_id: str = ""
    type: str = ""
    type_name: str | None = None
    status: str = "requested"
    results: str | None = None
    created_at: datetime | None = None

    @field_validator("results", mode="before")
    @classmethod
    def _flatten_results(cls, value: Any) -> Any:
        if isinstance(value, list):
            rendered = (_render_result(item) for item in value if item)
            return "; ".join(text for text in rendered if text)
        return value

    @property
    def label(self) -> str:
        return self.type_name or self.type or "Unknown test"


class PrescribedMedication(_Record):
    name: str = ""
    dose: int | float | str | None = None
    unit: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""

    @property
    def strength(self) -> str:
        """``500mg`` from ``dose`` + ``unit``, else the free-text ``dosage``."""
        if self.dose is None or self.dose == "":
            return self.dosage
        return f"{format_number(self.dose)}{self.unit}"


class Prescription(_Record):
    id: str
    patient_id: str = ""
    status: str = "active"
    medications: list[PrescribedMedication] = Field(default_factory=list)
    created_at: datetime | None = None


class VitalSign(_Record):
    """One set of recorded vital signs."""

    id: str
    patient_id: str = ""
    blood_pressure_systolic: float | None = None
    blood_pressure_diastolic: float | None = None
    heart_rate: float | None = Field(
        default=None,
        validation_alias=AliasChoices("heartRate", "heart_rate", "pulse"),
    )
    temperature: float | None = None
    oxygen_saturation: float | None = None
    respiratory_rate: float | None = None
    recorded_at: datetime | None = None


class Surgery(_Record):
    id: str
    patient_id: str = ""
    procedure_name: str = ""
    status: str | None = None
    scheduled_date: datetime | None = None
    created_at: datetime | None = None

    @property
    def performed_on(self) -> datetime | None:
        return self.scheduled_date or self.created_at


class Admission(_Record):
    id: str
    patient_id: str = ""
    status: str | None = None
    admission_date: datetime | None = None


class WardRound(_Record):
    id: str
    patient_id: str = ""
    round_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("roundDate", "round_date", "date"),
    )
    notes: str | None = None
    plan: str | None = None


class RecordKind(str, Enum):
    """The seven record kinds queryable by patient id."""

    ENCOUNTERS = "encounters"
    INVESTIGATIONS = "investigations"
    PRESCRIPTIONS = "prescriptions"
    VITALS = "vitals"
    SURGERIES = "surgeries"
    ADMISSIONS = "admissions"
    WARD_ROUNDS = "ward_rounds"


ClinicalRecord = Union[
    ClinicalEncounter, Investigation, Prescription, VitalSign, Surgery, Admission, WardRound
]

RECORD_MODELS: dict[RecordKind, type[ClinicalRecord]] = {
    RecordKind.ENCOUNTERS: ClinicalEncounter,
    RecordKind.INVESTIGATIONS: Investigation,
    RecordKind.PRESCRIPTIONS: Prescription,
    RecordKind.VITALS: VitalSign,
    RecordKind.SURGERIES: Surgery,
    RecordKind.ADMISSIONS: Admission,
    RecordKind.WARD_ROUNDS: WardRound,
}


# ── Pipeline models ──────────────────────────────────────────────────


class PatientClinicalSnapshot(BaseModel):
    """Everything known about one patient, each sequence most-recent-first."""

    model_config = ConfigDict(frozen=True)

    patient: Patient
    encounters: tuple[ClinicalEncounter, ...] = ()
    investigations: tuple[Investigation, ...] = ()
    prescriptions: tuple[Prescription, ...] = ()
    vitals: tuple[VitalSign, ...] = ()
    surgeries: tuple[Surgery, ...] = ()
    admissions: tuple[Admission, ...] = ()
    ward_rounds: tuple[WardRound, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.encounters,
                self.investigations,
                self.prescriptions,
                self.vitals,
                self.surgeries,
                self.admissions,
                self.ward_rounds,
            )
        )


@dataclass(frozen=True)
class ExtractedFacts:
    """Structured facts derived from a snapshot; never persisted."""

    all_diagnoses: tuple[str, ...] = ()
    active_diagnoses: tuple[str, ...] = ()
    current_medications: tuple[str, ...] = ()
    pending_investigations: tuple[str, ...] = ()
    abnormal_results: tuple[str, ...] = ()
    latest_vitals: str | None = None
    treatment_progress: str = ""
    key_findings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


SummarySource = Literal["local", "remote", "remote_unparsed"]


class SummaryResult(BaseModel):
    """Public summary contract consumed by the API, CLI and formatters."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str
    key_findings: list[str] = Field(default_factory=list)
    active_diagnoses: list[str] = Field(default_factory=list)
    current_medications: list[str] = Field(default_factory=list)
    pending_investigations: list[str] = Field(default_factory=list)
    abnormal_results: list[str] = Field(default_factory=list)
    treatment_progress: str = ""
    recommendations: list[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: SummarySource = "local"

    def to_wire(self) -> dict[str, Any]:
        """camelCase JSON-ready dict."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "Patient",
    "Diagnosis",
    "ClinicalEncounter",
    "Investigation",
    "PrescribedMedication",
    "Prescription",
    "VitalSign",
    "Surgery",
    "Admission",
    "WardRound",
    "RecordKind",
    "ClinicalRecord",
    "RECORD_MODELS",
    "PatientClinicalSnapshot",
    "ExtractedFacts",
    "SummarySource",
    "SummaryResult",
]
