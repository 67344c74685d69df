"""Fact extraction: a pure function from snapshot to :class:`ExtractedFacts`.

``now`` is always passed in so the same snapshot and clock yield the same
facts.
"""

from __future__ import annotations

import math
from datetime import datetime

from encounter_summary.core.text import as_utc, format_date, format_number
from encounter_summary.models import (
    ClinicalEncounter,
    ExtractedFacts,
    Investigation,
    PatientClinicalSnapshot,
    VitalSign,
)

ABNORMAL_KEYWORDS: tuple[str, ...] = ("abnormal", "high", "low", "positive", "elevated", "decreased")
ACTIVE_DIAGNOSIS_STATUSES = frozenset({"confirmed", "working"})
NO_TREATMENT_PROGRESS = "No treatment progress documented."

_MAX_COMPLAINTS = 5
_MAX_SURGERIES = 3
_RESULT_EXCERPT_CHARS = 100
_NOTES_EXCERPT_CHARS = 200


def _diagnoses(encounters: tuple[ClinicalEncounter, ...]) -> tuple[list[str], list[str]]:
    all_names: list[str] = []
    active: list[str] = []
    for encounter in encounters:
        for diagnosis in encounter.diagnoses:
            name = diagnosis.label
            if not name:
                continue
            if name not in all_names:
                all_names.append(name)
            if diagnosis.status in ACTIVE_DIAGNOSIS_STATUSES and name not in active:
                active.append(name)
    return all_names, active


def _current_medications(snapshot: PatientClinicalSnapshot) -> list[str]:
    medications: list[str] = []
    for prescription in snapshot.prescriptions:
        if prescription.status != "active":
            continue
        for med in prescription.medications:
            line = " ".join(part for part in (med.name, med.strength, med.frequency) if part)
            if line not in medications:
                medications.append(line)
    return medications


def is_abnormal(investigation: Investigation) -> bool:
    """Substring keyword match on completed results, case-insensitive."""
    if investigation.status != "completed" or not investigation.results:
        return False
    text = investigation.results.lower()
    return any(keyword in text for keyword in ABNORMAL_KEYWORDS)


def describe_vitals(vital: VitalSign) -> str:
    """Render the BP/HR/Temp/SpO2 parts present, comma-separated."""
    parts: list[str] = []
    if vital.blood_pressure_systolic and vital.blood_pressure_diastolic:
        parts.append(
            f"BP {format_number(vital.blood_pressure_systolic)}/"
            f"{format_number(vital.blood_pressure_diastolic)}mmHg"
        )
    if vital.heart_rate:
        parts.append(f"HR {format_number(vital.heart_rate)}bpm")
    if vital.temperature:
        parts.append(f"Temp {format_number(vital.temperature)}°C")
    if vital.oxygen_saturation:
        parts.append(f"SpO2 {format_number(vital.oxygen_saturation)}%")
    return ", ".join(parts)


def _key_findings(snapshot: PatientClinicalSnapshot, latest_vitals: str | None) -> list[str]:
    findings: list[str] = []

    complaints = [e.chief_complaint for e in snapshot.encounters[:_MAX_COMPLAINTS] if e.chief_complaint]
    if complaints:
        findings.append(f"Chief complaints: {'; '.join(complaints)}")

    if snapshot.surgeries:
        surgeries = [
            f"{s.procedure_name} ({format_date(s.performed_on)})"
            for s in snapshot.surgeries[:_MAX_SURGERIES]
        ]
        findings.append(f"Surgical history: {', '.join(surgeries)}")

    current = next((a for a in snapshot.admissions if a.status == "admitted"), None)
    if current is not None:
        findings.append(f"Currently admitted since {format_date(current.admission_date)}")

    if latest_vitals:
        findings.append(f"Latest vitals: {latest_vitals}")

    if snapshot.ward_rounds:
        latest_round = snapshot.ward_rounds[0]
        text = latest_round.notes or latest_round.plan
        if text:
            findings.append(f"Latest ward round ({format_date(latest_round.round_date)}): {text}")

    return findings


def _treatment_progress(latest: ClinicalEncounter | None) -> str:
    progress = NO_TREATMENT_PROGRESS
    if latest is None:
        return progress
    if latest.treatment_plan:
        progress = latest.treatment_plan
    if latest.notes:
        progress += f" Notes: {latest.notes[:_NOTES_EXCERPT_CHARS]}"
    return progress


def days_since(recorded_at: datetime | None, now: datetime) -> float:
    """Whole days elapsed, floored; infinite when the timestamp is absent."""
    if recorded_at is None:
        return math.inf
    elapsed = as_utc(now) - as_utc(recorded_at)
    return math.floor(elapsed.total_seconds() / 86400)


def _exam_documented(latest: ClinicalEncounter | None) -> bool:
    if latest is None or not latest.physical_examination:
        return False
    return any(latest.physical_examination.values())


def extract_facts(
    snapshot: PatientClinicalSnapshot,
    *,
    now: datetime,
    stale_after_days: int = 7,
) -> ExtractedFacts:
    """Derive every structured fact used by both summary paths."""
    all_diagnoses, active_diagnoses = _diagnoses(snapshot.encounters)
    medications = _current_medications(snapshot)

    pending = [inv.label for inv in snapshot.investigations if inv.status != "completed"]
    abnormal = [
        f"{inv.label}: {inv.results[:_RESULT_EXCERPT_CHARS]}"  # type: ignore[index]
        for inv in snapshot.investigations
        if is_abnormal(inv)
    ]

    latest_vital = snapshot.vitals[0] if snapshot.vitals else None
    latest_vitals = (describe_vitals(latest_vital) or None) if latest_vital else None
    latest_encounter = snapshot.encounters[0] if snapshot.encounters else None

    recommendations: list[str] = []
    if pending:
        recommendations.append(f"Follow up on {len(pending)} pending investigation(s)")
    if abnormal:
        recommendations.append(f"Review {len(abnormal)} abnormal result(s) and consider action")
    if active_diagnoses and not medications:
        recommendations.append("Consider prescribing medications for active diagnoses")
    # Documentation gaps are only reported once the patient has any clinical record.
    if not snapshot.is_empty:
        last_recorded = latest_vital.recorded_at if latest_vital else None
        if days_since(last_recorded, now) > stale_after_days:
            recommendations.append("Update vital signs (last recorded more than a week ago)")
        if not _exam_documented(latest_encounter):
            recommendations.append("Complete physical examination documentation")

    return ExtractedFacts(
        all_diagnoses=tuple(all_diagnoses),
        active_diagnoses=tuple(active_diagnoses),
        current_medications=tuple(medications),
        pending_investigations=tuple(pending),
        abnormal_results=tuple(abnormal),
        latest_vitals=latest_vitals,
        treatment_progress=_treatment_progress(latest_encounter),
        key_findings=tuple(_key_findings(snapshot, latest_vitals)),
        recommendations=tuple(recommendations),
    )
