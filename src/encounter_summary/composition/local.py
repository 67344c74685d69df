"""Local narrative composer, the always-available summary path.

No randomness and no external calls: the same snapshot, facts and clock
always produce the same text.
"""

from __future__ import annotations

from datetime import datetime

from encounter_summary.core.text import age_in_years, format_long_date
from encounter_summary.models import ExtractedFacts, PatientClinicalSnapshot, SummaryResult

_MAX_DIAGNOSES_IN_NARRATIVE = 5


def patient_age(snapshot: PatientClinicalSnapshot, now: datetime) -> str:
    birth = snapshot.patient.date_of_birth
    if birth is None:
        return "Unknown"
    return str(age_in_years(birth, now.date()))


def compose_narrative(snapshot: PatientClinicalSnapshot, facts: ExtractedFacts, *, now: datetime) -> str:
    """Join the fixed sequence of summary sentences, skipping empty ones."""
    patient = snapshot.patient
    gender = patient.gender or "Unknown"
    sentences = [
        f"{patient.first_name} {patient.last_name} is a {patient_age(snapshot, now)}-year-old {gender} patient."
    ]

    if facts.active_diagnoses:
        names = ", ".join(facts.active_diagnoses[:_MAX_DIAGNOSES_IN_NARRATIVE])
        sentences.append(f"Active diagnoses include: {names}.")

    if snapshot.encounters:
        latest = format_long_date(snapshot.encounters[0].created_at)
        sentences.append(
            f"The patient has had {len(snapshot.encounters)} clinical encounter(s), "
            f"with the most recent on {latest}."
        )

    if snapshot.surgeries:
        sentences.append(f"Surgical history includes {len(snapshot.surgeries)} procedure(s).")

    if facts.current_medications:
        sentences.append(f"Currently on {len(facts.current_medications)} medication(s).")

    if facts.pending_investigations:
        sentences.append(f"There are {len(facts.pending_investigations)} pending investigation(s).")

    if facts.abnormal_results:
        sentences.append(
            f"Notable: {len(facts.abnormal_results)} abnormal investigation result(s) requiring attention."
        )

    return " ".join(sentences)


def build_local_summary(snapshot: PatientClinicalSnapshot, facts: ExtractedFacts, *, now: datetime) -> SummaryResult:
    """Full :class:`SummaryResult` from the local path."""
    return SummaryResult(
        summary=compose_narrative(snapshot, facts, now=now),
        key_findings=list(facts.key_findings),
        active_diagnoses=list(facts.active_diagnoses),
        current_medications=list(facts.current_medications),
        pending_investigations=list(facts.pending_investigations),
        abnormal_results=list(facts.abnormal_results),
        treatment_progress=facts.treatment_progress,
        recommendations=list(facts.recommendations),
        generated_at=now,
        source="local",
    )
