"""Prompt text sent to the remote summarization provider."""

from __future__ import annotations

from datetime import datetime

from encounter_summary.composition.local import patient_age
from encounter_summary.core.text import format_date, format_number
from encounter_summary.models import PatientClinicalSnapshot

SYSTEM_PROMPT = (
    "You are a clinical documentation specialist. Provide accurate, professional medical summaries."
)

_PREAMBLE = (
    "You are a clinical documentation specialist. Generate a comprehensive medical summary "
    "for the following patient. Be concise, professional, and clinically relevant."
)

_RESPONSE_INSTRUCTIONS = """
Please provide:
1. A comprehensive clinical summary (2-3 paragraphs)
2. Key clinical findings (bullet points)
3. Active diagnoses list
4. Clinical recommendations

Format your response as JSON with these keys: summary, keyFindings (array), activeDiagnoses (array), recommendations (array)
"""

_MAX_ENCOUNTERS = 5
_MAX_COMPLETED_RESULTS = 10
_MAX_SURGERIES = 5
_TREATMENT_PLAN_CHARS = 200


def build_summary_prompt(snapshot: PatientClinicalSnapshot, *, now: datetime) -> str:
    """Render the snapshot as one structured block ending in the JSON instruction."""
    patient = snapshot.patient
    lines = [
        _PREAMBLE,
        "",
        "PATIENT INFORMATION:",
        f"- Name: {patient.first_name} {patient.last_name}",
        f"- Age: {patient_age(snapshot, now)} years",
        f"- Gender: {patient.gender or 'Not specified'}",
        f"- Hospital Number: {patient.hospital_number}",
    ]

    if snapshot.encounters:
        lines += ["", f"CLINICAL ENCOUNTERS ({len(snapshot.encounters)} total, showing most recent 5):"]
        for i, enc in enumerate(snapshot.encounters[:_MAX_ENCOUNTERS], start=1):
            diagnoses = ", ".join(d.label for d in enc.diagnoses if d.label) or "None"
            plan = (enc.treatment_plan or "")[:_TREATMENT_PLAN_CHARS] or "Not documented"
            lines += [
                f"{i}. {format_date(enc.created_at)} - Type: {enc.type}",
                f"   Chief Complaint: {enc.chief_complaint or 'Not documented'}",
                f"   Diagnoses: {diagnoses}",
                f"   Treatment Plan: {plan}",
            ]

    if snapshot.investigations:
        lines += ["", f"INVESTIGATIONS ({len(snapshot.investigations)} total):"]
        pending = [inv for inv in snapshot.investigations if inv.status != "completed"]
        completed = [inv for inv in snapshot.investigations if inv.status == "completed"]
        if pending:
            lines.append(f"Pending: {', '.join(inv.label for inv in pending)}")
        if completed:
            lines.append("Recent Results:")
            for inv in completed[:_MAX_COMPLETED_RESULTS]:
                lines.append(f"- {inv.label}: {inv.results or 'No results'}")

    active = [rx for rx in snapshot.prescriptions if rx.status == "active"]
    if active:
        lines += ["", "CURRENT MEDICATIONS:"]
        for rx in active:
            for med in rx.medications:
                descriptor = " ".join(part for part in (med.name, med.strength, med.frequency) if part)
                lines.append(f"- {descriptor} for {med.duration}")

    if snapshot.vitals:
        latest = snapshot.vitals[0]
        lines += ["", f"LATEST VITAL SIGNS ({format_date(latest.recorded_at)}):"]
        if latest.blood_pressure_systolic and latest.blood_pressure_diastolic:
            lines.append(
                f"- BP: {format_number(latest.blood_pressure_systolic)}/"
                f"{format_number(latest.blood_pressure_diastolic)} mmHg"
            )
        if latest.heart_rate:
            lines.append(f"- HR: {format_number(latest.heart_rate)} bpm")
        if latest.temperature:
            lines.append(f"- Temp: {format_number(latest.temperature)}°C")
        if latest.oxygen_saturation:
            lines.append(f"- SpO2: {format_number(latest.oxygen_saturation)}%")
        if latest.respiratory_rate:
            lines.append(f"- RR: {format_number(latest.respiratory_rate)}/min")

    if snapshot.surgeries:
        lines += ["", "SURGICAL HISTORY:"]
        for surgery in snapshot.surgeries[:_MAX_SURGERIES]:
            lines.append(
                f"- {surgery.procedure_name} on {format_date(surgery.performed_on)} - Status: {surgery.status}"
            )

    return "\n".join(lines) + "\n" + _RESPONSE_INSTRUCTIONS
