"""Tests for record and result models."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from encounter_summary.models import (
    ClinicalEncounter,
    Investigation,
    Patient,
    PatientClinicalSnapshot,
    PrescribedMedication,
    SummaryResult,
    VitalSign,
    WardRound,
)


class TestRecordParsing:
    def test_patient_accepts_camel_case(self) -> None:
        patient = Patient.model_validate(
            {
                "id": "p9",
                "hospitalNumber": "HN-9",
                "firstName": "Grace",
                "lastName": "Eze",
                "dateOfBirth": "1975-11-02T00:00:00.000Z",
                "gender": "female",
            }
        )
        assert patient.hospital_number == "HN-9"
        assert patient.date_of_birth == date(1975, 11, 2)
        assert patient.full_name == "Grace Eze"

    def test_encounter_diagnosis_key(self) -> None:
        enc = ClinicalEncounter.model_validate(
            {
                "id": "e1",
                "patientId": "p1",
                "chiefComplaint": "Cough",
                "diagnosis": [{"name": "Asthma", "status": "confirmed"}],
                "physicalExamination": {"chest": "wheeze", "abdomen": None},
                "createdAt": "2024-06-01T08:30:00Z",
            }
        )
        assert enc.diagnoses[0].label == "Asthma"
        assert enc.physical_examination == {"chest": "wheeze", "abdomen": None}
        assert enc.created_at == datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)

    def test_investigation_result_list_is_joined(self) -> None:
        inv = Investigation.model_validate(
            {"id": "i1", "status": "completed", "results": ["Na 130 (LOW)", "K 4.1"]}
        )
        assert inv.results == "Na 130 (LOW); K 4.1"

    def test_investigation_result_objects_rendered(self) -> None:
        inv = Investigation.model_validate(
            {
                "id": "i1",
                "status": "completed",
                "results": [
                    {"id": "r1", "parameter": "Sodium", "value": 130, "unit": "mmol/L", "status": "low", "flag": "L"},
                    {"id": "r2", "parameter": "Potassium", "value": 4.1, "unit": "mmol/L"},
                    {"id": "r3", "parameter": "Glucose", "value": "11.2", "flag": "H"},
                ],
            }
        )
        assert inv.results == "Sodium 130mmol/L (low); Potassium 4.1mmol/L; Glucose 11.2 (high)"
        assert "{'" not in inv.results

    def test_medication_dosage_fallback(self) -> None:
        med = PrescribedMedication.model_validate({"name": "Amoxicillin", "dosage": "500mg", "frequency": "TDS"})
        assert med.strength == "500mg"
        assert PrescribedMedication(name="Amlodipine", dose=5.0, unit="mg", dosage="ignored").strength == "5mg"
        assert PrescribedMedication(name="Paracetamol").strength == ""

    def test_investigation_label_fallbacks(self) -> None:
        assert Investigation(id="a", type="cbc", type_name="Full Blood Count").label == "Full Blood Count"
        assert Investigation(id="b", type="cbc").label == "cbc"
        assert Investigation(id="c").label == "Unknown test"

    def test_vitals_pulse_alias(self) -> None:
        vital = VitalSign.model_validate({"id": "v1", "pulse": 72})
        assert vital.heart_rate == 72

    def test_ward_round_date_alias(self) -> None:
        rnd = WardRound.model_validate({"id": "w1", "date": "2024-06-10T09:00:00Z"})
        assert rnd.round_date is not None

    def test_records_are_immutable(self) -> None:
        patient = Patient(id="p1")
        with pytest.raises(ValidationError):
            patient.first_name = "Changed"  # type: ignore[misc]


class TestSnapshot:
    def test_empty_snapshot(self) -> None:
        snapshot = PatientClinicalSnapshot(patient=Patient(id="p1"))
        assert snapshot.is_empty

    def test_non_empty_snapshot(self) -> None:
        snapshot = PatientClinicalSnapshot(patient=Patient(id="p1"), vitals=(VitalSign(id="v1"),))
        assert not snapshot.is_empty


class TestSummaryResult:
    def test_wire_format_is_camel_case(self) -> None:
        result = SummaryResult(
            summary="ok",
            key_findings=["a"],
            generated_at=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc),
        )
        wire = result.to_wire()
        assert wire["keyFindings"] == ["a"]
        assert "currentMedications" in wire
        assert "treatmentProgress" in wire
        assert wire["generatedAt"].startswith("2024-06-15T12:00:00")
        assert wire["source"] == "local"

    def test_round_trips_from_wire(self) -> None:
        result = SummaryResult(summary="ok", abnormal_results=["x"])
        assert SummaryResult.model_validate(result.to_wire()).abnormal_results == ["x"]
