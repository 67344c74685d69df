"""Record store protocol: the read contract every backend implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from encounter_summary.models import ClinicalRecord, Patient, RecordKind


@runtime_checkable
class IRecordStore(Protocol):
    """Protocol for clinical record stores (file export, memory, remote DB)."""

    async def get_patient(self, patient_id: str) -> Patient | None:
        """Return the patient, or None when no such id exists."""
        ...

    async def query_by_patient(self, kind: RecordKind, patient_id: str) -> list[ClinicalRecord]:
        """Return every record of *kind* for the patient, in any order."""
        ...
