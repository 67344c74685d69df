"""In-memory record store, dict-backed."""

from __future__ import annotations

import logging
from collections import defaultdict

from encounter_summary.models import RECORD_MODELS, ClinicalRecord, Patient, RecordKind

log = logging.getLogger(__name__)


class MemoryRecordStore:
    """Holds patients and records in plain dicts; nothing touches disk."""

    def __init__(self) -> None:
        self._patients: dict[str, Patient] = {}
        self._records: dict[RecordKind, dict[str, list[ClinicalRecord]]] = {
            kind: defaultdict(list) for kind in RecordKind
        }

    def add_patient(self, patient: Patient) -> None:
        self._patients[patient.id] = patient
        log.debug(f"Added patient {patient.id} to memory store")

    def add(self, kind: RecordKind, *records: ClinicalRecord) -> None:
        """Add records of *kind*; each must carry its ``patient_id``."""
        expected = RECORD_MODELS[kind]
        for record in records:
            if not isinstance(record, expected):
                raise TypeError(f"{kind.value} expects {expected.__name__}, got {type(record).__name__}")
            self._records[kind][record.patient_id].append(record)

    async def get_patient(self, patient_id: str) -> Patient | None:
        return self._patients.get(patient_id)

    async def query_by_patient(self, kind: RecordKind, patient_id: str) -> list[ClinicalRecord]:
        return list(self._records[kind].get(patient_id, ()))
