"""Record store fakes that record calls or fail on demand."""

from __future__ import annotations

import asyncio

from encounter_summary.exceptions import RecordStoreError
from encounter_summary.models import ClinicalRecord, Patient, RecordKind
from encounter_summary.store.memory_backend import MemoryRecordStore


class FakeRecordStore:
    """Wraps a memory store, tracking concurrency and injecting failures."""

    def __init__(
        self,
        inner: MemoryRecordStore,
        *,
        fail_kinds: frozenset[RecordKind] = frozenset(),
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self._inner = inner
        self._fail_kinds = fail_kinds
        self._error = error or RuntimeError("connection reset")
        self._delay = delay
        self.queried: list[RecordKind] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_patient(self, patient_id: str) -> Patient | None:
        return await self._inner.get_patient(patient_id)

    async def query_by_patient(self, kind: RecordKind, patient_id: str) -> list[ClinicalRecord]:
        self.queried.append(kind)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay)
            if kind in self._fail_kinds:
                raise self._error
            return await self._inner.query_by_patient(kind, patient_id)
        finally:
            self.in_flight -= 1


class BrokenPatientStore(MemoryRecordStore):
    """Fails on the patient lookup itself."""

    async def get_patient(self, patient_id: str) -> Patient | None:
        raise RecordStoreError("database unavailable")
