"""Clinical data aggregator.

Fetches all seven record kinds for one patient concurrently, waits for every
query to finish, and sorts each sequence most-recent-first.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Sequence, TypeVar

from encounter_summary.core.text import as_utc
from encounter_summary.exceptions import EncounterSummaryError, PatientNotFoundError, RecordStoreError
from encounter_summary.models import RECORD_MODELS, PatientClinicalSnapshot, RecordKind
from encounter_summary.store.protocols import IRecordStore

log = logging.getLogger(__name__)

T = TypeVar("T")

_SORT_KEYS: dict[RecordKind, Callable[..., datetime | None]] = {
    RecordKind.ENCOUNTERS: lambda r: r.created_at,
    RecordKind.INVESTIGATIONS: lambda r: r.created_at,
    RecordKind.PRESCRIPTIONS: lambda r: r.created_at,
    RecordKind.VITALS: lambda r: r.recorded_at,
    RecordKind.SURGERIES: lambda r: r.performed_on,
    RecordKind.ADMISSIONS: lambda r: r.admission_date,
    RecordKind.WARD_ROUNDS: lambda r: r.round_date,
}


def sort_most_recent_first(
    records: Sequence[T], key: Callable[[T], datetime | None]
) -> tuple[T, ...]:
    """Stable descending sort by *key*; records without a timestamp go last."""
    dated = [r for r in records if key(r) is not None]
    undated = [r for r in records if key(r) is None]
    dated = sorted(dated, key=lambda r: as_utc(key(r)), reverse=True)  # type: ignore[arg-type]
    return tuple(dated + undated)


class ClinicalDataAggregator:
    """Builds a :class:`PatientClinicalSnapshot` from a record store."""

    def __init__(self, store: IRecordStore) -> None:
        self._store = store

    async def aggregate(self, patient_id: str) -> PatientClinicalSnapshot:
        """Fetch and order every record kind for *patient_id*.

        Raises:
            PatientNotFoundError: The store has no such patient.
            RecordStoreError: Any read failed; no partial snapshot is returned.
        """
        try:
            patient = await self._store.get_patient(patient_id)
        except EncounterSummaryError:
            raise
        except Exception as exc:
            raise RecordStoreError(f"Failed to load patient {patient_id}: {exc}") from exc

        if patient is None:
            raise PatientNotFoundError(patient_id)

        kinds = list(RecordKind)
        results = await asyncio.gather(
            *(self._store.query_by_patient(kind, patient_id) for kind in kinds),
            return_exceptions=True,
        )

        sequences: dict[RecordKind, tuple] = {}
        for kind, result in zip(kinds, results):
            if isinstance(result, BaseException):
                log.error(f"Query for {kind.value} of patient {patient_id} failed: {result}")
                if isinstance(result, RecordStoreError):
                    raise result
                raise RecordStoreError(
                    f"Failed to query {kind.value} for patient {patient_id}: {result}"
                ) from result
            expected = RECORD_MODELS[kind]
            for record in result:
                if not isinstance(record, expected):
                    raise RecordStoreError(
                        f"Store returned {type(record).__name__} for {kind.value}; "
                        f"expected {expected.__name__}"
                    )
            sequences[kind] = sort_most_recent_first(result, _SORT_KEYS[kind])

        snapshot = PatientClinicalSnapshot(
            patient=patient,
            encounters=sequences[RecordKind.ENCOUNTERS],
            investigations=sequences[RecordKind.INVESTIGATIONS],
            prescriptions=sequences[RecordKind.PRESCRIPTIONS],
            vitals=sequences[RecordKind.VITALS],
            surgeries=sequences[RecordKind.SURGERIES],
            admissions=sequences[RecordKind.ADMISSIONS],
            ward_rounds=sequences[RecordKind.WARD_ROUNDS],
        )
        log.debug(
            f"Aggregated patient {patient_id}: {len(snapshot.encounters)} encounters, "
            f"{len(snapshot.investigations)} investigations, {len(snapshot.prescriptions)} prescriptions"
        )
        return snapshot
