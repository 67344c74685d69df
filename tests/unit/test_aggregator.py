"""Tests for ClinicalDataAggregator: fan-out, ordering, failure semantics."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from encounter_summary.aggregation.aggregator import ClinicalDataAggregator, sort_most_recent_first
from encounter_summary.exceptions import PatientNotFoundError, RecordStoreError
from encounter_summary.models import RecordKind, Surgery
from encounter_summary.store.memory_backend import MemoryRecordStore
from tests.fakes.fake_record_store import BrokenPatientStore, FakeRecordStore
from tests.fakes.sample_records import PATIENT_ID, make_encounter, populated_store


class TestAggregate:
    @pytest.mark.asyncio
    async def test_unknown_patient_raises(self, store: MemoryRecordStore) -> None:
        with pytest.raises(PatientNotFoundError) as exc_info:
            await ClinicalDataAggregator(store).aggregate("missing")
        assert exc_info.value.patient_id == "missing"

    @pytest.mark.asyncio
    async def test_queries_all_kinds_concurrently(self) -> None:
        fake = FakeRecordStore(populated_store(), delay=0.01)
        snapshot = await ClinicalDataAggregator(fake).aggregate(PATIENT_ID)

        assert sorted(fake.queried, key=lambda k: k.value) == sorted(RecordKind, key=lambda k: k.value)
        assert fake.max_in_flight == len(RecordKind)
        assert snapshot.patient.id == PATIENT_ID

    @pytest.mark.asyncio
    async def test_sequences_sorted_most_recent_first(self, store: MemoryRecordStore) -> None:
        snapshot = await ClinicalDataAggregator(store).aggregate(PATIENT_ID)

        assert [e.id for e in snapshot.encounters] == ["e1", "e2"]
        assert [v.id for v in snapshot.vitals] == ["v1", "v2"]
        assert [i.id for i in snapshot.investigations] == ["i1", "i2", "i3"]
        assert [p.id for p in snapshot.prescriptions] == ["rx1", "rx2"]

    @pytest.mark.asyncio
    async def test_any_failed_query_fails_whole_aggregation(self) -> None:
        fake = FakeRecordStore(populated_store(), fail_kinds=frozenset({RecordKind.VITALS}))
        with pytest.raises(RecordStoreError, match="vitals"):
            await ClinicalDataAggregator(fake).aggregate(PATIENT_ID)
        # wait-all: every query still ran
        assert len(fake.queried) == len(RecordKind)

    @pytest.mark.asyncio
    async def test_store_error_passes_through_unwrapped(self) -> None:
        original = RecordStoreError("replica lag")
        fake = FakeRecordStore(populated_store(), fail_kinds=frozenset({RecordKind.SURGERIES}), error=original)
        with pytest.raises(RecordStoreError) as exc_info:
            await ClinicalDataAggregator(fake).aggregate(PATIENT_ID)
        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_patient_lookup_failure(self) -> None:
        with pytest.raises(RecordStoreError, match="database unavailable"):
            await ClinicalDataAggregator(BrokenPatientStore()).aggregate(PATIENT_ID)

    @pytest.mark.asyncio
    async def test_patient_without_records(self, bare_store: MemoryRecordStore) -> None:
        snapshot = await ClinicalDataAggregator(bare_store).aggregate(PATIENT_ID)
        assert snapshot.is_empty


class TestSortMostRecentFirst:
    def test_ties_keep_store_order(self) -> None:
        same = datetime(2024, 1, 1, tzinfo=timezone.utc)
        records = [make_encounter(f"e{i}", 0, created_at=same) for i in range(4)]
        ordered = sort_most_recent_first(records, lambda r: r.created_at)
        assert [r.id for r in ordered] == ["e0", "e1", "e2", "e3"]

    def test_missing_timestamps_sort_last(self) -> None:
        records = [
            make_encounter("undated", 0, created_at=None),
            make_encounter("old", 10),
            make_encounter("new", 1),
        ]
        ordered = sort_most_recent_first(records, lambda r: r.created_at)
        assert [r.id for r in ordered] == ["new", "old", "undated"]

    def test_naive_timestamps_compare_as_utc(self) -> None:
        records = [
            make_encounter("naive", 0, created_at=datetime(2024, 6, 1, 12, 0)),
            make_encounter("aware", 0, created_at=datetime(2024, 6, 1, 11, 0, tzinfo=timezone.utc)),
        ]
        ordered = sort_most_recent_first(records, lambda r: r.created_at)
        assert [r.id for r in ordered] == ["naive", "aware"]

    def test_surgery_uses_scheduled_then_created(self) -> None:
        surgeries = [
            Surgery(id="s-created", patient_id=PATIENT_ID, created_at=datetime(2024, 3, 1, tzinfo=timezone.utc)),
            Surgery(
                id="s-scheduled",
                patient_id=PATIENT_ID,
                scheduled_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
                created_at=datetime(2023, 1, 1, tzinfo=timezone.utc),
            ),
        ]
        ordered = sort_most_recent_first(surgeries, lambda s: s.performed_on)
        assert [s.id for s in ordered] == ["s-scheduled", "s-created"]
