"""Clinical record store backends."""

from __future__ import annotations

from encounter_summary.store.file_backend import JsonFileRecordStore, build_store
from encounter_summary.store.memory_backend import MemoryRecordStore
from encounter_summary.store.protocols import IRecordStore

__all__ = ["IRecordStore", "JsonFileRecordStore", "MemoryRecordStore", "build_store"]
