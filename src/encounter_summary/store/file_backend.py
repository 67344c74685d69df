"""JSON-file record store that reads a record-store export document.

The export is a single JSON object keyed by collection name::

    {
      "patients": [{"id": "p1", "firstName": "Ada", ...}],
      "clinicalEncounters": [...],
      "investigations": [...],
      "prescriptions": [...],
      "vitalSigns": [...],
      "surgeries": [...],
      "admissions": [...],
      "wardRounds": [...]
    }

Each collection also accepts its snake_case / short name.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from encounter_summary.exceptions import RecordStoreError
from encounter_summary.models import RECORD_MODELS, Patient, RecordKind
from encounter_summary.store.memory_backend import MemoryRecordStore

log = logging.getLogger(__name__)

_COLLECTION_KEYS: dict[RecordKind, tuple[str, ...]] = {
    RecordKind.ENCOUNTERS: ("clinicalEncounters", "clinical_encounters", "encounters"),
    RecordKind.INVESTIGATIONS: ("investigations",),
    RecordKind.PRESCRIPTIONS: ("prescriptions",),
    RecordKind.VITALS: ("vitalSigns", "vital_signs", "vitals"),
    RecordKind.SURGERIES: ("surgeries",),
    RecordKind.ADMISSIONS: ("admissions",),
    RecordKind.WARD_ROUNDS: ("wardRounds", "ward_rounds"),
}


def _collection(document: dict[str, Any], keys: tuple[str, ...]) -> list[Any]:
    for key in keys:
        if key in document:
            items = document[key]
            if not isinstance(items, list):
                raise RecordStoreError(f"Collection {key!r} must be a list")
            return items
    return []


class JsonFileRecordStore(MemoryRecordStore):
    """Loads an export file once and serves reads from memory."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = Path(path)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise RecordStoreError(f"Record file not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise RecordStoreError(f"Cannot read record file {self._path}: {exc}") from exc

        if not isinstance(document, dict):
            raise RecordStoreError(f"Record file {self._path} must contain a JSON object")

        try:
            for raw in _collection(document, ("patients",)):
                self.add_patient(Patient.model_validate(raw))
            for kind, keys in _COLLECTION_KEYS.items():
                model = RECORD_MODELS[kind]
                records = [model.model_validate(raw) for raw in _collection(document, keys)]
                self.add(kind, *records)
        except ValidationError as exc:
            raise RecordStoreError(f"Invalid record in {self._path}: {exc}") from exc

        log.info(f"Loaded {len(self._patients)} patient(s) from {self._path}")


def build_store(backend: str, path: Path | None = None) -> MemoryRecordStore:
    """Create the configured store backend."""
    if backend == "memory":
        return MemoryRecordStore()
    if backend == "file":
        if path is None:
            raise ValueError("File record store requires a path")
        return JsonFileRecordStore(path)
    raise ValueError(f"Unknown record store backend: {backend!r}")
