"""Exception hierarchy for encounter-summary."""

from __future__ import annotations


class EncounterSummaryError(Exception):
    """Base exception for all encounter-summary errors."""


class PatientNotFoundError(EncounterSummaryError):
    """Raised when the record store has no patient with the requested id."""

    def __init__(self, patient_id: str) -> None:
        super().__init__(f"Patient not found: {patient_id}")
        self.patient_id = patient_id


class RecordStoreError(EncounterSummaryError):
    """Raised when a record store read fails or returns unusable data."""


class ProviderError(EncounterSummaryError):
    """Base for generative-text provider failures (always recovered locally)."""


class ProviderUnavailableError(ProviderError):
    """No credential configured, or no provider recognised for it."""


class ProviderAuthError(ProviderError):
    """Provider rejected the credential (401/403)."""


class ProviderRequestError(ProviderError):
    """Non-success status, transport failure or timeout talking to a provider."""


class ResponseParseError(EncounterSummaryError):
    """Provider response did not contain an extractable JSON object."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


__all__ = [
    "EncounterSummaryError",
    "PatientNotFoundError",
    "RecordStoreError",
    "ProviderError",
    "ProviderUnavailableError",
    "ProviderAuthError",
    "ProviderRequestError",
    "ResponseParseError",
]
