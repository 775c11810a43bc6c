"""Data models for the Bistro reservation form."""

from bistro.models.reservation import (
    DEFAULT_GUESTS,
    MAX_GUESTS,
    MIN_GUESTS,
    OCCASIONS,
    TIME_SLOTS,
    FormSnapshot,
    ReservationDraft,
    SubmissionState,
    resolve_field,
)

__all__ = [
    "DEFAULT_GUESTS",
    "MAX_GUESTS",
    "MIN_GUESTS",
    "OCCASIONS",
    "TIME_SLOTS",
    "FormSnapshot",
    "ReservationDraft",
    "SubmissionState",
    "resolve_field",
]
