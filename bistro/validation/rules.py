"""Field rules for the reservation form."""

import re
from collections.abc import Callable
from datetime import date

from bistro.models import TIME_SLOTS, ReservationDraft

# Basic address shape: something@something.something, no whitespace
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

ValidationErrors = dict[str, str]


def _check_name(draft: ReservationDraft, today: date) -> str | None:
    if not draft.name.strip():
        return "Name is required"
    return None


def _check_email(draft: ReservationDraft, today: date) -> str | None:
    email = draft.email.strip()
    if not email:
        return "Email is required"
    if not EMAIL_PATTERN.search(email):
        return "Email is invalid"
    return None


def _check_phone(draft: ReservationDraft, today: date) -> str | None:
    if not draft.phone.strip():
        return "Phone number is required"
    return None


def _check_date(draft: ReservationDraft, today: date) -> str | None:
    value = draft.date.strip()
    if not value:
        return "Date is required"
    try:
        requested = date.fromisoformat(value)
    except ValueError:
        return "Please select a future date"
    # Same-day bookings are rejected
    if requested <= today:
        return "Please select a future date"
    return None


def _check_time(draft: ReservationDraft, today: date) -> str | None:
    if draft.time.strip() not in TIME_SLOTS:
        return "Time is required"
    return None


RULES: dict[str, Callable[[ReservationDraft, date], str | None]] = {
    "name": _check_name,
    "email": _check_email,
    "phone": _check_phone,
    "date": _check_date,
    "time": _check_time,
}

VALIDATED_FIELDS = tuple(RULES)


def validate_field(
    field: str, draft: ReservationDraft, today: date | None = None
) -> str | None:
    """Run the rule for a single field.

    Args:
        field: Draft attribute name
        draft: Form values to check
        today: Reference date for the future-date rule (defaults to today)

    Returns:
        The error message, or None when the field is valid or has no rule
    """
    rule = RULES.get(field)
    if rule is None:
        return None
    return rule(draft, today or date.today())


def validate(draft: ReservationDraft, today: date | None = None) -> ValidationErrors:
    """Validate every rule-bearing field of a draft.

    Args:
        draft: Form values to check
        today: Reference date for the future-date rule (defaults to today)

    Returns:
        Mapping of invalid field names to messages; empty when the draft is valid
    """
    today = today or date.today()
    errors: ValidationErrors = {}
    for field, rule in RULES.items():
        message = rule(draft, today)
        if message:
            errors[field] = message
    return errors
