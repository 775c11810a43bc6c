"""Tests for data models."""

import pytest
from pydantic import ValidationError

from bistro.models import (
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


class TestReservationDraft:
    """Tests for the ReservationDraft model."""

    def test_defaults(self):
        """Test that a new draft is empty with two guests."""
        draft = ReservationDraft()

        assert draft.name == ""
        assert draft.email == ""
        assert draft.phone == ""
        assert draft.date == ""
        assert draft.time == ""
        assert draft.guests == DEFAULT_GUESTS == 2
        assert draft.occasion == ""
        assert draft.special_requests == ""

    def test_guests_clamped_on_assignment(self):
        """Test that party size is kept within the supported range."""
        draft = ReservationDraft()

        draft.guests = 0
        assert draft.guests == MIN_GUESTS

        draft.guests = 50
        assert draft.guests == MAX_GUESTS

        draft.guests = "6"
        assert draft.guests == 6

    def test_guests_unparseable_falls_back_to_default(self):
        """Test that junk party sizes reset to the default."""
        draft = ReservationDraft(guests=5)

        draft.guests = "lots"
        assert draft.guests == DEFAULT_GUESTS

        draft.guests = None
        assert draft.guests == DEFAULT_GUESTS

    def test_text_fields_coerced(self):
        """Test that None and scalars become strings."""
        draft = ReservationDraft()

        draft.name = None
        draft.phone = 1234567890

        assert draft.name == ""
        assert draft.phone == "1234567890"

    def test_guests_infinite_clamped(self):
        """Test that infinite party sizes clamp instead of raising."""
        draft = ReservationDraft()

        draft.guests = float("inf")
        assert draft.guests == MAX_GUESTS

        draft.guests = float("-inf")
        assert draft.guests == MIN_GUESTS

        draft.guests = float("nan")
        assert draft.guests == DEFAULT_GUESTS

    def test_special_requests_alias(self):
        """Test that the form's camelCase name is accepted."""
        draft = ReservationDraft.model_validate({"specialRequests": "Window seat"})
        assert draft.special_requests == "Window seat"

    def test_template_params(self):
        """Test mapping onto the email template variables."""
        draft = ReservationDraft(
            name="John Doe",
            email="john@example.com",
            phone="+1234567890",
            date="2026-10-20",
            time="7:00 PM",
            guests=4,
        )

        params = draft.to_template_params("Bistro")

        assert params["to_name"] == "Bistro"
        assert params["from_name"] == "John Doe"
        assert params["from_email"] == "john@example.com"
        assert params["reply_to"] == "john@example.com"
        assert params["guests"] == "4"
        assert params["time"] == "7:00 PM"
        assert params["occasion"] == "None"
        assert params["special_requests"] == "None"


class TestResolveField:
    """Tests for form field name resolution."""

    def test_known_fields(self):
        assert resolve_field("name") == "name"
        assert resolve_field("special_requests") == "special_requests"
        assert resolve_field("specialRequests") == "special_requests"

    def test_unknown_field(self):
        assert resolve_field("table_number") is None


class TestEnumerations:
    """Tests for the fixed choices offered by the form."""

    def test_time_slots(self):
        assert "7:00 PM" in TIME_SLOTS
        assert len(set(TIME_SLOTS)) == len(TIME_SLOTS)

    def test_occasions(self):
        for occasion in ("Birthday Celebration", "Anniversary", "Date Night"):
            assert occasion in OCCASIONS

    def test_status_values(self):
        assert SubmissionState.EDITING == "editing"
        assert SubmissionState.SUBMITTING == "submitting"
        assert SubmissionState.CONFIRMED == "confirmed"


class TestFormSnapshot:
    """Tests for the FormSnapshot model."""

    def test_snapshot_immutable(self):
        """Test that snapshots are frozen."""
        snapshot = FormSnapshot(state=SubmissionState.EDITING, draft=ReservationDraft())

        with pytest.raises((ValidationError, AttributeError)):
            snapshot.state = SubmissionState.CONFIRMED
