"""Data models for the reservation form."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MIN_GUESTS = 1
MAX_GUESTS = 20
DEFAULT_GUESTS = 2

TIME_SLOTS: tuple[str, ...] = (
    "12:00 PM",
    "12:30 PM",
    "1:00 PM",
    "1:30 PM",
    "2:00 PM",
    "2:30 PM",
    "5:00 PM",
    "5:30 PM",
    "6:00 PM",
    "6:30 PM",
    "7:00 PM",
    "7:30 PM",
    "8:00 PM",
    "8:30 PM",
    "9:00 PM",
    "9:30 PM",
    "10:00 PM",
)

OCCASIONS: tuple[str, ...] = (
    "Birthday Celebration",
    "Anniversary",
    "Date Night",
    "Business Dinner",
    "Family Gathering",
    "Other",
)

# Wire names used by the site's form inputs
FIELD_ALIASES = {"specialRequests": "special_requests"}


class SubmissionState(str, Enum):
    """Lifecycle of one mounted reservation form."""

    EDITING = "editing"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


class ReservationDraft(BaseModel):
    """In-progress booking details as typed into the form."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(default="", description="Guest full name")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone number")
    date: str = Field(default="", description="Reservation date (YYYY-MM-DD)")
    time: str = Field(default="", description="Selected time slot label")
    guests: int = Field(default=DEFAULT_GUESTS, description="Number of guests")
    occasion: str = Field(default="", description="Optional occasion")
    special_requests: str = Field(
        default="",
        validation_alias=AliasChoices("special_requests", "specialRequests"),
        description="Free-text requests",
    )

    @field_validator(
        "name", "email", "phone", "date", "time", "occasion", "special_requests",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value):
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("guests", mode="before")
    @classmethod
    def coerce_guests(cls, value):
        """Clamp the party size into the supported range."""
        try:
            guests = int(value)
        except OverflowError:
            # Infinite floats, e.g. 1e400 from JSON
            return MAX_GUESTS if value > 0 else MIN_GUESTS
        except (TypeError, ValueError):
            return DEFAULT_GUESTS
        return min(max(guests, MIN_GUESTS), MAX_GUESTS)

    def to_template_params(self, restaurant_name: str) -> dict[str, str]:
        """Map the draft onto the confirmation email template variables."""
        return {
            "to_name": restaurant_name,
            "from_name": self.name,
            "from_email": self.email,
            "reply_to": self.email,
            "phone": self.phone,
            "date": self.date,
            "time": self.time,
            "guests": str(self.guests),
            "occasion": self.occasion or "None",
            "special_requests": self.special_requests or "None",
        }


def resolve_field(field: str) -> str | None:
    """Return the draft attribute for a form field name, or None if unknown."""
    field = FIELD_ALIASES.get(field, field)
    if field in ReservationDraft.model_fields:
        return field
    return None


class FormSnapshot(BaseModel):
    """Observable state of a reservation form at one point in time."""

    model_config = ConfigDict(frozen=True)

    state: SubmissionState = Field(..., description="Submission state")
    draft: ReservationDraft = Field(..., description="Current draft values")
    errors: dict[str, str] = Field(
        default_factory=dict, description="Field name to error message"
    )
    notice: str | None = Field(None, description="Fallback notice after a failure")
