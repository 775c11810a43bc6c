"""Presentation bindings: map form snapshots to what the page shows."""

from pydantic import BaseModel, Field

from bistro.models import FormSnapshot, ReservationDraft, SubmissionState


class FormView(BaseModel):
    """Display model for the reservation section."""

    heading: str
    message: str | None = None
    busy: bool = False
    submit_label: str | None = None
    submit_disabled: bool = False
    reset_label: str | None = None
    summary: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    notice: str | None = None


def _summary_lines(draft: ReservationDraft) -> list[str]:
    guests = "guest" if draft.guests == 1 else "guests"
    lines = [
        f"Date: {draft.date}",
        f"Time: {draft.time}",
        f"Party: {draft.guests} {guests}",
    ]
    if draft.occasion:
        lines.append(f"Occasion: {draft.occasion}")
    if draft.special_requests:
        lines.append(f"Special requests: {draft.special_requests}")
    lines.append(f"Confirmation sent to: {draft.email}")
    return lines


def render_form(snapshot: FormSnapshot) -> FormView:
    """Build the view for the current submission state.

    Args:
        snapshot: Form state captured from the controller

    Returns:
        FormView for the editing form, the busy form, or the confirmation screen
    """
    if snapshot.state is SubmissionState.CONFIRMED:
        return FormView(
            heading="Reservation Confirmed!",
            message=f"Thank you, {snapshot.draft.name}!",
            reset_label="Make Another Reservation",
            summary=_summary_lines(snapshot.draft),
        )

    if snapshot.state is SubmissionState.SUBMITTING:
        return FormView(
            heading="Reserve Your Table",
            busy=True,
            submit_label="Confirming Reservation...",
            submit_disabled=True,
        )

    return FormView(
        heading="Reserve Your Table",
        submit_label="Confirm Reservation",
        errors=dict(snapshot.errors),
        notice=snapshot.notice,
    )


def format_confirmation(draft: ReservationDraft) -> str:
    """Format a confirmed reservation for terminal display.

    Args:
        draft: The submitted reservation

    Returns:
        Formatted string for display
    """
    output = []

    output.append("=" * 60)
    output.append("RESERVATION CONFIRMED")
    output.append("=" * 60)
    output.append(f"Thank you, {draft.name}!")
    output.append("")
    output.extend(_summary_lines(draft))
    output.append("=" * 60)

    return "\n".join(output)
