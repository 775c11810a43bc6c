"""Reservation form controller: draft ownership, validation and submission."""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, Protocol

from bistro.config import get_config
from bistro.models import (
    FormSnapshot,
    ReservationDraft,
    SubmissionState,
    resolve_field,
)
from bistro.validation import ValidationErrors, validate, validate_field

logger = logging.getLogger(__name__)

FALLBACK_NOTICE = "Failed to send confirmation. Please try WhatsApp: {phone}"

Listener = Callable[[FormSnapshot], None]


class DeliveryService(Protocol):
    """Anything that can deliver the confirmation email."""

    async def send(self, template_params: dict[str, str]) -> bool: ...


class UnknownFieldError(ValueError):
    """Raised when a change targets a field the form does not have."""


class ReservationController:
    """State machine for one mounted reservation form.

    The controller owns the draft, the validation errors and the submission
    state. ``submit`` moves to SUBMITTING before its only await, so a second
    call while a delivery is outstanding sees the gate and does nothing.
    There is no timeout or cancellation on the delivery call.
    """

    def __init__(
        self,
        email_service: DeliveryService,
        notifier: Callable[[str], None] | None = None,
        clock: Callable[[], date] | None = None,
        fallback_phone: str | None = None,
        restaurant_name: str | None = None,
    ) -> None:
        """Initialize a fresh form.

        Args:
            email_service: Delivery collaborator for the confirmation email
            notifier: Receives the fallback notice when delivery fails
            clock: Returns today's date (for the future-date rule)
            fallback_phone: WhatsApp number quoted in the fallback notice
            restaurant_name: Addressee used in the email template
        """
        self.email_service = email_service
        self.notifier = notifier
        self.clock = clock or date.today
        if fallback_phone is None or restaurant_name is None:
            config = get_config()
            fallback_phone = fallback_phone or config.whatsapp_number
            restaurant_name = restaurant_name or config.restaurant_name
        self.fallback_phone = fallback_phone
        self.restaurant_name = restaurant_name

        self.state = SubmissionState.EDITING
        self.draft = ReservationDraft()
        self.errors: ValidationErrors = {}
        self.notice: str | None = None
        self._listeners: list[Listener] = []

    @property
    def fallback_notice(self) -> str:
        return FALLBACK_NOTICE.format(phone=self.fallback_phone)

    def snapshot(self) -> FormSnapshot:
        """Capture the current state for a rendering layer."""
        return FormSnapshot(
            state=self.state,
            draft=self.draft.model_copy(),
            errors=dict(self.errors),
            notice=self.notice,
        )

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with a snapshot after every change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Form listener {listener!r} failed")

    def on_field_change(self, field: str, value: Any) -> bool:
        """Update one draft field and clear its error if it now passes.

        Args:
            field: Form field name (``specialRequests`` is accepted too)
            value: New value; coerced by the draft model

        Returns:
            True if the change was applied, False when the form is not editable

        Raises:
            UnknownFieldError: If the form has no such field
        """
        attribute = resolve_field(field)
        if attribute is None:
            msg = f"Unknown reservation field: {field}"
            raise UnknownFieldError(msg)

        if self.state is not SubmissionState.EDITING:
            logger.debug(f"Ignoring change to {attribute} while {self.state.value}")
            return False

        setattr(self.draft, attribute, value)

        # Only the edited field is re-checked
        if attribute in self.errors and (
            validate_field(attribute, self.draft, self.clock()) is None
        ):
            del self.errors[attribute]

        self._emit()
        return True

    async def submit(self) -> SubmissionState:
        """Validate the draft and send the confirmation email.

        Returns:
            The state after the attempt (EDITING on invalid input or failed
            delivery, CONFIRMED on success; unchanged if not editable)
        """
        if self.state is not SubmissionState.EDITING:
            logger.debug(f"Ignoring submit while {self.state.value}")
            return self.state

        errors = validate(self.draft, self.clock())
        if errors:
            self.errors = errors
            logger.debug(f"Reservation blocked by {len(errors)} invalid field(s)")
            self._emit()
            return self.state

        self.errors = {}
        self.notice = None
        self.state = SubmissionState.SUBMITTING
        logger.info(f"Submitting reservation for {self.draft.name!r}")
        self._emit()

        template_params = self.draft.to_template_params(self.restaurant_name)
        try:
            delivered = await self.email_service.send(template_params)
        except Exception:
            logger.exception("Reservation delivery failed")
            delivered = False

        if delivered:
            self.state = SubmissionState.CONFIRMED
            logger.info(f"Reservation confirmed for {self.draft.name!r}")
        else:
            self.state = SubmissionState.EDITING
            self.notice = self.fallback_notice
            if self.notifier is not None:
                self.notifier(self.notice)

        self._emit()
        return self.state

    def reset(self) -> bool:
        """Start a new reservation after a confirmed one.

        Returns:
            True if the form was reset, False when not in CONFIRMED
        """
        if self.state is not SubmissionState.CONFIRMED:
            logger.debug(f"Ignoring reset while {self.state.value}")
            return False

        self.draft = ReservationDraft()
        self.errors = {}
        self.notice = None
        self.state = SubmissionState.EDITING
        logger.info("Reservation form reset")
        self._emit()
        return True
