"""Shared fixtures for the reservation form tests."""

import asyncio
from datetime import date, timedelta

import pytest

from bistro.services.reservation_controller import ReservationController

TODAY = date(2026, 10, 19)
TOMORROW = TODAY + timedelta(days=1)
FALLBACK = "Failed to send confirmation. Please try WhatsApp: +8801720235330"


class FakeEmailService:
    """Records sends; can hold them open, reject them, or raise."""

    def __init__(
        self,
        result: bool = True,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.result = result
        self.error = error
        self.gate = gate
        self.calls: list[dict[str, str]] = []

    async def send(self, template_params: dict[str, str]) -> bool:
        self.calls.append(template_params)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def email_service():
    """Delivery collaborator that accepts every message."""
    return FakeEmailService()


@pytest.fixture
def failing_email_service():
    """Delivery collaborator that raises on every send."""
    return FakeEmailService(error=RuntimeError("Email failed"))


@pytest.fixture
def notices():
    """Collects fallback notices pushed by a controller."""
    return []


@pytest.fixture
def make_controller(notices):
    """Factory for controllers with a fixed clock and fallback number."""

    def _make(service) -> ReservationController:
        return ReservationController(
            service,
            notifier=notices.append,
            clock=lambda: TODAY,
            fallback_phone="+8801720235330",
            restaurant_name="Bistro",
        )

    return _make


@pytest.fixture
def valid_fields():
    """Form values that pass every rule relative to TODAY."""
    return {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "+1234567890",
        "date": TOMORROW.isoformat(),
        "time": "7:00 PM",
        "guests": 2,
    }


def fill(controller: ReservationController, fields: dict) -> None:
    for field, value in fields.items():
        controller.on_field_change(field, value)
