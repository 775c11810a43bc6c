"""Command-line interface for Bistro reservations - HTTP client for server API."""

import logging
import sys
from collections.abc import Callable

import httpx

from bistro.config import get_config, setup_logging
from bistro.models import ReservationDraft
from bistro.views import format_confirmation

logger = logging.getLogger(__name__)

FIELD_PROMPTS = {
    "name": "Full name *",
    "email": "Email *",
    "phone": "Phone *",
    "date": "Date (YYYY-MM-DD) *",
    "time": "Time *",
    "guests": "Number of guests *",
    "occasion": "Occasion (optional)",
    "special_requests": "Special requests (optional)",
}


class ReservationCLI:
    """Fills in the reservation form from a terminal."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        prompt: Callable[[str], str] = input,
    ) -> None:
        """Initialize the CLI.

        Args:
            client: HTTP client pointed at the reservation server
            prompt: Function used to read answers
        """
        self.config = get_config()
        self.client = client or httpx.Client(base_url=self.config.server_url, timeout=None)
        self.prompt = prompt
        self.options: dict | None = None

    def _request(self, method: str, path: str, **kwargs) -> dict:
        response = self.client.request(method, path, **kwargs)
        response.raise_for_status()
        if response.status_code == 204:
            return {}
        return response.json()

    def _choose(self, label: str, choices: list[str], allow_blank: bool) -> str:
        for index, choice in enumerate(choices, start=1):
            print(f"  {index:>2}. {choice}")
        answer = self.prompt(f"{label}: ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        if not answer and allow_blank:
            return ""
        return answer

    def _ask(self, field: str) -> str:
        label = FIELD_PROMPTS[field]
        if field == "time":
            return self._choose(label, self.options["time_slots"], allow_blank=False)
        if field == "occasion":
            return self._choose(label, self.options["occasions"], allow_blank=True)
        if field == "guests":
            bounds = self.options["guests"]
            label = f"{label} [{bounds['min']}-{bounds['max']}]"
        return self.prompt(f"{label}: ").strip()

    def ask_fields(self, session_id: str, fields: list[str]) -> dict:
        """Prompt for the given fields and send the answers to the server."""
        answers = {field: self._ask(field) for field in fields}
        return self._request("PATCH", f"/reservations/sessions/{session_id}", json=answers)

    def complete_reservation(self, session: dict | None = None) -> dict:
        """Walk one form to confirmation or give-up.

        Args:
            session: Payload of an already mounted, editable form (a new one
                is mounted if omitted)

        Returns:
            The last session payload returned by the server
        """
        if self.options is None:
            self.options = self._request("GET", "/reservations/options")

        if session is None:
            session = self._request("POST", "/reservations/sessions")
        session_id = session["session_id"]
        fields = list(FIELD_PROMPTS)

        while True:
            if fields:
                session = self.ask_fields(session_id, fields)

            print("\nConfirming Reservation...")
            session = self._request(
                "POST", f"/reservations/sessions/{session_id}/submit"
            )

            if session["state"] == "confirmed":
                draft = ReservationDraft.model_validate(session["draft"])
                print("\n" + format_confirmation(draft))
                return session

            if session["errors"]:
                print("\nPlease fix the following:")
                for field, message in session["errors"].items():
                    print(f"  - {message}")
                fields = list(session["errors"])
                continue

            print(f"\n⚠ {session['notice']}")
            retry = self.prompt("Try sending again? [y/N]: ").strip().lower()
            if retry not in ("y", "yes"):
                return session
            fields = []

    def run(self) -> None:
        """Run the CLI application."""
        print("\n" + "=" * 60)
        print(f"{self.config.restaurant_name.upper()} - Reserve Your Table")
        print("=" * 60 + "\n")

        session = None
        while True:
            try:
                session = self.complete_reservation(session)
                session_path = f"/reservations/sessions/{session['session_id']}"

                if session["state"] == "confirmed":
                    again = self.prompt("\nMake Another Reservation? [y/N]: ")
                    if again.strip().lower() in ("y", "yes"):
                        session = self._request("POST", f"{session_path}/reset")
                        continue

                self._request("DELETE", session_path)
                break

            except KeyboardInterrupt:
                print("\n\nExiting. Goodbye!")
                break
            except httpx.ConnectError:
                logger.exception("Cannot connect to server")
                print(f"\n⚠ Cannot connect to server at {self.config.server_url}")
                print("Make sure the server is running:")
                print("  bistro-server")
                break
            except httpx.HTTPStatusError as e:
                logger.error(f"Server error: {e}", exc_info=True)
                print(f"\n⚠ Server error (status {e.response.status_code})")
                break

        print("\nThank you for choosing us. Goodbye!")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        config = get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(config)
    cli = ReservationCLI()
    cli.run()


if __name__ == "__main__":
    main()
