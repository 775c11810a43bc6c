"""EmailJS service for reservation confirmation emails."""

import logging

import httpx

from bistro.config import Config, get_config

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when a confirmation email could not be handed to EmailJS."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmailService:
    """Sends reservation details through the EmailJS REST API.

    The service only reports whether EmailJS accepted the message; delivery
    to the inbox is up to the provider.
    """

    def __init__(
        self, cfg: Config | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the email service.

        Args:
            cfg: Configuration (defaults to the global config)
            client: HTTP client to reuse (one is created if omitted)
        """
        self.config = cfg or get_config()
        self.client = client or httpx.AsyncClient(timeout=self.config.emailjs_timeout)
        if not self.config.has_emailjs_config():
            logger.warning("EmailJS not configured - confirmations will fail")
        else:
            logger.info("EmailJS service initialized")

    def is_configured(self) -> bool:
        """Check if EmailJS credentials are set.

        Returns:
            True if service, template and user IDs are present
        """
        return self.config.has_emailjs_config()

    def _build_request(self, template_params: dict[str, str]) -> dict:
        body = {
            "service_id": self.config.emailjs_service_id,
            "template_id": self.config.emailjs_template_id,
            "user_id": self.config.emailjs_user_id,
            "template_params": template_params,
        }
        if self.config.emailjs_access_token:
            body["accessToken"] = self.config.emailjs_access_token
        return body

    async def send(self, template_params: dict[str, str]) -> bool:
        """Send one templated email.

        Args:
            template_params: Values for the EmailJS template variables

        Returns:
            True once EmailJS accepts the message

        Raises:
            DeliveryError: If EmailJS is not configured, unreachable, or rejects
                the request
        """
        if not self.is_configured():
            msg = "EmailJS is not configured"
            raise DeliveryError(msg)

        try:
            logger.info(
                f"Sending confirmation for {template_params.get('from_name', '')!r}"
            )
            response = await self.client.post(
                self.config.emailjs_api_url,
                json=self._build_request(template_params),
            )

        except httpx.HTTPError as e:
            logger.exception("Failed to reach EmailJS")
            msg = f"Could not reach EmailJS: {e}"
            raise DeliveryError(msg) from e

        if not response.is_success:
            logger.error(
                f"EmailJS rejected the request ({response.status_code}): {response.text}"
            )
            msg = f"EmailJS rejected the request with status {response.status_code}"
            raise DeliveryError(
                msg, status_code=response.status_code, body=response.text
            )

        logger.info("Confirmation email accepted by EmailJS")
        return True

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
