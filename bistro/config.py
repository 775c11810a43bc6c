"""Configuration management for Bistro reservations using Pydantic."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # EmailJS Configuration
    emailjs_service_id: str | None = Field(None, description="EmailJS service ID")
    emailjs_template_id: str | None = Field(None, description="EmailJS template ID")
    emailjs_user_id: str | None = Field(
        None, description="EmailJS public key (user ID)"
    )
    emailjs_access_token: str | None = Field(
        None, description="EmailJS private key, required in strict mode"
    )
    emailjs_api_url: str = Field(
        default="https://api.emailjs.com/api/v1.0/email/send",
        description="EmailJS send endpoint",
    )
    # None keeps the send call unbounded; the form waits for the provider.
    emailjs_timeout: float | None = Field(
        default=None, description="HTTP timeout for EmailJS in seconds"
    )

    # Restaurant Configuration
    restaurant_name: str = Field(default="Bistro", description="Restaurant name")
    whatsapp_number: str = Field(
        default="+8801720235330",
        description="WhatsApp contact shown when confirmation email fails",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")
    server_url: str = Field(
        default="http://localhost:8080",
        description="Server URL for CLI to connect to API",
    )
    session_max_age_minutes: int = Field(
        default=60, description="Idle form sessions older than this are dropped"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def has_emailjs_config(self) -> bool:
        """Check if EmailJS is properly configured."""
        return bool(
            self.emailjs_service_id
            and self.emailjs_template_id
            and self.emailjs_user_id
        )

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if not self.emailjs_service_id:
            logger.warning("EMAILJS_SERVICE_ID not set - confirmations disabled")

        if not self.emailjs_template_id:
            logger.warning("EMAILJS_TEMPLATE_ID not set - confirmations disabled")

        if not self.emailjs_user_id:
            logger.warning("EMAILJS_USER_ID not set - confirmations disabled")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
