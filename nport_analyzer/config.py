"""
Application Configuration

Process-wide settings resolved once at startup:
- SEC_USER_AGENT: identification header required by SEC EDGAR
- PORT: HTTP port for the API server
- LOG_LEVEL: root logging level
"""

import logging
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Substituted when SEC_USER_AGENT is not configured
FALLBACK_USER_AGENT = "NPORT-Analyzer internal-tool@localhost"


class Settings(BaseSettings):
    """Configuration for the NPORT Analyzer API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    sec_user_agent: str = Field(
        default="",
        description="User-Agent sent to SEC EDGAR, e.g. 'Jane Doe jane@example.com'"
    )
    port: int = Field(
        default=3000,
        description="HTTP port for the API server"
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level"
    )

    @property
    def user_agent_configured(self) -> bool:
        """Whether a real SEC_USER_AGENT was supplied."""
        return bool(self.sec_user_agent.strip())

    @property
    def effective_user_agent(self) -> str:
        """User-Agent actually sent on outbound requests."""
        if self.user_agent_configured:
            return self.sec_user_agent.strip()
        return FALLBACK_USER_AGENT


@lru_cache
def get_settings() -> Settings:
    """Get settings from environment (resolved once per process)."""
    return Settings()


def log_startup_diagnostics(settings: Settings) -> None:
    """Warn when SEC_USER_AGENT is missing."""
    if not settings.user_agent_configured:
        logger.warning("⚠️  SEC_USER_AGENT not set.")
        logger.warning("   Copy .env.example to .env and add your name and email.")
        logger.warning("   The SEC requires this header for EDGAR API access.")
    logger.info(f"User-Agent: {settings.effective_user_agent}")
