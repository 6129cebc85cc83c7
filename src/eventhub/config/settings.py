"""Core settings loaded from environment variables (prefix ``EVENTHUB_``)."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Settings consumed by the domain core and its logging setup."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON instead of console text")

    # Ticket credentials
    ticket_qr_prefix: str = Field(
        default="EHTICKET", min_length=1, description="Prefix of generated ticket QR codes"
    )

    # Group invitations
    invitation_code_length: int = Field(
        default=8, ge=4, le=32, description="Length of generated group invitation codes"
    )

    model_config = SettingsConfigDict(
        env_prefix="EVENTHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return level


@lru_cache
def get_settings() -> CoreSettings:
    """Cached settings instance."""
    return CoreSettings()
