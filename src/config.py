import os
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings with validation.
    Uses Pydantic Settings for automatic env var loading and type validation.
    """

    # --- Answer Service ---
    answer_service_url: str = Field(
        default="https://medicine-ai.onrender.com/answer",
        description="Endpoint of the remote answer service",
    )
    answer_result_limit: int = Field(
        default=10,
        description="Maximum number of medicine records requested per question",
        ge=1,
        le=50,
    )
    answer_timeout_seconds: int = Field(
        default=60,
        description="Transport timeout for a single answer request",
        ge=5,
        le=300,
    )

    # --- Presentation ---
    currency_symbol: str = Field(
        default="₹", description="Prefix used when displaying medicine prices"
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root logging level")
    structured_logs: bool = Field(
        default=False, description="Emit JSON log lines instead of plain text"
    )

    class Config:
        """Pydantic config."""

        env_file = os.getenv("DOTENV_PATH", ".env")
        env_prefix = "MEDICINE_AI_"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If an env var holds an invalid value
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

