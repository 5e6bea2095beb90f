from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class AppSettings(BaseSettings):
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    # Minimum attendance percentage; 100 would leave no skip budget to divide by
    ATTENDANCE_THRESHOLD: int = Field(default=75, gt=0, lt=100)
    STORE_BASE_URL: str = "http://localhost:10000/api"

    model_config = SettingsConfigDict(
        env_file=[".env", ".env.example"],
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


def load_app_settings() -> AppSettings:
    try:
        return AppSettings()
    except Exception as error:
        raise ConfigurationError(f"Failed to load application settings: {error}")
