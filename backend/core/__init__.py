from backend.core.config import AppSettings, ConfigurationError, load_app_settings

# load config on module import
try:
    settings = load_app_settings()
except ConfigurationError as e:
    # Re-raise with additional context for easier debugging
    raise ConfigurationError(f"Failed to initialize configuration: {e}") from e

__all__ = ["AppSettings", "ConfigurationError", "load_app_settings", "settings"]
