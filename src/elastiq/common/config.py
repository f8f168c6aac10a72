"""Package configuration via ELASTIQ_-prefixed environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings

_LOG_FORMATS = {"json", "console"}


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json | console

    # More-like-this
    mlt_warn_on_empty: bool = True  # Log when a query has nothing to be "liked"

    model_config = {
        "env_prefix": "ELASTIQ_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in _LOG_FORMATS:
            raise ValueError(f"ELASTIQ_LOG_FORMAT must be one of {sorted(_LOG_FORMATS)}, got {value!r}")
        return value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the shared Settings instance, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
