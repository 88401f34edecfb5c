"""
Planner settings.

Process-level defaults are read from environment variables (or a .env file)
with pydantic-settings. They are only consulted by the service layer when it
turns saved household state into a forecast configuration; the calculators
themselves take every value as an argument.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "testing", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Planner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Defaults for household state that leaves them unset
    default_financial_year: str = Field(
        default="2025-26", alias="DEFAULT_FINANCIAL_YEAR"
    )
    include_medicare_levy: bool = Field(default=True, alias="INCLUDE_MEDICARE_LEVY")

    # Forecast horizon and car depreciation without any cars entered
    max_projection_age: int = Field(default=80, alias="MAX_PROJECTION_AGE")
    default_car_depreciation_rate: float = Field(
        default=15.0, alias="DEFAULT_CAR_DEPRECIATION_RATE"
    )

    @field_validator("app_env")
    @classmethod
    def check_app_env(cls, value: str) -> str:
        if value not in ENVIRONMENTS:
            raise ValueError(f"APP_ENV must be one of {', '.join(ENVIRONMENTS)}")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept level names in any case and store them upper-cased."""
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("default_financial_year")
    @classmethod
    def check_financial_year(cls, value: str) -> str:
        """Financial years are written as e.g. 2025-26."""
        start, _, end = value.partition("-")
        if len(start) != 4 or not start.isdigit() or not end.isdigit():
            raise ValueError("DEFAULT_FINANCIAL_YEAR must look like 2025-26")
        return value

    @field_validator("max_projection_age")
    @classmethod
    def check_max_projection_age(cls, value: int) -> int:
        if value < 1 or value > 120:
            raise ValueError("MAX_PROJECTION_AGE must be between 1 and 120")
        return value


def get_settings(env_file: Optional[str] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: .env file to read instead of the default ``.env``

    Returns:
        A new Settings instance
    """
    if env_file is None:
        return Settings()
    return Settings(_env_file=env_file)


_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Settings shared by services that are not given their own."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Forget the shared settings so the next lookup reloads them."""
    global _settings
    _settings = None


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured log level to the package logger."""
    level = (settings or get_global_settings()).log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("household_planner").setLevel(level)
