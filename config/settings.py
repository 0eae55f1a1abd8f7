import logging
import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    environment: str = "development"

    sentry_dsn: str | None = None

    log_level: str = "INFO"

    # Info.plist file or bundle directory describing the main bundle
    main_bundle_path: str | None = None

    # Overrides the identifier the hardware reports (e.g. "MacBookPro16,1")
    hardware_model_identifier: str | None = None

    @field_validator("environment")
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "test", "production"]:
            raise ValueError(
                "ENVIRONMENT must be 'development', 'test', or 'production'"
            )
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("main_bundle_path", "hardware_model_identifier")
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank values (e.g. ``HARDWARE_MODEL_IDENTIFIER=``) as unset."""
        if v is None or v.strip() == "":
            return None
        return v.strip()


class TestSettings(Settings):
    __test__ = False  # Tell pytest this isn't a test class even though its name starts with "Test"

    # Load both files, with .env.test taking precedence
    model_config = SettingsConfigDict(
        env_file=[
            ".env",
            ".env.test",
        ],
        env_file_encoding="utf-8",
        extra="ignore",
    )


class DefaultSettings(Settings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


def _log_settings_overrides() -> dict:
    """
    Get environment variables that override values from the config files
    and log them. Sensitive values like passwords, secrets, and keys are masked.

    Returns:
        Dictionary of field names and their overridden values
    """
    field_names = list(Settings.model_fields.keys())

    overrides = {}
    for field in field_names:
        env_var_name = field.upper()
        if env_var_name in os.environ:
            overrides[field] = os.environ[env_var_name]

    if overrides:
        logger.info("Environment variables overriding config files:")
        for field, value in overrides.items():
            if any(
                sensitive in field for sensitive in ["password", "secret", "key", "dsn"]
            ):
                logger.info(f"  {field}: ********")
            else:
                logger.info(f"  {field}: {value}")

    return overrides


@lru_cache
def get_settings() -> Settings:
    """
    Returns the appropriate settings based on the environment.
    When TESTING is set, it returns TestSettings which loads both .env and .env.test,
    with .env.test values taking precedence.

    Also logs any environment variables that override values from the config files.
    """
    settings_class = TestSettings if os.getenv("TESTING") else DefaultSettings
    _log_settings_overrides()

    return settings_class()
