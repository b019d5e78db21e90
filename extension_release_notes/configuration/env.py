"""Pydantic Settings model for application configuration.

GitHub credentials are read by the CLI options themselves (``envvar=``), so
only the settings without a command line option live here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from extension_release_notes.utils.constants import DEFAULT_OWNER, DEVELOPMENT_BRANCH, RELEASE_BRANCH


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Repository conventions
    DEFAULT_OWNER: str = DEFAULT_OWNER
    RELEASE_BRANCH: str = RELEASE_BRANCH
    DEVELOPMENT_BRANCH: str = DEVELOPMENT_BRANCH
