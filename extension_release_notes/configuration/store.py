"""Persists configuration, such as the GitHub token, between runs."""

from pathlib import Path

import structlog
import typer
from pydantic import BaseModel, ValidationError

from extension_release_notes.configuration.exceptions import ConfigurationStoreError

logger = structlog.get_logger(__name__)

APP_NAME = "extension-release-notes"
CONFIG_FILENAME = "config.json"


class StoredConfig(BaseModel):
    """Content of the persisted configuration file."""

    token: str | None = None


def default_config_path() -> Path:
    """Location of the configuration file in the user's application directory."""
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def load_stored_config(path: Path | None = None) -> StoredConfig:
    """Load the persisted configuration, or an empty one when none exists yet."""
    path = path or default_config_path()
    if not path.exists():
        logger.debug("No stored configuration found", path=str(path))
        return StoredConfig()
    try:
        return StoredConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise ConfigurationStoreError(f"Failed to read configuration from {path}: {exc}") from exc


def write_stored_config(config: StoredConfig, path: Path | None = None) -> Path:
    """Persist the configuration and return the file it was written to."""
    path = path or default_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise ConfigurationStoreError(f"Failed to write configuration to {path}: {exc}") from exc
    logger.info("Stored configuration", path=str(path))
    return path
