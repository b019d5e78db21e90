"""Loads the list of repositories and version ranges to extract notes for.

The file is YAML with a top-level ``extensions`` list::

    extensions:
      - repo: oat-sa/tao-core
        start_version: 41.0.0
        end_version: 41.6.2
      - repo: extension-tao-item
        start_version: ^10.0.0
"""

from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml.error import YAMLError

from extension_release_notes.release_notes.exceptions import ExtensionRangesFileError
from extension_release_notes.release_notes.models import ExtensionRange
from extension_release_notes.utils.yaml import load_yaml_file

logger = structlog.get_logger(__name__)


class ExtensionRangeEntry(BaseModel):
    """One entry of the ranges file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    repo: str = Field(min_length=1)
    start_version: str | None = None
    end_version: str | None = None

    @field_validator("start_version", "end_version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        # YAML reads unquoted 1.10 as the float 1.1, losing digits.
        if isinstance(value, float):
            raise ValueError(f"version {value!r} was read as a number, quote it in the ranges file (for example '1.10')")
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_extension_range(self) -> ExtensionRange:
        """Convert the entry to an extension range."""
        return ExtensionRange(repo_name=self.repo, start_version=self.start_version, end_version=self.end_version)


def load_extension_ranges(path: Path) -> list[ExtensionRange]:
    """Load and validate extension ranges from a YAML file.

    Raises:
        ExtensionRangesFileError: With every problem found in the file
    """
    try:
        data = load_yaml_file(path)
    except (OSError, YAMLError) as exc:
        logger.error("Failed to parse extension ranges file", path=str(path), error=str(exc))
        raise ExtensionRangesFileError([{"file": str(path), "error": str(exc)}]) from exc

    if not isinstance(data, dict) or "extensions" not in data:
        logger.error("Extension ranges file missing top-level 'extensions' key", path=str(path))
        raise ExtensionRangesFileError([{"file": str(path), "error": "Missing top-level 'extensions' key"}])

    entries = data["extensions"] or []
    if not isinstance(entries, list):
        raise ExtensionRangesFileError([{"file": str(path), "error": "'extensions' must be a list"}])

    errors: list[dict[str, Any]] = []
    extension_ranges: list[ExtensionRange] = []
    for index, entry in enumerate(entries):
        try:
            extension_ranges.append(ExtensionRangeEntry.model_validate(entry).to_extension_range())
        except ValidationError as exc:
            logger.error("Validation error for extension range", path=str(path), index=index, error=exc.errors())
            errors.append({"file": str(path), "index": index, "error": exc.errors()})

    if errors:
        raise ExtensionRangesFileError(errors)

    logger.info("Loaded extension ranges", path=str(path), count=len(extension_ranges))
    return extension_ranges
