"""Custom exceptions for release notes extraction."""

from typing import Any


class InvalidVersionError(ValueError):
    """Raised when a string cannot be coerced to a semantic version."""

    def __init__(self, raw: str | None) -> None:
        """Initializes the exception with the offending input."""
        super().__init__(f"No semantic version found in {raw!r}")
        self.raw = raw


class NoCandidatesError(Exception):
    """Raised when a repository has no merged release pull requests to extract from."""

    def __init__(self, repo_name: str) -> None:
        """Initializes the exception with the repository that returned nothing."""
        super().__init__(f"No merged release pull requests found for {repo_name}")
        self.repo_name = repo_name


class ExtensionRangesFileError(Exception):
    """Raised when errors are encountered while loading an extension ranges file."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Errors encountered while loading extension ranges.")
        self.errors = errors
