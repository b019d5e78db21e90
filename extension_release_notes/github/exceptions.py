"""Contains exceptions raised at the GitHub API boundary."""

from typing import Any


class MalformedResponseError(Exception):
    """Raised when a GitHub API response does not have the expected shape."""

    def __init__(self, operation: str, errors: list[Any]) -> None:
        """Initializes the exception with the failing operation and validation errors."""
        super().__init__(f"Malformed GitHub response for {operation}: {errors}")
        self.operation = operation
        self.errors = errors
