"""Utility modules for shared functionality."""

from .constants import (
    CHANGE_TYPE_PATTERN,
    COMMIT_SEARCH_CHUNK_SIZE,
    DEFAULT_OWNER,
    DEVELOPMENT_BRANCH,
    ISSUE_ID_PATTERN,
    RELEASE_BRANCH,
    SHORT_SHA_LENGTH,
    VERSION_COERCE_PATTERN,
)
from .retry import retry_on_rate_limit

__all__ = [
    "CHANGE_TYPE_PATTERN",
    "COMMIT_SEARCH_CHUNK_SIZE",
    "DEFAULT_OWNER",
    "DEVELOPMENT_BRANCH",
    "ISSUE_ID_PATTERN",
    "RELEASE_BRANCH",
    "SHORT_SHA_LENGTH",
    "VERSION_COERCE_PATTERN",
    "retry_on_rate_limit",
]
