"""Release notes extraction module."""

from .models import (
    ExtensionRange,
    Prompter,
    PullRequest,
    ReleaseNote,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    VersionRange,
)
from .exceptions import ExtensionRangesFileError, InvalidVersionError, NoCandidatesError
from .formatter import format_release_note
from .ranges import load_extension_ranges
from .versioning import coerce_version, filter_pull_requests, normalize_version, resolve_range
from .writer import concatenate_changelogs, write_changelog

__all__ = [
    "ExtensionRange",
    "Prompter",
    "PullRequest",
    "ReleaseNote",
    "ReleaseNotesResult",
    "ReleaseNotesStatus",
    "VersionRange",
    "ExtensionRangesFileError",
    "InvalidVersionError",
    "NoCandidatesError",
    "format_release_note",
    "load_extension_ranges",
    "coerce_version",
    "filter_pull_requests",
    "normalize_version",
    "resolve_range",
    "concatenate_changelogs",
    "write_changelog",
]
