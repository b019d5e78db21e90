"""Shared constants used across the application."""

import re

# Search Constants
# ----------------

DEFAULT_OWNER = "oat-sa"
"""Owner prepended to repository names given without one (e.g. 'tao-core')."""

RELEASE_BRANCH = "master"
"""Base branch that release pull requests are merged into."""

DEVELOPMENT_BRANCH = "develop"
"""Base branch that inner pull requests are merged into."""

RECENT_PULL_REQUESTS_LIMIT = 100
"""Number of merged release pull requests fetched as range candidates."""

COMMITS_PAGE_SIZE = 100
"""Number of commits requested per GraphQL page."""

SHORT_SHA_LENGTH = 8
"""Length of the abbreviated commit identifiers used in search queries."""

COMMIT_SEARCH_CHUNK_SIZE = 28
"""Commit identifiers per search query, keeps queries under GitHub's term limit."""

DEFAULT_EXTRACTION_CONCURRENCY = 8
"""Upper bound of release pull requests walked at the same time."""

GITHUB_TOKEN_PATTERN = re.compile(r"[a-z0-9]{32,48}", re.IGNORECASE)
"""Pattern a GitHub token typed in at the prompt must contain."""

# Versioning Constants
# --------------------

VERSION_COERCE_PATTERN = re.compile(r"(?<!\d)(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?!\d)")
"""Pattern to find the first major[.minor[.patch]] run inside free text."""

SKIP_VERSION_ANSWER = "s"
"""Answer to a version prompt that skips the repository."""

# Release Note Formatting Constants
# ---------------------------------

CHANGE_TYPE_PATTERN = re.compile(r"(fix|feature|breaking)", re.IGNORECASE)
"""Pattern to classify a change from its branch name or title."""

ISSUE_ID_PATTERN = re.compile(r"[A-Z]{2,6}[- ][0-9]{1,6}", re.IGNORECASE)
"""Pattern to match issue tracker identifiers such as TAO-1234 or 'tao 1234'."""

NOTE_BULLET_PREFIX = " - "
"""Prefix of every line in an extracted release note block."""

# Output Constants
# ----------------

RELEASE_NOTES_FILE_SUFFIX = "_release_notes"
"""Suffix appended to the repository slug in changelog file names."""

COMBINED_NOTES_FILENAME = "all_notes.md"
"""Name of the file joining every Markdown changelog of a run."""

CSV_HEADER = ("repo", "version", "release notes")
"""Header row of CSV changelogs."""
