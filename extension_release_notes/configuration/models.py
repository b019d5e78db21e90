"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from extension_release_notes.utils.constants import (
    DEFAULT_EXTRACTION_CONCURRENCY,
    DEFAULT_OWNER,
    DEVELOPMENT_BRANCH,
    RECENT_PULL_REQUESTS_LIMIT,
    RELEASE_BRANCH,
)


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


class OutputFormat(str, Enum):
    """Formats changelogs can be written in."""

    MARKDOWN = "md"
    CSV = "csv"


@dataclass(frozen=True)
class GitHubSettings:
    """Credentials and endpoint used to build a GitHub client."""

    auth_type: GitHubAuthenticationType
    api_url: str = "https://api.github.com"
    pat_token: str | None = None
    app_id: int | None = None
    app_private_key_path: Path | None = None
    app_installation_id: int | None = None


@dataclass(frozen=True)
class ExtractionConfig:
    """Behaviour of release notes extraction shared by every repository of a run."""

    auto_versions: bool = False
    symmetric_versions: bool = False
    default_owner: str = DEFAULT_OWNER
    release_branch: str = RELEASE_BRANCH
    development_branch: str = DEVELOPMENT_BRANCH
    candidate_limit: int = RECENT_PULL_REQUESTS_LIMIT
    concurrency: int = DEFAULT_EXTRACTION_CONCURRENCY
