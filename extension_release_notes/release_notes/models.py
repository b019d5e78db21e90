"""Data models for release notes extraction."""

from enum import Enum
from typing import Callable, Protocol

from pydantic import BaseModel, ConfigDict


class PullRequest(BaseModel):
    """A merged pull request as returned by the GitHub search API."""

    model_config = ConfigDict(frozen=True)

    number: int | None = None
    title: str = ""
    body: str | None = None
    branch: str | None = None
    url: str | None = None
    merge_commit: str | None = None


class VersionRange(BaseModel):
    """Inclusive range of versions to extract release notes for.

    Either side may be unset while the range is being resolved. A range is
    only usable once both sides are set and ordered.
    """

    model_config = ConfigDict(frozen=True)

    start_version: str | None = None
    end_version: str | None = None

    @property
    def is_complete(self) -> bool:
        """Whether both versions are set."""
        return bool(self.start_version and self.end_version)


class ReleaseNote(BaseModel):
    """Formatted notes of one release pull request."""

    model_config = ConfigDict(frozen=True)

    version: str
    text: str


class ExtensionRange(BaseModel):
    """A repository and the versions to extract release notes between."""

    model_config = ConfigDict(frozen=True)

    repo_name: str
    start_version: str | None = None
    end_version: str | None = None


class PipelineStage(str, Enum):
    """Stages of a single repository extraction."""

    START = "start"
    FETCH_CANDIDATES = "fetch_candidates"
    RESOLVE_RANGE = "resolve_range"
    FILTER_BY_RANGE = "filter_by_range"
    EXTRACT_NOTES = "extract_notes"
    DONE = "done"


class PipelineState(BaseModel):
    """State of one extraction run, replaced (never mutated) by every stage."""

    model_config = ConfigDict(frozen=True)

    extension_range: ExtensionRange
    stage: PipelineStage = PipelineStage.START
    candidates: tuple[PullRequest, ...] = ()
    version_range: VersionRange | None = None
    selected: tuple[PullRequest, ...] = ()
    release_notes: tuple[ReleaseNote, ...] = ()


class ReleaseNotesStatus(str, Enum):
    """Outcome of release notes extraction for one repository."""

    SUCCESS = "success"
    NO_CONTENT = "no_content"
    UNRESOLVED_RANGE = "unresolved_range"
    NO_CANDIDATES = "no_candidates"
    ERROR = "error"


class ReleaseNotesResult(BaseModel):
    """Result of release notes extraction for one repository."""

    repo_name: str
    status: ReleaseNotesStatus
    version_range: VersionRange | None = None
    release_notes: list[ReleaseNote] = []
    output_path: str | None = None
    error: str | None = None


class Prompter(Protocol):
    """Protocol for asking the user for a value interactively."""

    async def prompt_text(self, message: str, default: str = "", validator: Callable[[str], bool] | None = None) -> str:
        """Ask for a line of text.

        Args:
            message: Question shown to the user
            default: Value used when the user just presses enter
            validator: Optional check, the question is repeated until it passes

        Returns:
            The answer, stripped of surrounding whitespace
        """
        ...

