"""Semantic version coercion and version range resolution.

Release pull requests carry their version in free-text titles such as
"Release 1.2.3" or "Release 1.7.9.1". Versions are coerced the way npm's
semver coercion works: the first run of up to three dot-separated numbers is
taken, missing parts are zero-filled and anything after the patch part (a
fourth number or a pre-release tag) is dropped.

Ranges given by the caller may be missing either side. Missing sides are
derived from the candidate pull requests, which are expected newest first,
and offered to the user as defaults unless automatic filling is requested.
"""

from typing import Sequence

import structlog
from packaging.version import Version

from extension_release_notes.release_notes.exceptions import InvalidVersionError
from extension_release_notes.release_notes.models import Prompter, PullRequest, VersionRange
from extension_release_notes.utils.constants import SKIP_VERSION_ANSWER, VERSION_COERCE_PATTERN

logger = structlog.get_logger(__name__)


def coerce_version(raw: str | None) -> Version:
    """Coerce a loosely formatted string into a major.minor.patch version.

    Raises:
        InvalidVersionError: If the string holds no version number
    """
    if not raw:
        raise InvalidVersionError(raw)
    match = VERSION_COERCE_PATTERN.search(raw)
    if match is None:
        raise InvalidVersionError(raw)
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return Version(f"{major}.{minor}.{patch}")


def normalize_version(raw: str | None) -> str | None:
    """Normalize a loosely formatted string to 'major.minor.patch', or None."""
    try:
        return str(coerce_version(raw))
    except InvalidVersionError:
        return None


def is_valid_version_answer(answer: str) -> bool:
    """Whether a prompt answer is a version or a request to skip."""
    answer = answer.strip()
    return not answer or answer == SKIP_VERSION_ANSWER or normalize_version(answer) is not None


def is_range_resolved(version_range: VersionRange | None) -> bool:
    """Whether a range has both sides set, valid and in order."""
    if version_range is None or not version_range.is_complete:
        return False
    try:
        return coerce_version(version_range.start_version) <= coerce_version(version_range.end_version)
    except InvalidVersionError:
        return False


def find_last_valid_pull_request(pull_requests: Sequence[PullRequest] | None) -> PullRequest | None:
    """Find the first pull request, scanning forward, whose title holds a version."""
    if not pull_requests:
        logger.error("There are no pull requests to fetch version")
        return None
    return next((pr for pr in pull_requests if normalize_version(pr.title) is not None), None)


def find_first_valid_pull_request(pull_requests: Sequence[PullRequest] | None) -> PullRequest | None:
    """Find the first pull request, scanning backward, whose title holds a version.

    With pull requests listed newest first this is the earliest release.
    """
    return find_last_valid_pull_request(list(reversed(pull_requests or ())))


async def _select_version(
    label: str,
    message: str,
    boundary_pull_request: PullRequest | None,
    auto_versions: bool,
    prompter: Prompter | None,
) -> str | None:
    version = normalize_version(boundary_pull_request.title) if boundary_pull_request else None

    if not auto_versions:
        if prompter is None:
            raise ValueError("An interactive prompter is required when versions are not filled automatically.")
        answer = await prompter.prompt_text(message, default=version or "", validator=is_valid_version_answer)
        answer = answer.strip()
        if not answer or answer == SKIP_VERSION_ANSWER:
            logger.info(f"No {label} version, skipping extension.")
            return None
        version = answer

    if version is None:
        logger.info(f"No {label} version could be derived, skipping extension.")
        return None
    logger.info(f"{label.capitalize()} version selected", version=version)
    return version


async def select_start_version(
    pull_requests: Sequence[PullRequest] = (),
    auto_versions: bool = False,
    prompter: Prompter | None = None,
) -> str | None:
    """Select the earliest version to pull release notes from.

    The default is the version of the earliest valid release pull request.

    Returns:
        The chosen version, or None when the user skips or nothing can be derived
    """
    return await _select_version(
        "start",
        f"Starting version to pull release notes: [{SKIP_VERSION_ANSWER} to skip]",
        find_first_valid_pull_request(pull_requests) if pull_requests else None,
        auto_versions,
        prompter,
    )


async def select_end_version(
    pull_requests: Sequence[PullRequest] = (),
    auto_versions: bool = False,
    prompter: Prompter | None = None,
) -> str | None:
    """Select the last version to pull release notes from.

    The default is the version of the latest valid release pull request.

    Returns:
        The chosen version, or None when the user skips or nothing can be derived
    """
    return await _select_version(
        "end",
        f"Ending version to pull release notes: [{SKIP_VERSION_ANSWER} to skip]",
        find_last_valid_pull_request(pull_requests) if pull_requests else None,
        auto_versions,
        prompter,
    )


async def resolve_range(
    start_version: str | None,
    end_version: str | None,
    pull_requests: Sequence[PullRequest],
    auto_versions: bool = False,
    prompter: Prompter | None = None,
    symmetric: bool = False,
) -> VersionRange:
    """Make sure both sides of a version range are defined.

    A missing start is derived from the earliest valid release, a missing end
    from the latest one. When both are missing only the start is derived
    unless ``symmetric`` is set, so the resulting range stays unresolved and
    the repository is skipped.

    Args:
        start_version: Requested first version, may be missing
        end_version: Requested last version, may be missing
        pull_requests: Candidate release pull requests, newest first
        auto_versions: Use derived versions without prompting
        prompter: Asks the user to confirm or override derived versions
        symmetric: Derive both sides when both are missing

    Returns:
        The range; check it with ``is_range_resolved`` before use
    """
    if not start_version:
        start_version = await select_start_version(pull_requests, auto_versions, prompter)
        if symmetric and not end_version and start_version:
            end_version = await select_end_version(pull_requests, auto_versions, prompter)
    elif not end_version:
        end_version = await select_end_version(pull_requests, auto_versions, prompter)

    version_range = VersionRange(
        start_version=normalize_version(start_version),
        end_version=normalize_version(end_version),
    )
    if version_range.is_complete and not is_range_resolved(version_range):
        logger.warning("Start version is after end version", start_version=version_range.start_version, end_version=version_range.end_version)
    return version_range


def in_range(pull_request: PullRequest, version_range: VersionRange) -> bool:
    """Whether a pull request's title version lies within an inclusive range."""
    if not is_range_resolved(version_range):
        return False
    try:
        version = coerce_version(pull_request.title)
    except InvalidVersionError:
        return False
    return coerce_version(version_range.start_version) <= version <= coerce_version(version_range.end_version)


def filter_pull_requests(
    pull_requests: Sequence[PullRequest] | None,
    start_version: str | None,
    end_version: str | None,
) -> list[PullRequest]:
    """Filter pull requests down to those within the desired version range."""
    if pull_requests is None:
        logger.error("No pull request data to filter")
        return []
    if not start_version or not end_version:
        logger.error("One or both versions missing", start_version=start_version, end_version=end_version)
        return []

    version_range = VersionRange(start_version=start_version, end_version=end_version)
    return [pr for pr in pull_requests if in_range(pr, version_range)]
