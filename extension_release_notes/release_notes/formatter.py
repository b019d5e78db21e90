"""Formats pull request metadata into one-line release notes."""

import re

from extension_release_notes.release_notes.models import PullRequest
from extension_release_notes.utils.constants import CHANGE_TYPE_PATTERN, ISSUE_ID_PATTERN

WHITESPACE_RUN_PATTERN = re.compile(r"\s\s+")


def extract_change_type(pull_request: PullRequest) -> str | None:
    """Classify a pull request as a fix, feature or breaking change.

    The branch name is checked before the title; the first match wins.

    Returns:
        The change type with an upper-cased first letter (e.g. 'Fix'), or None
    """
    for candidate in (pull_request.branch, pull_request.title):
        if not candidate:
            continue
        match = CHANGE_TYPE_PATTERN.search(candidate)
        if match:
            change_type = match.group(0).strip()
            return change_type[:1].upper() + change_type[1:].lower()
    return None


def clean_title(title: str) -> str:
    """Strip the change type, issue identifier and slashes from a title."""
    title = CHANGE_TYPE_PATTERN.sub("", title, count=1)
    title = ISSUE_ID_PATTERN.sub("", title, count=1)
    title = title.replace("/", "")
    return WHITESPACE_RUN_PATTERN.sub(" ", title).strip()


def format_release_note(pull_request: PullRequest | None = None) -> str:
    """Format a pull request into a single release note line.

    Example:
        >>> format_release_note(PullRequest(title="Feature/tao 9986 brain UI", branch="feature/TAO-9986_brain-UI"))
        'Feature: brain UI'

    Args:
        pull_request: The pull request to describe, may be None

    Returns:
        The release note, or an empty string when there is nothing to describe
    """
    if pull_request is None:
        return ""

    note: list[str] = []
    change_type = extract_change_type(pull_request)
    if change_type:
        note.append(f"{change_type}: ")
    if pull_request.title:
        note.append(clean_title(pull_request.title))
    return "".join(note)
