"""Contains utility functions for GitHub interactions."""

import re

from extension_release_notes.utils.constants import DEFAULT_OWNER

REPOSITORY_NAME_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository name."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def qualify_repository(repo: str, default_owner: str = DEFAULT_OWNER) -> str:
    """Prefix a bare repository name with the default owner.

    'tao-core' becomes 'oat-sa/tao-core'; names that already carry an owner
    are returned unchanged.
    """
    repo = repo.strip().strip("/")
    if not repo:
        raise ValueError(f"Invalid repository name: '{repo}'")
    if "/" not in repo:
        repo = f"{default_owner}/{repo}"
    if not REPOSITORY_NAME_PATTERN.match(repo):
        raise ValueError(f"Repository must be in the format 'owner/repo', got '{repo}'")
    return repo


def build_pull_request_search_query(owner: str, repo_name: str, base_branch: str, terms: list[str] | None = None) -> str:
    """Build a search query for merged pull requests against a base branch.

    Example:
        >>> build_pull_request_search_query("oat-sa", "tao-core", "develop", ["1a2b3c4d"])
        '1a2b3c4d repo:oat-sa/tao-core type:pr base:develop is:merged'
    """
    qualifiers = f"repo:{owner}/{repo_name} type:pr base:{base_branch} is:merged"
    if terms:
        return f"{' '.join(terms)} {qualifiers}"
    return qualifiers


def repository_slug(repo: str) -> str:
    """File-system friendly form of a repository name ('owner/repo' -> 'owner_repo')."""
    return repo.replace("/", "_")
