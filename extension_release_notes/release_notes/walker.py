"""Recovers the inner pull requests bundled by a release pull request.

A release pull request merges the development branch into the release
branch. Its commit list therefore contains the merge commits of every
pull request that landed on the development branch since the previous
release. Those merge commits are looked up with the search API to find the
inner pull requests, whose titles become the release notes.
"""

import structlog

from extension_release_notes.github.abc import GitHubClientBase
from extension_release_notes.release_notes.formatter import format_release_note
from extension_release_notes.release_notes.models import PullRequest
from extension_release_notes.utils.constants import (
    COMMIT_SEARCH_CHUNK_SIZE,
    DEVELOPMENT_BRANCH,
    NOTE_BULLET_PREFIX,
    SHORT_SHA_LENGTH,
)
from extension_release_notes.utils.github import build_pull_request_search_query

logger = structlog.get_logger(__name__)


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split a list into consecutive chunks of at most ``size`` items."""
    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    return [items[i : i + size] for i in range(0, len(items), size)]


def deduplicate_pull_requests(pull_requests: list[PullRequest]) -> list[PullRequest]:
    """Remove pull requests with an already seen number, keeping the first occurrence."""
    seen: set[int | None] = set()
    unique: list[PullRequest] = []
    for pull_request in pull_requests:
        if pull_request.number in seen:
            continue
        seen.add(pull_request.number)
        unique.append(pull_request)
    return unique


def join_release_notes(notes: list[str]) -> str:
    """Join release note lines into one bulleted block, skipping empty notes."""
    return "".join(f"{NOTE_BULLET_PREFIX}{note}\n" for note in notes if note)


class CommitGraphWalker:
    """Walks a release pull request's commits to extract its release notes."""

    def __init__(
        self,
        client: GitHubClientBase,
        base_branch: str = DEVELOPMENT_BRANCH,
        chunk_size: int = COMMIT_SEARCH_CHUNK_SIZE,
    ) -> None:
        """Initialize with a GitHub client bound to the repository to walk.

        Args:
            client: Query interface for the repository
            base_branch: Branch the inner pull requests were merged into
            chunk_size: Number of commit identifiers per search query
        """
        self.client = client
        self.base_branch = base_branch
        self.chunk_size = chunk_size

    async def get_commit_shas(self, pull_request_number: int) -> list[str]:
        """Get the short SHAs of every commit of a pull request, in commit order."""
        shas: list[str] = []
        cursor: str | None = None
        pages = 0
        while True:
            page = await self.client.get_pull_request_commits(pull_request_number, cursor)
            pages += 1
            shas.extend(node.commit.oid[:SHORT_SHA_LENGTH] for node in page.nodes)
            if not page.page_info.has_next_page:
                break
            cursor = page.page_info.end_cursor

        logger.debug("Fetched pull request commits", pull_request_number=pull_request_number, pages=pages, commits=len(shas))
        return shas

    async def find_inner_pull_requests(self, pull_request_number: int) -> list[PullRequest]:
        """Find the distinct pull requests whose merge commits belong to a release pull request."""
        shas = await self.get_commit_shas(pull_request_number)

        found: list[PullRequest] = []
        for chunk in chunked(shas, self.chunk_size):
            query = build_pull_request_search_query(self.client.owner, self.client.repo_name, self.base_branch, chunk)
            found.extend(await self.client.search_pull_requests(query))

        inner_pull_requests = deduplicate_pull_requests(found)
        logger.debug(
            "Found inner pull requests",
            pull_request_number=pull_request_number,
            commits=len(shas),
            matches=len(found),
            inner_pull_requests=len(inner_pull_requests),
        )
        return inner_pull_requests

    async def extract_release_notes(self, pull_request_number: int) -> str:
        """Extract the release notes of a release pull request.

        Returns:
            One ' - <note>' line per inner pull request, or an empty string
        """
        inner_pull_requests = await self.find_inner_pull_requests(pull_request_number)
        return join_release_notes([format_release_note(pr) for pr in inner_pull_requests])
