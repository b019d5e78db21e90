"""Base ABC for the GitHub query interface consumed by release notes extraction."""

from abc import ABC, abstractmethod

from extension_release_notes.github.schemas import PullRequestCommitConnection
from extension_release_notes.release_notes.models import PullRequest


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients bound to a single repository."""

    owner: str
    repo_name: str

    @property
    def repository(self) -> str:
        """The repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo_name}"

    @abstractmethod
    async def get_pull_request_commits(self, pull_request_number: int, cursor: str | None = None) -> PullRequestCommitConnection:
        """Get one page of a pull request's commits, starting after the cursor."""
        pass

    @abstractmethod
    async def search_pull_requests(self, query: str) -> list[PullRequest]:
        """Search pull requests matching a search query."""
        pass

    @abstractmethod
    async def search_recent_pull_requests(self, query: str, limit: int = 100) -> list[PullRequest]:
        """Search the most recent pull requests matching a search query."""
        pass
