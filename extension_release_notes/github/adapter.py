"""GitHub client adapter for the githubkit library."""

from typing import Any, Self, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from extension_release_notes.configuration.models import GitHubSettings
from extension_release_notes.release_notes.models import PullRequest
from extension_release_notes.utils.constants import COMMITS_PAGE_SIZE, RECENT_PULL_REQUESTS_LIMIT
from extension_release_notes.utils.github import split_repository
from extension_release_notes.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client
from .exceptions import MalformedResponseError
from .queries import PULL_REQUEST_COMMITS_QUERY, SEARCH_PULL_REQUESTS_QUERY, SEARCH_RECENT_PULL_REQUESTS_QUERY
from .schemas import PullRequestCommitConnection, PullRequestCommitsResponse, SearchResponse

logger = structlog.get_logger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str, commits_page_size: int = COMMITS_PAGE_SIZE) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name
        self.commits_page_size = commits_page_size

    @classmethod
    def create(cls, repo: str, github_settings: GitHubSettings) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_settings: Credentials and API URL of the GitHub instance

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_settings.api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = get_github_client(github_settings)
        return cls(client, owner, repo_name)

    @retry_on_rate_limit()
    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its data."""
        return await self.client.async_graphql(query, variables)

    def _validate(self, model: type[ResponseModel], operation: str, data: Any) -> ResponseModel:
        """Validate a GraphQL response against its schema."""
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Malformed GitHub response", operation=operation, repo=self.repository, errors=exc.errors())
            raise MalformedResponseError(operation, exc.errors()) from exc

    async def get_pull_request_commits(self, pull_request_number: int, cursor: str | None = None) -> PullRequestCommitConnection:
        """Get one page of a pull request's commits, starting after the cursor."""
        logger.debug("Fetching pull request commits page", repo=self.repository, pull_request_number=pull_request_number, cursor=cursor)
        data = await self._graphql(
            PULL_REQUEST_COMMITS_QUERY,
            {
                "owner": self.owner,
                "name": self.repo_name,
                "number": pull_request_number,
                "pageSize": self.commits_page_size,
                "cursor": cursor,
            },
        )
        return self._validate(PullRequestCommitsResponse, "get_pull_request_commits", data).page

    async def search_pull_requests(self, query: str) -> list[PullRequest]:
        """Search pull requests matching a search query."""
        logger.debug("Searching pull requests", query=query)
        data = await self._graphql(SEARCH_PULL_REQUESTS_QUERY, {"query": query})
        return self._validate(SearchResponse, "search_pull_requests", data).pull_requests

    async def search_recent_pull_requests(self, query: str, limit: int = RECENT_PULL_REQUESTS_LIMIT) -> list[PullRequest]:
        """Search the most recent pull requests matching a search query."""
        logger.debug("Searching recent pull requests", query=query, limit=limit)
        data = await self._graphql(SEARCH_RECENT_PULL_REQUESTS_QUERY, {"query": query, "limit": limit})
        return self._validate(SearchResponse, "search_recent_pull_requests", data).pull_requests
