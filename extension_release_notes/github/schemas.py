"""Pydantic schemas for the GraphQL responses consumed by release notes extraction.

Responses are validated here so that the rest of the application never
deep-accesses nested dictionaries that might be missing.
"""

from pydantic import BaseModel, ConfigDict, Field

from extension_release_notes.release_notes.models import PullRequest


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PageInfo(_GraphQLModel):
    """Cursor pagination information of a GraphQL connection."""

    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class GitObjectRef(_GraphQLModel):
    """A git object referenced by its object id."""

    oid: str


class PullRequestCommitNode(_GraphQLModel):
    """One entry of a pull request's commit list."""

    commit: GitObjectRef


class PullRequestCommitConnection(_GraphQLModel):
    """One page of a pull request's commits."""

    nodes: list[PullRequestCommitNode]
    page_info: PageInfo = Field(alias="pageInfo")


class _PullRequestWithCommits(_GraphQLModel):
    commits: PullRequestCommitConnection


class _RepositoryWithPullRequest(_GraphQLModel):
    pull_request: _PullRequestWithCommits = Field(alias="pullRequest")


class PullRequestCommitsResponse(_GraphQLModel):
    """Response of the pull request commits query."""

    repository: _RepositoryWithPullRequest

    @property
    def page(self) -> PullRequestCommitConnection:
        """The commit page contained in the response."""
        return self.repository.pull_request.commits


class PullRequestNode(_GraphQLModel):
    """A node of a search result.

    Search results are a union of issues and pull requests. Nodes that are not
    pull requests come back as empty objects, leaving every field unset.
    """

    number: int | None = None
    title: str = ""
    body: str | None = None
    url: str | None = None
    head_ref_name: str | None = Field(default=None, alias="headRefName")
    merge_commit: GitObjectRef | None = Field(default=None, alias="mergeCommit")

    def to_pull_request(self) -> PullRequest:
        """Convert the node to the application's pull request model."""
        return PullRequest(
            number=self.number,
            title=self.title,
            body=self.body,
            branch=self.head_ref_name,
            url=self.url,
            merge_commit=self.merge_commit.oid if self.merge_commit else None,
        )


class _SearchConnection(_GraphQLModel):
    nodes: list[PullRequestNode]


class SearchResponse(_GraphQLModel):
    """Response of a pull request search query."""

    search: _SearchConnection

    @property
    def pull_requests(self) -> list[PullRequest]:
        """Pull requests contained in the search result, in result order."""
        return [node.to_pull_request() for node in self.search.nodes if node.number is not None]
