"""Unit tests for the GitHubKitAdapter class and its GraphQL queries."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pytest import MonkeyPatch

from extension_release_notes.configuration.models import GitHubAuthenticationType, GitHubSettings
from extension_release_notes.github.adapter import GitHubKitAdapter
from extension_release_notes.github.exceptions import MalformedResponseError
from extension_release_notes.github.queries import (
    PULL_REQUEST_COMMITS_QUERY,
    SEARCH_PULL_REQUESTS_QUERY,
    SEARCH_RECENT_PULL_REQUESTS_QUERY,
)
from extension_release_notes.release_notes.models import PullRequest

SEARCH_DATA = {
    "search": {
        "nodes": [
            {
                "number": 12,
                "title": "Feature/TAO-1 new thing",
                "body": "Adds a thing",
                "url": "https://github.com/oat-sa/tao-core/pull/12",
                "headRefName": "feature/TAO-1_new-thing",
                "mergeCommit": {"oid": "0123456789abcdef"},
            },
            {},
            {"number": 11, "title": "Release 1.0.0", "headRefName": "release-1.0.0", "mergeCommit": None},
        ]
    }
}


def make_adapter(data: object) -> GitHubKitAdapter:
    """Build an adapter whose GraphQL calls return ``data``."""
    adapter = GitHubKitAdapter(MagicMock(), "oat-sa", "tao-core")
    adapter.client.async_graphql = AsyncMock(return_value=data)
    return adapter


@pytest.mark.asyncio
async def test_get_pull_request_commits() -> None:
    """A page of commits is parsed with its pagination information."""
    adapter = make_adapter(
        {
            "repository": {
                "pullRequest": {
                    "commits": {
                        "nodes": [{"commit": {"oid": "aaaaaaaa1111"}}, {"commit": {"oid": "bbbbbbbb2222"}}],
                        "pageInfo": {"hasNextPage": True, "endCursor": "Y3Vyc29y"},
                    }
                }
            }
        }
    )

    page = await adapter.get_pull_request_commits(42, cursor="abc")

    assert [node.commit.oid for node in page.nodes] == ["aaaaaaaa1111", "bbbbbbbb2222"]
    assert page.page_info.has_next_page is True
    assert page.page_info.end_cursor == "Y3Vyc29y"
    adapter.client.async_graphql.assert_awaited_once_with(
        PULL_REQUEST_COMMITS_QUERY,
        {"owner": "oat-sa", "name": "tao-core", "number": 42, "pageSize": 100, "cursor": "abc"},
    )


@pytest.mark.asyncio
async def test_search_pull_requests() -> None:
    """Search results become pull requests; non pull request nodes are skipped."""
    adapter = make_adapter(SEARCH_DATA)

    pull_requests = await adapter.search_pull_requests("abc repo:oat-sa/tao-core")

    assert pull_requests == [
        PullRequest(
            number=12,
            title="Feature/TAO-1 new thing",
            body="Adds a thing",
            branch="feature/TAO-1_new-thing",
            url="https://github.com/oat-sa/tao-core/pull/12",
            merge_commit="0123456789abcdef",
        ),
        PullRequest(number=11, title="Release 1.0.0", branch="release-1.0.0"),
    ]
    adapter.client.async_graphql.assert_awaited_once_with(SEARCH_PULL_REQUESTS_QUERY, {"query": "abc repo:oat-sa/tao-core"})


@pytest.mark.asyncio
async def test_search_recent_pull_requests() -> None:
    """The limit is passed to the query."""
    adapter = make_adapter(SEARCH_DATA)

    pull_requests = await adapter.search_recent_pull_requests("repo:oat-sa/tao-core", limit=20)

    assert [pr.number for pr in pull_requests] == [12, 11]
    adapter.client.async_graphql.assert_awaited_once_with(SEARCH_RECENT_PULL_REQUESTS_QUERY, {"query": "repo:oat-sa/tao-core", "limit": 20})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        {},
        {"repository": None},
        {"repository": {"pullRequest": {"commits": {"nodes": [{"commit": {}}], "pageInfo": {"hasNextPage": False}}}}},
    ],
)
async def test_malformed_commits_response(data: object) -> None:
    """Responses missing expected fields raise a dedicated error."""
    adapter = make_adapter(data)
    with pytest.raises(MalformedResponseError) as exc_info:
        await adapter.get_pull_request_commits(42)
    assert exc_info.value.operation == "get_pull_request_commits"


@pytest.mark.asyncio
async def test_malformed_search_response() -> None:
    """A search response without nodes is malformed."""
    adapter = make_adapter({"search": {}})
    with pytest.raises(MalformedResponseError):
        await adapter.search_pull_requests("query")


@pytest.mark.asyncio
async def test_transport_errors_propagate() -> None:
    """Errors raised by the client are not swallowed."""
    adapter = GitHubKitAdapter(MagicMock(), "oat-sa", "tao-core")
    adapter.client.async_graphql = AsyncMock(side_effect=RuntimeError("connection reset"))
    with pytest.raises(RuntimeError, match="connection reset"):
        await adapter.search_pull_requests("query")


def test_repository() -> None:
    """The adapter exposes its repository in 'owner/repo' format."""
    assert GitHubKitAdapter(MagicMock(), "oat-sa", "tao-core").repository == "oat-sa/tao-core"


def test_create(monkeypatch: MonkeyPatch) -> None:
    """create builds an authenticated client bound to the repository."""
    client = MagicMock()
    get_github_client = MagicMock(return_value=client)
    monkeypatch.setattr("extension_release_notes.github.adapter.get_github_client", get_github_client)
    settings = GitHubSettings(auth_type=GitHubAuthenticationType.PAT, pat_token="token")

    adapter = GitHubKitAdapter.create("oat-sa/tao-core", settings)

    get_github_client.assert_called_once_with(settings)
    assert adapter.client is client
    assert (adapter.owner, adapter.repo_name) == ("oat-sa", "tao-core")


def test_create_invalid_repository() -> None:
    """Repositories must be given as 'owner/repo'."""
    with pytest.raises(ValueError):
        GitHubKitAdapter.create("tao-core", GitHubSettings(auth_type=GitHubAuthenticationType.PAT, pat_token="token"))
