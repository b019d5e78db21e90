"""Unit tests for the single and multiple repository workflows."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from extension_release_notes.configuration.models import ExtractionConfig
from extension_release_notes.release_notes.driver import (
    extract_repository_release_notes,
    run_release_notes_workflow,
    run_single_repository_workflow,
)
from extension_release_notes.release_notes.exceptions import NoCandidatesError
from extension_release_notes.release_notes.models import (
    ExtensionRange,
    PullRequest,
    ReleaseNote,
    ReleaseNotesStatus,
    VersionRange,
)
from tests.unit.fakes import FakeGitHubClient, commit_page

AUTO_CONFIG = ExtractionConfig(auto_versions=True)


def client_with_release(repo: str, titles: list[str] | None = None) -> FakeGitHubClient:
    """Build a fake client whose release pull requests each bundle one inner pull request."""
    owner, repo_name = repo.split("/")
    client = FakeGitHubClient(owner, repo_name)
    for index, title in enumerate(titles or []):
        number = 100 - index
        sha = f"{number:08x}"
        client.recent_pull_requests.append(PullRequest(number=number, title=title))
        client.commit_pages[number] = [commit_page([sha + "0" * 32])]
        client.search_results[sha] = [PullRequest(number=number * 10, title=f"fix change #{number}")]
    return client


class TestExtractRepositoryReleaseNotes:
    """Tests for the outcome of one repository's extraction."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        """Notes within the range are returned with a success status."""
        client = client_with_release("oat-sa/tao-core", ["Release 2.0.0", "Release 1.0.0"])
        extension_range = ExtensionRange(repo_name="oat-sa/tao-core", start_version="1.0.0", end_version="2.0.0")

        result = await extract_repository_release_notes(extension_range, client, AUTO_CONFIG)

        assert result.status == ReleaseNotesStatus.SUCCESS
        assert result.version_range == VersionRange(start_version="1.0.0", end_version="2.0.0")
        assert result.release_notes == [
            ReleaseNote(version="2.0.0", text=" - Fix: change #100\n"),
            ReleaseNote(version="1.0.0", text=" - Fix: change #99\n"),
        ]

    @pytest.mark.asyncio
    async def test_no_content(self) -> None:
        """A resolved range without releases has no content."""
        client = client_with_release("oat-sa/tao-core", ["Release 2.0.0"])
        extension_range = ExtensionRange(repo_name="oat-sa/tao-core", start_version="3.0.0", end_version="4.0.0")

        result = await extract_repository_release_notes(extension_range, client, AUTO_CONFIG)

        assert result.status == ReleaseNotesStatus.NO_CONTENT
        assert result.release_notes == []

    @pytest.mark.asyncio
    async def test_unresolved_range(self) -> None:
        """A range that cannot be resolved is reported as such."""
        client = client_with_release("oat-sa/tao-core", ["Release 2.0.0"])

        result = await extract_repository_release_notes(ExtensionRange(repo_name="oat-sa/tao-core"), client, AUTO_CONFIG)

        assert result.status == ReleaseNotesStatus.UNRESOLVED_RANGE


class TestSingleRepositoryWorkflow:
    """Tests for extracting notes of one repository."""

    @pytest.mark.asyncio
    async def test_bare_name_gets_default_owner(self) -> None:
        """A repository without owner is looked up under the default owner."""
        client = client_with_release("oat-sa/extension-tao-item", ["Release 1.0.0"])
        client_factory = MagicMock(return_value=client)

        result = await run_single_repository_workflow(
            "extension-tao-item", client_factory, AUTO_CONFIG, start_version="1.0.0", end_version="1.0.0"
        )

        client_factory.assert_called_once_with("oat-sa/extension-tao-item")
        assert result.repo_name == "oat-sa/extension-tao-item"
        assert result.status == ReleaseNotesStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_no_candidates_is_fatal(self) -> None:
        """A repository without release pull requests raises."""
        client_factory = MagicMock(return_value=client_with_release("oat-sa/empty"))
        with pytest.raises(NoCandidatesError):
            await run_single_repository_workflow("oat-sa/empty", client_factory, AUTO_CONFIG)

    @pytest.mark.asyncio
    async def test_invalid_repository(self) -> None:
        """Malformed repository names are rejected before any client is built."""
        client_factory = MagicMock()
        with pytest.raises(ValueError):
            await run_single_repository_workflow("a/b/c", client_factory, AUTO_CONFIG)
        client_factory.assert_not_called()


class TestReleaseNotesWorkflow:
    """Tests for extracting notes of many repositories."""

    @pytest.mark.asyncio
    async def test_every_repository_is_processed(self) -> None:
        """Failures are recorded per repository and processing continues."""
        clients = {
            "oat-sa/tao-core": client_with_release("oat-sa/tao-core", ["Release 41.1.0", "Release 41.0.0"]),
            "oat-sa/empty": client_with_release("oat-sa/empty"),
            "oat-sa/broken": client_with_release("oat-sa/broken", ["Release 1.0.0"]),
            "oat-sa/unresolved": client_with_release("oat-sa/unresolved", ["Release 1.0.0"]),
        }
        clients["oat-sa/broken"].search_recent_pull_requests = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        client_factory = MagicMock(side_effect=lambda repo: clients[repo])
        extension_ranges = [
            ExtensionRange(repo_name="tao-core", start_version="41.0.0", end_version="41.1.0"),
            ExtensionRange(repo_name="empty", start_version="1.0.0", end_version="2.0.0"),
            ExtensionRange(repo_name="oat-sa/broken", start_version="1.0.0", end_version="2.0.0"),
            ExtensionRange(repo_name="oat-sa/unresolved"),
        ]

        results = await run_release_notes_workflow(extension_ranges, client_factory, AUTO_CONFIG)

        assert [(result.repo_name, result.status) for result in results] == [
            ("oat-sa/tao-core", ReleaseNotesStatus.SUCCESS),
            ("oat-sa/empty", ReleaseNotesStatus.NO_CANDIDATES),
            ("oat-sa/broken", ReleaseNotesStatus.ERROR),
            ("oat-sa/unresolved", ReleaseNotesStatus.UNRESOLVED_RANGE),
        ]
        assert len(results[0].release_notes) == 2
        assert results[2].error == "boom"
        assert client_factory.call_count == 4

    @pytest.mark.asyncio
    async def test_invalid_repository_is_recorded(self) -> None:
        """An invalid repository name is an error of that repository only."""
        client_factory = MagicMock(return_value=client_with_release("oat-sa/tao-core", ["Release 1.0.0"]))
        extension_ranges = [
            ExtensionRange(repo_name="a/b/c"),
            ExtensionRange(repo_name="tao-core", start_version="1.0.0", end_version="1.0.0"),
        ]

        results = await run_release_notes_workflow(extension_ranges, client_factory, AUTO_CONFIG)

        assert [result.status for result in results] == [ReleaseNotesStatus.ERROR, ReleaseNotesStatus.SUCCESS]
