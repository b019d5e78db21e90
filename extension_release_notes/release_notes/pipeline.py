"""Release notes extraction pipeline for a single repository.

The pipeline moves through fixed stages::

    start -> fetch_candidates -> resolve_range -> filter_by_range -> extract_notes -> done

Each stage receives the previous ``PipelineState`` and returns a new one. An
unresolved version range short-circuits to ``done`` with no notes. A
repository without candidate pull requests raises ``NoCandidatesError``.
"""

import asyncio
from typing import Sequence

import structlog

from extension_release_notes.configuration.models import ExtractionConfig
from extension_release_notes.github.abc import GitHubClientBase
from extension_release_notes.github.exceptions import MalformedResponseError
from extension_release_notes.release_notes.exceptions import NoCandidatesError
from extension_release_notes.release_notes.models import (
    ExtensionRange,
    PipelineStage,
    PipelineState,
    Prompter,
    PullRequest,
    ReleaseNote,
)
from extension_release_notes.release_notes.versioning import (
    filter_pull_requests,
    is_range_resolved,
    normalize_version,
    resolve_range,
)
from extension_release_notes.release_notes.walker import CommitGraphWalker
from extension_release_notes.utils.github import build_pull_request_search_query

logger = structlog.get_logger(__name__)


class ReleaseExtractionPipeline:
    """Extracts the release notes of one repository for a version range."""

    def __init__(
        self,
        client: GitHubClientBase,
        config: ExtractionConfig | None = None,
        prompter: Prompter | None = None,
        walker: CommitGraphWalker | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            client: Query interface bound to the repository
            config: Extraction behaviour, defaults to ExtractionConfig()
            prompter: Asks the user for missing versions when they are not filled automatically
            walker: Commit-graph walker, built from the client when omitted
        """
        self.client = client
        self.config = config or ExtractionConfig()
        self.prompter = prompter
        self.walker = walker or CommitGraphWalker(client, base_branch=self.config.development_branch)

    async def run(self, extension_range: ExtensionRange) -> PipelineState:
        """Run every stage for one repository and return the final state."""
        logger.info(
            "Begin release notes extraction",
            repo=extension_range.repo_name,
            start_version=extension_range.start_version,
            end_version=extension_range.end_version,
        )
        state = PipelineState(extension_range=extension_range)
        state = await self.fetch_candidates(state)
        state = await self.resolve_range(state)
        if not is_range_resolved(state.version_range):
            logger.info("Version range unresolved, nothing to extract", repo=extension_range.repo_name, version_range=state.version_range)
            return state.model_copy(update={"stage": PipelineStage.DONE})
        state = self.filter_by_range(state)
        state = await self.extract_notes(state)
        return state.model_copy(update={"stage": PipelineStage.DONE})

    async def fetch_candidates(self, state: PipelineState) -> PipelineState:
        """Fetch the most recent merged release pull requests, newest first.

        Raises:
            NoCandidatesError: If the search returns nothing usable
        """
        logger.info("Fetching pull requests", repo=self.client.repository)
        query = build_pull_request_search_query(
            self.client.owner,
            self.client.repo_name,
            self.config.release_branch,
            ["sort:created-desc"],
        )
        try:
            candidates = await self.client.search_recent_pull_requests(query, limit=self.config.candidate_limit)
        except MalformedResponseError as exc:
            raise NoCandidatesError(self.client.repository) from exc
        if not candidates:
            logger.error("No valid pull requests found", repo=self.client.repository)
            raise NoCandidatesError(self.client.repository)

        logger.debug("Fetched candidate pull requests", repo=self.client.repository, candidates=len(candidates))
        return state.model_copy(update={"stage": PipelineStage.FETCH_CANDIDATES, "candidates": tuple(candidates)})

    async def resolve_range(self, state: PipelineState) -> PipelineState:
        """Resolve the requested version range against the candidates."""
        version_range = await resolve_range(
            state.extension_range.start_version,
            state.extension_range.end_version,
            state.candidates,
            auto_versions=self.config.auto_versions,
            prompter=self.prompter,
            symmetric=self.config.symmetric_versions,
        )
        return state.model_copy(update={"stage": PipelineStage.RESOLVE_RANGE, "version_range": version_range})

    def filter_by_range(self, state: PipelineState) -> PipelineState:
        """Keep the candidates whose title version lies within the range."""
        version_range = state.version_range
        selected = filter_pull_requests(
            state.candidates,
            version_range.start_version if version_range else None,
            version_range.end_version if version_range else None,
        )
        logger.info("Filtered pull requests", repo=self.client.repository, candidates=len(state.candidates), selected=len(selected))
        return state.model_copy(update={"stage": PipelineStage.FILTER_BY_RANGE, "selected": tuple(selected)})

    async def extract_notes(self, state: PipelineState) -> PipelineState:
        """Extract the release notes of every selected pull request."""
        release_notes = await self.extract_release_notes(state.selected)
        return state.model_copy(update={"stage": PipelineStage.EXTRACT_NOTES, "release_notes": tuple(release_notes)})

    async def extract_release_notes(self, pull_requests: Sequence[PullRequest]) -> list[ReleaseNote]:
        """Extract release notes from release pull requests, keeping their order.

        Pull requests are walked concurrently; the first failure aborts the batch.
        Pull requests without a version or without notes are left out.
        """
        logger.info("Extracting release notes", repo=self.client.repository, pull_requests=len(pull_requests))
        if not pull_requests:
            logger.error("No valid pull request found to extract from", repo=self.client.repository)
            return []

        semaphore = asyncio.Semaphore(self.config.concurrency)

        async def _extract(pull_request: PullRequest) -> ReleaseNote | None:
            version = normalize_version(pull_request.title)
            if version is None or pull_request.number is None:
                return None
            async with semaphore:
                text = await self.walker.extract_release_notes(pull_request.number)
            if not text:
                return None
            return ReleaseNote(version=version, text=text)

        try:
            async with asyncio.TaskGroup() as task_group:
                tasks = [task_group.create_task(_extract(pr)) for pr in pull_requests]
        except ExceptionGroup as exc_group:
            # Siblings are cancelled by the task group; surface the failure itself.
            raise exc_group.exceptions[0]
        release_notes = [note for task in tasks if (note := task.result()) is not None]
        logger.info(f"{len(release_notes)} versions with notes found", repo=self.client.repository)
        return release_notes
