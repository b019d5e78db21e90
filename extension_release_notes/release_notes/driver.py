"""Orchestrates release notes extraction for one or many repositories."""

import time
from typing import Callable, Sequence

import structlog

from extension_release_notes.configuration.models import ExtractionConfig
from extension_release_notes.github.abc import GitHubClientBase
from extension_release_notes.release_notes.exceptions import NoCandidatesError
from extension_release_notes.release_notes.models import (
    ExtensionRange,
    Prompter,
    ReleaseNotesResult,
    ReleaseNotesStatus,
)
from extension_release_notes.release_notes.pipeline import ReleaseExtractionPipeline
from extension_release_notes.release_notes.versioning import is_range_resolved
from extension_release_notes.utils.github import qualify_repository

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ClientFactory = Callable[[str], GitHubClientBase]
"""Builds a query client bound to an 'owner/repo' repository."""


async def extract_repository_release_notes(
    extension_range: ExtensionRange,
    client: GitHubClientBase,
    config: ExtractionConfig,
    prompter: Prompter | None = None,
) -> ReleaseNotesResult:
    """Run the extraction pipeline for one repository.

    Raises:
        NoCandidatesError: If the repository has no merged release pull requests
    """
    pipeline = ReleaseExtractionPipeline(client, config=config, prompter=prompter)
    state = await pipeline.run(extension_range)

    if not is_range_resolved(state.version_range):
        status = ReleaseNotesStatus.UNRESOLVED_RANGE
    elif state.release_notes:
        status = ReleaseNotesStatus.SUCCESS
    else:
        status = ReleaseNotesStatus.NO_CONTENT

    return ReleaseNotesResult(
        repo_name=extension_range.repo_name,
        status=status,
        version_range=state.version_range,
        release_notes=list(state.release_notes),
    )


async def run_single_repository_workflow(
    repo: str,
    client_factory: ClientFactory,
    config: ExtractionConfig,
    prompter: Prompter | None = None,
    start_version: str | None = None,
    end_version: str | None = None,
) -> ReleaseNotesResult:
    """Extract release notes for a single repository.

    Unlike the multi-repository workflow, a repository without candidate pull
    requests is fatal here.

    Raises:
        NoCandidatesError: If the repository has no merged release pull requests
        ValueError: If the repository name is invalid
    """
    repo_name = qualify_repository(repo, config.default_owner)
    extension_range = ExtensionRange(repo_name=repo_name, start_version=start_version, end_version=end_version)
    client = client_factory(repo_name)
    return await extract_repository_release_notes(extension_range, client, config, prompter)


async def run_release_notes_workflow(
    extension_ranges: Sequence[ExtensionRange],
    client_factory: ClientFactory,
    config: ExtractionConfig,
    prompter: Prompter | None = None,
) -> list[ReleaseNotesResult]:
    """Extract release notes for many repositories, one after another.

    A fresh client is built for every repository. Failures are logged and
    recorded in the repository's result; the remaining repositories are still
    processed.
    """
    logger.info(f"Ready to extract notes for {len(extension_ranges)} extensions.")
    start_time = time.time()
    results: list[ReleaseNotesResult] = []

    for extension_range in extension_ranges:
        repo_name = extension_range.repo_name
        try:
            repo_name = qualify_repository(repo_name, config.default_owner)
            extension_range = extension_range.model_copy(update={"repo_name": repo_name})
            client = client_factory(repo_name)
            result = await extract_repository_release_notes(extension_range, client, config, prompter)
        except NoCandidatesError as exc:
            logger.warning("Skipping repository without release pull requests", repo=repo_name)
            result = ReleaseNotesResult(repo_name=repo_name, status=ReleaseNotesStatus.NO_CANDIDATES, error=str(exc))
        except Exception as exc:
            logger.exception("Failed to extract release notes", repo=repo_name)
            result = ReleaseNotesResult(repo_name=repo_name, status=ReleaseNotesStatus.ERROR, error=str(exc))
        results.append(result)

    logger.info(
        "All notes fetched",
        repositories=len(results),
        with_notes=sum(1 for result in results if result.status == ReleaseNotesStatus.SUCCESS),
        duration=round(time.time() - start_time, 2),
    )
    return results
