"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import Callable

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from extension_release_notes.configuration.env import Settings
from extension_release_notes.configuration.exceptions import ConfigurationStoreError, GitHubAuthenticationConfigurationUndefinedError
from extension_release_notes.configuration.models import ExtractionConfig, GitHubSettings, OutputFormat
from extension_release_notes.configuration.reconcile import reconcile_github_settings
from extension_release_notes.configuration.store import StoredConfig, load_stored_config, write_stored_config
from extension_release_notes.github.adapter import GitHubKitAdapter
from extension_release_notes.release_notes.driver import run_release_notes_workflow, run_single_repository_workflow
from extension_release_notes.release_notes.exceptions import ExtensionRangesFileError, NoCandidatesError
from extension_release_notes.release_notes.models import ReleaseNotesResult, ReleaseNotesStatus
from extension_release_notes.release_notes.ranges import load_extension_ranges
from extension_release_notes.release_notes.writer import concatenate_changelogs, create_output_directory, write_changelog
from extension_release_notes.utils.constants import GITHUB_TOKEN_PATTERN

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Extract release notes from merged GitHub pull requests.")


class TyperPrompter:
    """Asks questions on the terminal without blocking the event loop."""

    async def prompt_text(self, message: str, default: str = "", validator: Callable[[str], bool] | None = None) -> str:
        """Ask for a line of text until the validator accepts it."""
        while True:
            answer = await asyncio.to_thread(typer.prompt, message, default=default, show_default=bool(default))
            answer = answer.strip()
            if validator is None or validator(answer):
                return answer
            typer.echo(f"Invalid answer: '{answer}'", err=True)


def configure_logging(debug: bool) -> None:
    """Set the log level of every structlog logger."""
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Store the GitHub connection options for the selected command."""
    settings = Settings()
    configure_logging(debug or settings.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["github_api_url"] = github_api_url
    ctx.obj["github_pat_token"] = github_pat_token
    ctx.obj["github_app_id"] = github_app_id
    ctx.obj["github_app_private_key_path"] = github_app_private_key_path
    ctx.obj["github_app_installation_id"] = github_app_installation_id


def prompt_github_token() -> str:
    """Ask for a GitHub token until one with a plausible format is entered."""
    while True:
        token = typer.prompt("GitHub token", hide_input=True).strip()
        if GITHUB_TOKEN_PATTERN.search(token):
            return token
        typer.echo("Invalid GitHub token", err=True)


def resolve_github_settings(ctx: typer.Context) -> GitHubSettings:
    """Reconcile the GitHub credentials, asking for a token when none is known.

    A token typed in at the prompt is persisted for the next runs.
    """
    obj = ctx.obj
    has_credentials = any(
        obj[key] for key in ("github_pat_token", "github_app_id", "github_app_private_key_path", "github_app_installation_id")
    )
    try:
        stored_config = load_stored_config()
        if not has_credentials and not stored_config.token:
            token = prompt_github_token()
            stored_config = StoredConfig(token=token)
            write_stored_config(stored_config)
        return reconcile_github_settings(
            github_api_url=obj["github_api_url"],
            github_pat_token=obj["github_pat_token"],
            github_app_id=obj["github_app_id"],
            github_app_private_key_path=obj["github_app_private_key_path"],
            github_app_installation_id=obj["github_app_installation_id"],
            stored_token=stored_config.token,
        )
    except (ConfigurationStoreError, GitHubAuthenticationConfigurationUndefinedError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_extraction_config(ctx: typer.Context, auto_versions: bool, symmetric_versions: bool) -> ExtractionConfig:
    """Combine command options with the repository conventions from the environment."""
    settings: Settings = ctx.obj["settings"]
    return ExtractionConfig(
        auto_versions=auto_versions,
        symmetric_versions=symmetric_versions,
        default_owner=settings.DEFAULT_OWNER,
        release_branch=settings.RELEASE_BRANCH,
        development_branch=settings.DEVELOPMENT_BRANCH,
    )


def echo_summary(results: list[ReleaseNotesResult]) -> None:
    """Print one line per repository with its extraction status."""
    width = max((len(result.repo_name) for result in results), default=0)
    typer.echo("")
    typer.echo(f"{'Repository'.ljust(width)}  Status  Notes")
    for result in results:
        typer.echo(f"{result.repo_name.ljust(width)}  {result.status.value}  {len(result.release_notes)}")


@typer_app.command(name="single")
def single_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo, or repo for the default owner).")],
    start_version: Annotated[str | None, Option(help="First version to include.")] = None,
    end_version: Annotated[str | None, Option(help="Last version to include.")] = None,
    output_format: Annotated[OutputFormat, Option("--format", help="Format of the written change log.")] = OutputFormat.CSV,
    output_dir: Annotated[Path, Option(envvar="OUTPUT_DIR", help="Directory the release_notes folder is created in.")] = Path("."),
    auto_versions: Annotated[bool, Option(help="Fill missing versions without prompting.")] = False,
    symmetric_versions: Annotated[bool, Option(help="Derive both versions when neither is given.")] = False,
) -> None:
    """Extract release notes for a single repository."""
    github_settings = resolve_github_settings(ctx)
    config = build_extraction_config(ctx, auto_versions, symmetric_versions)
    client_factory = partial(GitHubKitAdapter.create, github_settings=github_settings)

    try:
        result = asyncio.run(
            run_single_repository_workflow(
                repo=repo,
                client_factory=client_factory,
                config=config,
                prompter=TyperPrompter(),
                start_version=start_version,
                end_version=end_version,
            )
        )
    except NoCandidatesError as exc:
        typer.echo(f"No release pull requests found in {exc.repo_name}", err=True)
        raise typer.Exit(1) from exc
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if result.status == ReleaseNotesStatus.UNRESOLVED_RANGE:
        typer.echo(f"Could not resolve a version range for {result.repo_name}, nothing to extract")
        return
    if result.status == ReleaseNotesStatus.NO_CONTENT:
        typer.echo(f"No release notes found for {result.repo_name}")
        return

    run_dir = create_output_directory(output_dir)
    path = write_changelog(result.repo_name, run_dir, result.release_notes, output_format)
    typer.echo(f"Release notes written to {path}")


@typer_app.command(name="multiple")
def multiple_cli(
    ctx: typer.Context,
    ranges_file: Annotated[Path, Argument(envvar="RANGES_FILE", help="YAML file listing repositories and version ranges.")],
    output_format: Annotated[OutputFormat, Option("--format", help="Format of the written change logs.")] = OutputFormat.MARKDOWN,
    output_dir: Annotated[Path, Option(envvar="OUTPUT_DIR", help="Directory the release_notes folder is created in.")] = Path("."),
    auto_versions: Annotated[bool, Option(help="Fill missing versions without prompting.")] = False,
    symmetric_versions: Annotated[bool, Option(help="Derive both versions when neither is given.")] = False,
) -> None:
    """Extract release notes for every repository of a ranges file."""
    if not ranges_file.exists():
        typer.echo(f"Ranges file not found: {ranges_file.absolute()}", err=True)
        raise typer.Exit(1)

    try:
        extension_ranges = load_extension_ranges(ranges_file)
    except ExtensionRangesFileError as exc:
        typer.echo("Error(s) encountered while loading ranges file:", err=True)
        for error in exc.errors:
            typer.echo(str(error), err=True)
        raise typer.Exit(1) from exc

    github_settings = resolve_github_settings(ctx)
    config = build_extraction_config(ctx, auto_versions, symmetric_versions)
    client_factory = partial(GitHubKitAdapter.create, github_settings=github_settings)

    results = asyncio.run(
        run_release_notes_workflow(
            extension_ranges,
            client_factory=client_factory,
            config=config,
            prompter=TyperPrompter(),
        )
    )

    run_dir = create_output_directory(output_dir)
    for result in results:
        if result.status == ReleaseNotesStatus.SUCCESS:
            result.output_path = str(write_changelog(result.repo_name, run_dir, result.release_notes, output_format))
    combined = concatenate_changelogs(run_dir)

    echo_summary(results)
    typer.echo(f"Combined release notes written to {combined}")
    if any(result.status == ReleaseNotesStatus.ERROR for result in results):
        raise typer.Exit(1)


if __name__ == "__main__":
    typer_app()
