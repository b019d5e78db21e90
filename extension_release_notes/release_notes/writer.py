"""Renders release notes into Markdown or CSV changelogs and writes them to disk."""

import csv
import io
import re
from datetime import datetime
from pathlib import Path
from typing import Sequence

import structlog

from extension_release_notes.configuration.models import OutputFormat
from extension_release_notes.release_notes.models import ReleaseNote
from extension_release_notes.release_notes.versioning import normalize_version
from extension_release_notes.utils.constants import COMBINED_NOTES_FILENAME, CSV_HEADER, RELEASE_NOTES_FILE_SUFFIX
from extension_release_notes.utils.github import repository_slug
from extension_release_notes.utils.templates import construct_jinja2_template_from_string, render_template

logger = structlog.get_logger(__name__)

MARKDOWN_TEMPLATE = "# {{ repo_name }}\n{% for section in sections %}\n## {{ section.version }}\n\n{{ section.text }}{% endfor %}"

BULLET_PATTERN = re.compile(r"^\s*-\s")


def group_release_notes(release_notes: Sequence[ReleaseNote]) -> list[ReleaseNote]:
    """Merge notes sharing a version, keeping versions in first-seen order.

    Notes without a valid version or without text are dropped.
    """
    grouped: dict[str, list[str]] = {}
    for note in release_notes:
        if not note.text or normalize_version(note.version) is None:
            continue
        grouped.setdefault(note.version, []).append(note.text)
    return [ReleaseNote(version=version, text="".join(texts)) for version, texts in grouped.items()]


def render_markdown(repo_name: str, release_notes: Sequence[ReleaseNote]) -> str:
    """Render release notes as a Markdown document, one section per version."""
    template = construct_jinja2_template_from_string(MARKDOWN_TEMPLATE)
    sections = [note.model_dump() for note in group_release_notes(release_notes)]
    return render_template(template, repo_name=repository_slug(repo_name), sections=sections)


def render_csv(repo_name: str, release_notes: Sequence[ReleaseNote]) -> str:
    """Render release notes as CSV, one row per note line."""
    slug = repository_slug(repo_name)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for note in release_notes:
        if not note.text or normalize_version(note.version) is None:
            continue
        for line in note.text.split("\n"):
            if not line:
                continue
            writer.writerow((slug, note.version, BULLET_PATTERN.sub("", line).replace(",", "")))
    return buffer.getvalue()


def changelog_path(repo_name: str, output_dir: Path, output_format: OutputFormat) -> Path:
    """Path of a repository's changelog within an output directory."""
    return output_dir / f"{repository_slug(repo_name)}{RELEASE_NOTES_FILE_SUFFIX}.{output_format.value}"


def write_changelog(
    repo_name: str,
    output_dir: Path,
    release_notes: Sequence[ReleaseNote],
    output_format: OutputFormat = OutputFormat.CSV,
) -> Path:
    """Write a repository's changelog and return its path."""
    path = changelog_path(repo_name, output_dir, output_format)
    logger.info("Writing change log", path=str(path))
    if output_format == OutputFormat.MARKDOWN:
        content = render_markdown(repo_name, release_notes)
    else:
        content = render_csv(repo_name, release_notes)
    path.write_text(content, encoding="utf-8")
    return path


def create_output_directory(base_dir: Path, now: datetime | None = None) -> Path:
    """Create a timestamped directory for the changelogs of one run."""
    timestamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    output_dir = base_dir / "release_notes" / timestamp
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def concatenate_changelogs(output_dir: Path, filename: str = COMBINED_NOTES_FILENAME) -> Path:
    """Join every Markdown changelog of a directory into one file."""
    target = output_dir / filename
    logger.info("Concatenating all release notes", path=str(target))
    sources = sorted(path for path in output_dir.glob("*.md") if path.name != filename)
    target.write_text("\n".join(path.read_text(encoding="utf-8") for path in sources), encoding="utf-8")
    return target
