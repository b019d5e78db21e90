"""Unit tests for the environment settings."""

from pathlib import Path

import pytest

from extension_release_notes.configuration.env import Settings
from extension_release_notes.utils.constants import DEFAULT_OWNER, DEVELOPMENT_BRANCH, RELEASE_BRANCH


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run without a .env file or repository variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("DEBUG", "DEFAULT_OWNER", "RELEASE_BRANCH", "DEVELOPMENT_BRANCH"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Repository conventions default to the built-in constants."""
    settings = Settings()
    assert (settings.DEFAULT_OWNER, settings.RELEASE_BRANCH, settings.DEVELOPMENT_BRANCH) == (DEFAULT_OWNER, RELEASE_BRANCH, DEVELOPMENT_BRANCH)
    assert settings.DEBUG is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override the defaults."""
    monkeypatch.setenv("DEFAULT_OWNER", "acme")
    monkeypatch.setenv("RELEASE_BRANCH", "main")
    monkeypatch.setenv("DEBUG", "true")

    settings = Settings()

    assert (settings.DEFAULT_OWNER, settings.RELEASE_BRANCH, settings.DEBUG) == ("acme", "main", True)


def test_credentials_are_left_to_the_cli() -> None:
    """GitHub credentials are not duplicated in the settings model."""
    assert not {name for name in Settings.model_fields if name.startswith("GITHUB_")}
