"""Sets up the authenticated githubkit client."""

from pathlib import Path
from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import (
    AppAuthStrategy,
    AppInstallationAuthStrategy,
    TokenAuthStrategy,
)

from extension_release_notes.configuration.models import GitHubAuthenticationType, GitHubSettings

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy]


def get_github_app_client(
    github_app_id: int,
    github_app_private_key_path: Path,
    github_app_installation_id: int,
    github_api_url: str,
) -> GitHub[AppInstallationAuthStrategy]:
    """Returns a GitHub client authenticated as a GitHub App installation."""
    try:
        private_key = Path(github_app_private_key_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Failed to read GitHub App private key: {e}") from e
    auth = AppAuthStrategy(app_id=github_app_id, private_key=private_key)
    return GitHub(auth=auth.as_installation(github_app_installation_id), base_url=github_api_url, http_cache=False)


def get_github_pat_client(github_pat_token: str, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns a GitHub client authenticated with a personal access token."""
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires a GitHub PAT token.")
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)


def get_github_client(github_settings: GitHubSettings) -> GitHubClient:
    """Returns an authenticated GitHub client using either GitHub App or PAT credentials.

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    Raises RuntimeError if the credentials required by the authentication type are missing.
    """
    if github_settings.auth_type == GitHubAuthenticationType.APP:
        if not (github_settings.app_id and github_settings.app_private_key_path and github_settings.app_installation_id):
            raise RuntimeError("GitHub App authentication requires app_id, private_key_path, and installation_id.")
        return get_github_app_client(
            github_settings.app_id,
            github_settings.app_private_key_path,
            github_settings.app_installation_id,
            github_settings.api_url,
        )
    if not github_settings.pat_token:
        raise RuntimeError("GitHub PAT authentication requires a GitHub PAT token.")
    return get_github_pat_client(github_settings.pat_token, github_settings.api_url)
