"""Reconcile GitHub authentication configuration."""

from pathlib import Path

from extension_release_notes.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from extension_release_notes.configuration.models import GitHubAuthenticationType, GitHubSettings

_GITHUB_APP_SETTINGS = (
    ("app_id", "GitHub App ID", "github_app_id", "GITHUB_APP_ID"),
    ("private_key_path", "GitHub App private key path", "github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH"),
    ("installation_id", "GitHub App installation ID", "github_app_installation_id", "GITHUB_APP_INSTALLATION_ID"),
)


def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither configurations are defined,
            or if the GitHub App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_values = {
        "app_id": github_app_id,
        "private_key_path": github_app_private_key_path,
        "installation_id": github_app_installation_id,
    }
    any_app_setting = any(app_values.values())

    if github_pat_token and any_app_setting:
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if all(app_values.values()):
        return GitHubAuthenticationType.APP

    if any_app_setting:
        missing = [
            f"{name} (command line option {cli_name}, environment variable {env_name})"
            for key, name, cli_name, env_name in _GITHUB_APP_SETTINGS
            if not app_values[key]
        ]
        raise GitHubAuthenticationConfigurationUndefinedError("Incomplete GitHub App configuration - missing settings include " + ", ".join(missing))

    raise GitHubAuthenticationConfigurationUndefinedError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


def reconcile_github_settings(
    github_api_url: str,
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
    stored_token: str | None = None,
) -> GitHubSettings:
    """Build the GitHub settings from explicit options, falling back to the stored token.

    The stored token is only used when no credentials of either kind were given.
    """
    has_app_setting = bool(github_app_id or github_app_private_key_path or github_app_installation_id)
    if not github_pat_token and not has_app_setting:
        github_pat_token = stored_token

    auth_type = validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )
    if auth_type == GitHubAuthenticationType.APP:
        return GitHubSettings(
            auth_type=auth_type,
            api_url=github_api_url,
            app_id=github_app_id,
            app_private_key_path=github_app_private_key_path,
            app_installation_id=github_app_installation_id,
        )
    return GitHubSettings(auth_type=auth_type, api_url=github_api_url, pat_token=github_pat_token)
