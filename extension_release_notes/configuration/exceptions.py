"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class ConfigurationStoreError(Exception):
    """Raised when the persisted configuration file cannot be read or written."""

    pass
