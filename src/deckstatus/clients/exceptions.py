"""Custom exceptions for the REST API clients."""


class ClientError(Exception):
    """Base exception for API client errors."""


class AzureDevOpsError(ClientError):
    """Azure DevOps request failed or returned an unexpected payload."""


class GitHubError(ClientError):
    """GitHub request failed or returned an unexpected payload."""


class AvatarNotFoundError(ClientError):
    """No avatar image is available for the requested owner or team."""
