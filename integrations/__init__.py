"""
Integrations package for Changelog Assistant.

This package contains the collaborators the pipeline talks to:
- GitHub REST API (commits, files, branches, pull requests)
- Language-model providers and prompt templates
- GitHub Actions outputs
"""

from .errors import (
    ChangelogError,
    ConfigError,
    ErrorCode,
    FetchError,
    GenerationError,
    GitHubAPIError,
    PublishError,
)
from .github.client import GitHubClient, PullRequest, RepoFile

__all__ = [
    # Errors
    "ErrorCode",
    "ChangelogError",
    "ConfigError",
    "FetchError",
    "GenerationError",
    "PublishError",
    "GitHubAPIError",
    # GitHub
    "GitHubClient",
    "PullRequest",
    "RepoFile",
]
