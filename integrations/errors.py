"""
Error taxonomy

This module defines the exceptions raised across the changelog pipeline.
Every stage raises a subclass of ChangelogError so the entry point can
report a single failure signal with a consistent message.
"""

from enum import Enum


class ErrorCode(Enum):
    """Standard error codes for pipeline failures."""

    CONFIG_ERROR = "CONFIG_ERROR"
    FETCH_ERROR = "FETCH_ERROR"
    GENERATION_ERROR = "GENERATION_ERROR"
    PUBLISH_ERROR = "PUBLISH_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class ChangelogError(Exception):
    """Base class for all pipeline errors."""

    code: ErrorCode = ErrorCode.NETWORK_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigError(ChangelogError):
    """Missing credential or invalid run parameter. Raised before any network call."""

    code = ErrorCode.CONFIG_ERROR


class FetchError(ChangelogError):
    """GitHub API failure while listing commits or reading files."""

    code = ErrorCode.FETCH_ERROR


class GenerationError(ChangelogError):
    """Model call failure or empty input."""

    code = ErrorCode.GENERATION_ERROR


class PublishError(ChangelogError):
    """Branch, file or pull request creation failure."""

    code = ErrorCode.PUBLISH_ERROR


class GitHubAPIError(ChangelogError):
    """Non-2xx response or transport failure from the GitHub REST API."""

    code = ErrorCode.NETWORK_ERROR

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ) -> None:
        super().__init__(message, status_code)
        self.url = url

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        # GitHub answers 422 "Reference already exists"; some endpoints use 409
        return self.status_code in (409, 422)
