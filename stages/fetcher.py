"""Commit fetcher stage."""

from __future__ import annotations

from loguru import logger

from integrations.errors import FetchError, GitHubAPIError
from integrations.github.client import GitHubClient

from .base import Commit


class CommitFetcher:
    """Retrieve the most recent commits of a branch, newest first."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def fetch(self, ref: str, count: int) -> list[Commit]:
        """Fetch up to ``count`` commits reachable from ``ref``.

        An empty repository yields an empty list rather than an error.

        Raises:
            FetchError: On any other API failure or a malformed payload.
        """
        logger.info(
            "Getting last {} commits from {}/{} ({})",
            count,
            self.client.owner,
            self.client.repo,
            ref,
        )
        try:
            raw_commits = self.client.list_commits(ref, count)
        except GitHubAPIError as e:
            # GitHub answers 409 "Git Repository is empty" for repos without commits
            if e.status_code == 409:
                logger.info("Repository is empty")
                return []
            raise FetchError(
                f"Error getting recent commits: {e.message}", status_code=e.status_code
            ) from e

        try:
            commits = [Commit.from_api(item) for item in raw_commits]
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(f"Malformed commit payload: {e}") from e

        commits.sort(key=lambda c: c.date, reverse=True)
        logger.info("Retrieved {} commits", len(commits))
        return commits[:count]
