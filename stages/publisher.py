"""Publisher stage.

Creates a dated branch, writes the changelog to it and opens a pull request
back to the target branch. Side effects of completed steps are left in place
when a later step fails.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime

from loguru import logger

from integrations.errors import GitHubAPIError, PublishError
from integrations.github.client import GitHubClient, PullRequest

BRANCH_PREFIX = "changelog/update-"
COMMIT_MESSAGE = "chore: update CHANGELOG.md with recent changes"
PR_TITLE = "chore: Update CHANGELOG.md"


def _utc_today() -> date:
    return datetime.now(UTC).date()


def branch_name_for(day: date) -> str:
    """``changelog/update-YYYYMMDD``"""
    return f"{BRANCH_PREFIX}{day.strftime('%Y%m%d')}"


def pull_request_body(commit_count: int) -> str:
    return (
        "This PR updates the CHANGELOG.md with recent changes analyzed by AI.\n\n"
        f"Generated from the last {commit_count} commits."
    )


class ChangelogPublisher:
    """Publish an updated changelog as a pull request."""

    def __init__(
        self,
        client: GitHubClient,
        base_branch: str,
        path: str = "CHANGELOG.md",
        today: Callable[[], date] | None = None,
    ) -> None:
        self.client = client
        self.base_branch = base_branch
        self.path = path
        self.today = today or _utc_today

    def branch_name(self) -> str:
        return branch_name_for(self.today())

    def ensure_branch(self, branch: str) -> str:
        """Create ``branch`` from the tip of the base branch.

        Returns:
            The commit sha the branch points at. An existing branch is reused.
        """
        logger.info("Creating branch {} from {}", branch, self.base_branch)
        try:
            base_sha = self.client.get_branch_sha(self.base_branch)
        except GitHubAPIError as e:
            raise PublishError(
                f"Error reading base branch: {e.message}", status_code=e.status_code
            ) from e

        try:
            self.client.create_branch(branch, base_sha)
        except GitHubAPIError as e:
            if not e.is_conflict:
                raise PublishError(
                    f"Error creating branch: {e.message}", status_code=e.status_code
                ) from e
            logger.info("Branch {} already exists, using it", branch)
            try:
                return self.client.get_branch_sha(branch)
            except GitHubAPIError as lookup_error:
                raise PublishError(
                    f"Error reading existing branch: {lookup_error.message}",
                    status_code=lookup_error.status_code,
                ) from lookup_error

        logger.info("Successfully created branch {}", branch)
        return base_sha

    def write_changelog(self, branch: str, content: str) -> None:
        """Create or update the changelog file on ``branch``."""
        logger.info("Updating file {} on branch {}", self.path, branch)
        try:
            current = self.client.get_file(self.path, branch)
            if current is None:
                logger.info("File {} doesn't exist, will create it", self.path)
            self.client.put_file(
                self.path,
                content,
                COMMIT_MESSAGE,
                branch,
                sha=current.sha if current else None,
            )
        except GitHubAPIError as e:
            raise PublishError(
                f"Error updating file: {e.message}", status_code=e.status_code
            ) from e

        logger.info(
            "Successfully {} file {}", "updated" if current else "created", self.path
        )

    def open_pull_request(self, branch: str, commit_count: int) -> PullRequest:
        """Open the pull request from ``branch`` into the base branch."""
        logger.info("Creating PR: {} ({} -> {})", PR_TITLE, branch, self.base_branch)
        try:
            pr = self.client.create_pull_request(
                title=PR_TITLE,
                body=pull_request_body(commit_count),
                head=branch,
                base=self.base_branch,
            )
        except GitHubAPIError as e:
            raise PublishError(
                f"Error creating PR: {e.message}", status_code=e.status_code
            ) from e

        logger.info("Successfully created PR #{}", pr.number)
        return pr

    def publish(
        self, content: str, commit_count: int, branch: str | None = None
    ) -> PullRequest:
        """Run branch creation, file write and PR creation in order.

        ``branch`` defaults to today's dated branch name.
        """
        branch = branch or self.branch_name()
        self.ensure_branch(branch)
        self.write_changelog(branch, content)
        return self.open_pull_request(branch, commit_count)
