"""Changelog pipeline.

Wires the fetcher, summarizer, merger and publisher stages together and
turns the run into a RunOutcome.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from loguru import logger

from integrations.errors import FetchError, GitHubAPIError
from integrations.github.client import GitHubClient
from integrations.llm.base import LLMProvider
from integrations.llm.providers import create_provider

from .base import RunOutcome, RunStatus
from .config import RunConfig
from .fetcher import CommitFetcher
from .merger import merge_changelog
from .publisher import ChangelogPublisher
from .summarizer import ChangelogSummarizer


class ChangelogPipeline:
    """End-to-end changelog pipeline.

    Runs the four stages strictly in order: fetch commits, summarize them,
    merge the entry into the changelog and publish it as a pull request.
    Each stage propagates its errors; the caller decides how to report them.
    """

    def __init__(
        self,
        config: RunConfig,
        client: GitHubClient | None = None,
        provider: LLMProvider | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Run configuration.
            client: GitHub client. Built from ``config`` if omitted.
            provider: LLM provider. Built from ``config`` if omitted.
            today: Clock used for the branch name. Defaults to the UTC date.
        """
        self.config = config
        self.client = client or GitHubClient(
            config.github_token,
            config.repository.owner,
            config.repository.name,
            base_url=config.api_url,
        )
        self.provider = provider or create_provider(config.llm_provider, config.llm)
        self.fetcher = CommitFetcher(self.client)
        self.summarizer = ChangelogSummarizer(self.provider, language=config.language)
        self.publisher = ChangelogPublisher(
            self.client,
            base_branch=config.target_branch,
            path=config.changelog_path,
            today=today,
        )

    def read_changelog(self) -> str:
        """Current changelog on the target branch, empty if absent."""
        try:
            current = self.client.get_file(
                self.config.changelog_path, self.config.target_branch
            )
        except GitHubAPIError as e:
            raise FetchError(
                f"Error getting file content: {e.message}", status_code=e.status_code
            ) from e
        return current.content if current else ""

    async def run(self) -> RunOutcome:
        """Run the pipeline.

        Returns:
            RunOutcome: What the run did. Early exits are successful outcomes.

        Raises:
            ChangelogError: If any stage fails.
        """
        config = self.config
        repo_name = config.repository.name
        logger.info("Processing repository: {}", config.repository.full_name)

        logger.info("Fetching last {} commits...", config.commit_count)
        commits = self.fetcher.fetch(config.target_branch, config.commit_count)
        if not commits:
            logger.info("No commits found, skipping changelog generation")
            return RunOutcome(status=RunStatus.SKIPPED_NO_COMMITS)

        logger.info("Found {} commits to analyze", len(commits))
        entry = await self.summarizer.summarize(commits, repo_name)

        logger.info("Fetching existing {} from repository...", config.changelog_path)
        existing = self.read_changelog()
        merged = merge_changelog(entry, repo_name, existing)

        if not merged.has_changes:
            logger.info("No changes to {}, skipping PR creation", config.changelog_path)
            return RunOutcome(
                status=RunStatus.SKIPPED_NO_CHANGES, commit_count=len(commits)
            )

        if config.dry_run:
            logger.info("Dry run, not publishing. Merged changelog:\n{}", merged.content)
            return RunOutcome(
                status=RunStatus.DRY_RUN,
                commit_count=len(commits),
                content=merged.content,
            )

        branch = self.publisher.branch_name()
        pr = self.publisher.publish(merged.content, len(commits), branch=branch)
        logger.info("Successfully created PR #{}: {}", pr.number, pr.html_url)

        return RunOutcome(
            status=RunStatus.CREATED,
            commit_count=len(commits),
            branch=branch,
            pr_number=pr.number,
            pr_url=pr.html_url,
            content=merged.content,
        )
