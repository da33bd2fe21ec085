"""Changelog summarizer stage.

Formats commits into a prompt, asks the language model for a changelog
entry and normalizes the response so it always starts with a
``### <date range>`` heading.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime

from loguru import logger

from integrations.errors import GenerationError
from integrations.llm.base import LLMMessage, LLMProvider
from integrations.llm.prompts import PromptManager

from .base import Commit

HEADING_MARKER = "###"
DATE_FORMAT = "%d.%m.%Y"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def format_date(value: datetime) -> str:
    """Render a commit date as DD.MM.YYYY."""
    return value.strftime(DATE_FORMAT)


def compute_date_range(commits: Sequence[Commit]) -> str:
    """Return ``<oldest> - <newest>`` for the given commits.

    The range is computed from the dates themselves, so input order does not
    matter.
    """
    if not commits:
        raise GenerationError("No commits provided for changelog generation")
    dates = [c.date for c in commits]
    return f"{format_date(min(dates))} - {format_date(max(dates))}"


def format_commits(commits: Sequence[Commit]) -> str:
    """One ``- <date>: <message> (<short sha>)`` line per commit."""
    return "\n".join(
        f"- {format_date(c.date)}: {c.message} ({c.sha[:7]})" for c in commits
    )


def normalize_entry(raw: str) -> str:
    """Ensure the heading marker and collapse runs of blank lines."""
    entry = raw.strip()
    if not entry.startswith(HEADING_MARKER):
        entry = f"{HEADING_MARKER} {entry}"
    return _EXCESS_NEWLINES.sub("\n\n", entry)


class ChangelogSummarizer:
    """Turn a batch of commits into a single changelog entry."""

    def __init__(
        self,
        provider: LLMProvider,
        language: str = "English",
        prompt_manager: PromptManager | None = None,
    ) -> None:
        self.provider = provider
        self.language = language
        self.prompt_manager = prompt_manager or PromptManager()

    def build_prompt(self, commits: Sequence[Commit], repo_name: str) -> list[LLMMessage]:
        """Render the system and user messages for the model."""
        template = self.prompt_manager.get_template("changelog_entry")
        if template is None:
            raise GenerationError("Unknown prompt template: changelog_entry")

        system_prompt, user_prompt = template.render(
            commits=format_commits(commits),
            date_range=compute_date_range(commits),
            language=self.language,
            repo_name=repo_name,
        )
        return [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ]

    async def summarize(self, commits: Sequence[Commit], repo_name: str) -> str:
        """Generate the changelog entry for ``commits``.

        Raises:
            GenerationError: If there are no commits, the provider has no
                credential, or the model call fails or returns nothing.
        """
        if not commits:
            raise GenerationError("No commits provided for changelog generation")

        if not self.provider.has_credentials():
            raise GenerationError(
                f"API key is required for {self.provider.provider_name}"
            )

        messages = self.build_prompt(commits, repo_name)
        logger.info(
            "Generating changelog with {} ({})",
            self.provider.provider_name,
            self.provider.config.model,
        )

        try:
            response = await self.provider.generate(messages)
        except Exception as e:
            raise GenerationError(f"Error during AI changelog generation: {e}") from e

        if not response.content or not response.content.strip():
            raise GenerationError("Model returned an empty changelog entry")

        logger.debug(
            "Model usage: {} tokens ({})", response.usage.total_tokens, response.finish_reason
        )
        return normalize_entry(response.content)
