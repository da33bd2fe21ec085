"""
Pipeline Data Structures

This module defines the data structures shared by the changelog pipeline
stages. Raw GitHub payloads are converted into these types at the API
boundary; stages never read payload dicts directly.
"""

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from integrations.github.client import parse_repository


class RunStatus(Enum):
    """Final status of a pipeline run."""

    CREATED = "created"
    SKIPPED_NO_COMMITS = "skipped_no_commits"
    SKIPPED_NO_CHANGES = "skipped_no_changes"
    DRY_RUN = "dry_run"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Date-only and naive values are taken as UTC.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass(frozen=True)
class Commit:
    """A single commit as consumed by the summarizer."""

    sha: str
    message: str  # First line of the full commit message
    date: datetime
    author: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Commit":
        """Project a raw GitHub commit payload.

        Raises:
            KeyError, TypeError, ValueError: If the payload lacks required fields.
        """
        details = data["commit"]
        author = details.get("author") or {}
        committer = details.get("committer") or {}

        raw_date = author.get("date") or committer.get("date")
        if not raw_date:
            raise ValueError(f"Commit {data.get('sha')} has no author or committer date")

        message = details.get("message") or ""
        return cls(
            sha=data["sha"],
            message=message.split("\n")[0],
            date=parse_timestamp(raw_date),
            author=author.get("name") or "",
        )


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging a new entry into the changelog document."""

    content: str
    has_changes: bool


@dataclass(frozen=True)
class RepositoryRef:
    """Repository coordinates."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, slug: str) -> "RepositoryRef":
        """Create from an ``owner/repo`` slug."""
        owner, name = parse_repository(slug)
        return cls(owner=owner, name=name)


@dataclass
class RunOutcome:
    """Result of a pipeline run, reported by the entry point."""

    status: RunStatus
    commit_count: int = 0
    branch: str | None = None
    pr_number: int | None = None
    pr_url: str | None = None
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        result["status"] = self.status.value
        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)
