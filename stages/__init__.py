"""
Pipeline stages for Changelog Assistant.

The stages run strictly in order:
- CommitFetcher: recent commits of the target branch
- ChangelogSummarizer: AI-written changelog entry
- merge_changelog: splice the entry into CHANGELOG.md
- ChangelogPublisher: branch, file write and pull request
"""

from .base import Commit, MergeResult, RepositoryRef, RunOutcome, RunStatus
from .config import RunConfig, load_config
from .fetcher import CommitFetcher
from .merger import merge_changelog
from .pipeline import ChangelogPipeline
from .publisher import ChangelogPublisher
from .summarizer import ChangelogSummarizer, normalize_entry

__all__ = [
    "Commit",
    "MergeResult",
    "RepositoryRef",
    "RunOutcome",
    "RunStatus",
    "RunConfig",
    "load_config",
    "CommitFetcher",
    "ChangelogSummarizer",
    "normalize_entry",
    "merge_changelog",
    "ChangelogPublisher",
    "ChangelogPipeline",
]
