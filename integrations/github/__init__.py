"""
GitHub integration package for Changelog Assistant.

This package provides a small REST client for:
- Listing recent commits of a branch
- Reading and writing repository files
- Creating branches and pull requests
"""

from .client import GitHubClient, PullRequest, RepoFile, parse_repository

__all__ = ["GitHubClient", "PullRequest", "RepoFile", "parse_repository"]
