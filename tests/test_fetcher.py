"""Tests for the CommitFetcher stage."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from conftest import FakeGitHubClient, raw_commit
from integrations.errors import FetchError, GitHubAPIError
from stages.base import Commit
from stages.fetcher import CommitFetcher


def test_projects_raw_payload(fake_client: FakeGitHubClient) -> None:
    """Only the first message line is kept and author fields are used."""
    fake_client.commits = [
        raw_commit(
            "abc1234567",
            "feat: add export\n\nLonger body text",
            "2024-01-07T10:00:00Z",
            author="Ada",
        )
    ]

    commits = CommitFetcher(fake_client).fetch("main", 10)

    assert commits == [
        Commit(
            sha="abc1234567",
            message="feat: add export",
            date=datetime(2024, 1, 7, 10, 0, tzinfo=UTC),
            author="Ada",
        )
    ]
    assert fake_client.calls[0] == ("list_commits", ("main", 10))


def test_falls_back_to_committer_date(fake_client: FakeGitHubClient) -> None:
    fake_client.commits = [
        raw_commit("a1", "fix", None, committer_date="2024-02-01T00:00:00Z")
    ]
    commits = CommitFetcher(fake_client).fetch("main", 10)
    assert commits[0].date == datetime(2024, 2, 1, tzinfo=UTC)


def test_sorted_newest_first(fake_client: FakeGitHubClient) -> None:
    fake_client.commits = [
        raw_commit("old", "old", "2024-01-01T00:00:00Z"),
        raw_commit("new", "new", "2024-01-07T00:00:00Z"),
        raw_commit("mid", "mid", "2024-01-03T00:00:00Z"),
    ]
    commits = CommitFetcher(fake_client).fetch("main", 10)
    assert [c.sha for c in commits] == ["new", "mid", "old"]


def test_fewer_commits_than_requested(fake_client: FakeGitHubClient) -> None:
    fake_client.commits = [raw_commit("a1", "only", "2024-01-01T00:00:00Z")]
    assert len(CommitFetcher(fake_client).fetch("main", 10)) == 1


def test_empty_repository_yields_no_commits(fake_client: FakeGitHubClient) -> None:
    fake_client.errors["list_commits"] = GitHubAPIError(
        "Git Repository is empty.", status_code=409
    )
    assert CommitFetcher(fake_client).fetch("main", 10) == []


def test_api_error_raises_fetch_error(fake_client: FakeGitHubClient) -> None:
    fake_client.errors["list_commits"] = GitHubAPIError("Not Found", status_code=404)

    with pytest.raises(FetchError) as exc:
        CommitFetcher(fake_client).fetch("missing-branch", 10)

    assert exc.value.status_code == 404


def test_malformed_payload_raises_fetch_error(fake_client: FakeGitHubClient) -> None:
    fake_client.commits = [{"sha": "a1"}]
    with pytest.raises(FetchError):
        CommitFetcher(fake_client).fetch("main", 10)
