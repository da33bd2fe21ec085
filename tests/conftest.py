"""Shared fakes for the pipeline tests."""

from __future__ import annotations

from typing import Any

import pytest

from integrations.errors import GitHubAPIError
from integrations.github.client import PullRequest, RepoFile


def raw_commit(
    sha: str,
    message: str,
    date: str | None,
    author: str = "dev",
    committer_date: str | None = None,
) -> dict[str, Any]:
    """Build a commit payload shaped like the GitHub list-commits response."""
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": author, "date": date},
            "committer": {"name": author, "date": committer_date or date},
        },
    }


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient recording every call."""

    def __init__(self, owner: str = "octo", repo: str = "demo") -> None:
        self.owner = owner
        self.repo = repo
        self.commits: list[dict[str, Any]] = []
        self.files: dict[tuple[str, str], RepoFile] = {}
        self.branches: dict[str, str] = {"main": "base-sha"}
        self.errors: dict[str, GitHubAPIError] = {}
        self.calls: list[tuple[str, Any]] = []
        self.next_pr_number = 7

    def _maybe_fail(self, name: str) -> None:
        if name in self.errors:
            raise self.errors[name]

    def list_commits(self, ref: str, count: int) -> list[dict[str, Any]]:
        self.calls.append(("list_commits", (ref, count)))
        self._maybe_fail("list_commits")
        return self.commits[:count]

    def get_file(self, path: str, ref: str) -> RepoFile | None:
        self.calls.append(("get_file", (path, ref)))
        self._maybe_fail("get_file")
        return self.files.get((path, ref))

    def put_file(
        self, path: str, content: str, message: str, branch: str, sha: str | None = None
    ) -> dict[str, Any]:
        self.calls.append(("put_file", (path, branch, sha)))
        self._maybe_fail("put_file")
        self.files[(path, branch)] = RepoFile(path=path, content=content, sha="new-blob")
        return {"content": {"sha": "new-blob"}}

    def get_branch_sha(self, branch: str) -> str:
        self.calls.append(("get_branch_sha", branch))
        if branch not in self.branches:
            raise GitHubAPIError("Not Found", status_code=404)
        return self.branches[branch]

    def create_branch(self, branch: str, sha: str) -> None:
        self.calls.append(("create_branch", (branch, sha)))
        self._maybe_fail("create_branch")
        if branch in self.branches:
            raise GitHubAPIError("Reference already exists", status_code=422)
        self.branches[branch] = sha

    def create_pull_request(self, title: str, body: str, head: str, base: str) -> PullRequest:
        self.calls.append(("create_pull_request", (title, body, head, base)))
        self._maybe_fail("create_pull_request")
        number = self.next_pr_number
        return PullRequest(
            number=number,
            html_url=f"https://github.com/{self.owner}/{self.repo}/pull/{number}",
            head=head,
            base=base,
        )

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient()
