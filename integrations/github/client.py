"""GitHub REST client.
This module wraps the handful of GitHub REST v3 endpoints the changelog
pipeline needs:

1. Commit listing for a branch
2. File content read/write at a ref
3. Branch ref lookup and creation
4. Pull request creation

Responses are converted into small frozen dataclasses at this boundary so the
pipeline stages never touch raw payload dicts.
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Any, List, Optional

import requests
from loguru import logger

from integrations.errors import GitHubAPIError

DEFAULT_API_URL = "https://api.github.com"
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class RepoFile:
    """A file read from the repository at a given ref."""

    path: str
    content: str
    sha: str  # blob sha, required by the API to update the file


@dataclass(frozen=True)
class PullRequest:
    """A created pull request."""

    number: int
    html_url: str
    head: str
    base: str


def parse_repository(slug: str) -> tuple[str, str]:
    """Parse an ``owner/repo`` slug (or a github.com URL) into (owner, repo).

    Raises ValueError if parsing fails.
    """
    if not slug:
        raise ValueError("Empty repository slug")

    m = re.search(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$", slug)
    if m:
        return m.group(1), m.group(2)

    m = re.fullmatch(r"([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)", slug.strip())
    if m:
        return m.group(1), m.group(2)

    raise ValueError(f"Unable to parse GitHub repository: {slug}")


class GitHubClient:
    """Minimal GitHub REST client bound to a single repository.

    Usage:
        client = GitHubClient(token, "octo", "hello-world")
        commits = client.list_commits("main", 10)
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = DEFAULT_API_URL,
        timeout: int = 30,
    ) -> None:
        """Initialize the GitHubClient.

        Args:
            token (str): GitHub API token.
            owner (str): Repository owner.
            repo (str): Repository name.
            base_url (str, optional): GitHub API base URL. Defaults to "https://api.github.com".
            timeout (int, optional): Request timeout in seconds. Defaults to 30.
        """
        if not token:
            raise ValueError("GitHub token is required")
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": "changelog-assistant",
            }
        )

    @property
    def repo_url(self) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}"

    # --- Utility: single request, no retry ---
    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        """Make a request against the repository and return the decoded JSON.

        Args:
            method (str): HTTP method.
            path (str): Path relative to ``/repos/{owner}/{repo}``.
            params (Optional[dict], optional): Query parameters. Defaults to None.
            json (Optional[dict], optional): JSON body. Defaults to None.

        Raises:
            GitHubAPIError: On transport failure or any non-2xx response.
        """
        url = f"{self.repo_url}/{path.lstrip('/')}"
        logger.debug("GitHub {} {}", method, url)
        try:
            r = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise GitHubAPIError(
                f"{method} {url} failed: {exc}", status_code=None, url=url
            ) from exc

        if not r.ok:
            raise GitHubAPIError(
                f"{method} {url} returned {r.status_code}: {_error_message(r)}",
                status_code=r.status_code,
                url=url,
            )

        if not r.content:
            return None
        return r.json()

    # --- Commits ---
    def list_commits(self, ref: str, count: int) -> List[dict[str, Any]]:
        """List the most recent commits reachable from a ref.

        Args:
            ref (str): Branch name or commit SHA.
            count (int): Page size (1..100).

        Returns:
            List[dict[str, Any]]: Raw commit payloads, newest first.
        """
        per_page = max(1, min(count, MAX_PER_PAGE))
        if per_page != count:
            logger.warning(
                "Requested {} commits, the API returns at most {} per page; using {}",
                count,
                MAX_PER_PAGE,
                per_page,
            )
        data = self._request("GET", "commits", params={"sha": ref, "per_page": per_page})
        return list(data or [])

    # --- Files ---
    def get_file(self, path: str, ref: str) -> Optional[RepoFile]:
        """Get a file's decoded content and blob sha at a ref.

        Args:
            path (str): Path of the file inside the repository.
            ref (str): Branch, tag or commit to read from.

        Returns:
            Optional[RepoFile]: The file, or None if it does not exist.
        """
        try:
            data = self._request("GET", f"contents/{path}", params={"ref": ref})
        except GitHubAPIError as exc:
            if exc.is_not_found:
                return None
            raise

        # A directory listing comes back as a list
        if not isinstance(data, dict) or "content" not in data:
            return None

        content = base64.b64decode(data["content"]).decode("utf-8")
        return RepoFile(path=path, content=content, sha=data["sha"])

    def put_file(
        self,
        path: str,
        content: str,
        message: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create or update a file on a branch.

        Args:
            path (str): Path of the file inside the repository.
            content (str): New file content.
            message (str): Commit message.
            branch (str): Branch to commit to.
            sha (Optional[str], optional): Blob sha of the file being replaced.
                Omit to create the file.
        """
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha
        return self._request("PUT", f"contents/{path}", json=payload) or {}

    # --- Branches ---
    def get_branch_sha(self, branch: str) -> str:
        """Return the commit sha the branch ref points at."""
        data = self._request("GET", f"git/ref/heads/{branch}")
        return data["object"]["sha"]

    def create_branch(self, branch: str, sha: str) -> None:
        """Create ``refs/heads/<branch>`` pointing at ``sha``."""
        self._request("POST", "git/refs", json={"ref": f"refs/heads/{branch}", "sha": sha})

    # --- Pull requests ---
    def create_pull_request(
        self, title: str, body: str, head: str, base: str
    ) -> PullRequest:
        """Open a pull request from ``head`` into ``base``."""
        data = self._request(
            "POST",
            "pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        return PullRequest(
            number=data["number"],
            html_url=data["html_url"],
            head=head,
            base=base,
        )


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text
