"""Run configuration.

The configuration is read once at startup into an immutable RunConfig and
passed explicitly to every stage.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from integrations.errors import ConfigError
from integrations.github.client import DEFAULT_API_URL
from integrations.llm.base import LLMConfig
from integrations.llm.providers import DEFAULT_MODELS

from .base import RepositoryRef

DEFAULT_COMMIT_COUNT = 10
DEFAULT_BRANCH = "main"
DEFAULT_CHANGELOG_PATH = "CHANGELOG.md"

# Environment variable holding the API key for each provider
API_KEY_VARIABLES = {
    "gemini": "GOOGLE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass(frozen=True)
class RunConfig:
    """Externally supplied run parameters."""

    github_token: str
    repository: RepositoryRef
    llm_provider: str
    llm: LLMConfig
    commit_count: int = DEFAULT_COMMIT_COUNT
    target_branch: str = DEFAULT_BRANCH
    language: str = "English"
    changelog_path: str = DEFAULT_CHANGELOG_PATH
    api_url: str = DEFAULT_API_URL
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with credentials masked."""
        return {
            "repository": self.repository.full_name,
            "llm_provider": self.llm_provider,
            "llm": self.llm.to_dict(),
            "commit_count": self.commit_count,
            "target_branch": self.target_branch,
            "language": self.language,
            "changelog_path": self.changelog_path,
            "api_url": self.api_url,
            "dry_run": self.dry_run,
        }


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, ""):
            return value
    return None


def _parse_count(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Commit count must be an integer, got {value!r}") from e
    if count < 1:
        raise ConfigError(f"Commit count must be positive, got {count}")
    return count


def load_config(
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> RunConfig:
    """Build the run configuration.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.
        overrides: Values from the command line; ``None`` entries are ignored.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If a credential is missing or a value is invalid.
    """
    env = os.environ if env is None else env
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    github_token = env.get("GITHUB_TOKEN") or env.get("GH_TOKEN")
    if not github_token:
        raise ConfigError("GITHUB_TOKEN is required")

    provider = str(_first(overrides.get("provider"), env.get("LLM_PROVIDER"), "gemini")).lower()
    if provider not in DEFAULT_MODELS:
        raise ConfigError(f"Unsupported LLM provider: {provider}")

    api_key = ""
    key_variable = API_KEY_VARIABLES.get(provider)
    if key_variable:
        api_key = env.get(key_variable, "")
        if not api_key:
            raise ConfigError(f"{key_variable} is required")

    slug = _first(overrides.get("repository"), env.get("GITHUB_REPOSITORY"))
    if not slug:
        raise ConfigError("GITHUB_REPOSITORY is required (owner/repo)")
    try:
        repository = RepositoryRef.parse(slug)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    llm = LLMConfig(
        api_key=api_key,
        model=_first(overrides.get("model"), env.get("LLM_MODEL"), DEFAULT_MODELS[provider]),
    )

    return RunConfig(
        github_token=github_token,
        repository=repository,
        llm_provider=provider,
        llm=llm,
        commit_count=_parse_count(
            _first(
                overrides.get("commit_count"),
                env.get("INPUT_COMMIT_COUNT"),
                DEFAULT_COMMIT_COUNT,
            )
        ),
        target_branch=_first(
            overrides.get("branch"),
            env.get("INPUT_BRANCH"),
            env.get("GITHUB_BASE_REF"),
            DEFAULT_BRANCH,
        ),
        language=_first(overrides.get("language"), env.get("CHANGELOG_LANGUAGE"), "English"),
        changelog_path=_first(env.get("CHANGELOG_PATH"), DEFAULT_CHANGELOG_PATH),
        api_url=_first(env.get("GITHUB_API_URL"), DEFAULT_API_URL),
        dry_run=bool(overrides.get("dry_run", False)),
    )
