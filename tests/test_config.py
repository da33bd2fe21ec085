"""Tests for run configuration loading."""

import pytest

from integrations.errors import ConfigError
from stages.config import load_config

BASE_ENV = {
    "GITHUB_TOKEN": "tok",
    "GOOGLE_API_KEY": "key",
    "GITHUB_REPOSITORY": "octo/demo",
}


def test_defaults():
    config = load_config(BASE_ENV)

    assert config.repository.full_name == "octo/demo"
    assert config.commit_count == 10
    assert config.target_branch == "main"
    assert config.llm_provider == "gemini"
    assert config.llm.model == "gemini-2.0-flash"
    assert config.llm.api_key == "key"
    assert config.changelog_path == "CHANGELOG.md"
    assert config.dry_run is False


def test_missing_github_token():
    env = dict(BASE_ENV)
    del env["GITHUB_TOKEN"]
    with pytest.raises(ConfigError, match="GITHUB_TOKEN"):
        load_config(env)


def test_missing_model_key():
    env = dict(BASE_ENV)
    del env["GOOGLE_API_KEY"]
    with pytest.raises(ConfigError, match="GOOGLE_API_KEY"):
        load_config(env)


def test_provider_specific_key():
    env = {**BASE_ENV, "LLM_PROVIDER": "openai"}
    with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
        load_config(env)

    config = load_config({**env, "OPENAI_API_KEY": "sk"})
    assert config.llm.api_key == "sk"
    assert config.llm.model == "gpt-4o-mini"


def test_mock_provider_needs_no_key():
    env = {"GITHUB_TOKEN": "tok", "GITHUB_REPOSITORY": "octo/demo", "LLM_PROVIDER": "mock"}
    assert load_config(env).llm.api_key == ""


def test_branch_precedence():
    assert load_config({**BASE_ENV, "GITHUB_BASE_REF": "develop"}).target_branch == "develop"
    assert (
        load_config(
            {**BASE_ENV, "GITHUB_BASE_REF": "develop", "INPUT_BRANCH": "release"}
        ).target_branch
        == "release"
    )
    assert (
        load_config({**BASE_ENV, "INPUT_BRANCH": "release"}, {"branch": "cli"}).target_branch
        == "cli"
    )


def test_empty_inputs_fall_back_to_defaults():
    config = load_config({**BASE_ENV, "INPUT_BRANCH": "", "INPUT_COMMIT_COUNT": ""})
    assert config.target_branch == "main"
    assert config.commit_count == 10


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_commit_count(value):
    with pytest.raises(ConfigError):
        load_config({**BASE_ENV, "INPUT_COMMIT_COUNT": value})


def test_overrides_ignore_none():
    config = load_config(
        {**BASE_ENV, "INPUT_COMMIT_COUNT": "25"},
        {"commit_count": None, "dry_run": True, "language": "Polish"},
    )
    assert config.commit_count == 25
    assert config.dry_run is True
    assert config.language == "Polish"


def test_invalid_repository():
    with pytest.raises(ConfigError):
        load_config({**BASE_ENV, "GITHUB_REPOSITORY": "nope"})


def test_unsupported_provider():
    with pytest.raises(ConfigError):
        load_config({**BASE_ENV, "LLM_PROVIDER": "cohere"})


def test_to_dict_masks_credentials():
    data = load_config(BASE_ENV).to_dict()
    assert "github_token" not in data
    assert data["llm"]["api_key"] == "***"
