"""Tests for the entry point: outputs, failure signal and exit codes."""

from __future__ import annotations

from pathlib import Path

import pytest

import main
from integrations.actions import set_failed, set_output
from integrations.errors import ConfigError, PublishError
from stages.base import RunOutcome, RunStatus

configure_logging = main._configure_logging


@pytest.fixture
def action_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Actions-like environment with a GITHUB_OUTPUT file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main, "_configure_logging", lambda level: None)
    output = tmp_path / "github_output"
    output.write_text("", encoding="utf-8")
    for name, value in {
        "GITHUB_TOKEN": "tok",
        "GITHUB_REPOSITORY": "octo/demo",
        "LLM_PROVIDER": "mock",
        "GITHUB_OUTPUT": str(output),
    }.items():
        monkeypatch.setenv(name, value)
    return output


def _fake_pipeline(monkeypatch: pytest.MonkeyPatch, outcome=None, error=None) -> list:
    created = []

    class FakePipeline:
        def __init__(self, config):
            created.append(config)

        async def run(self):
            if error:
                raise error
            return outcome

    monkeypatch.setattr(main, "ChangelogPipeline", FakePipeline)
    return created


def test_set_output_appends(tmp_path: Path) -> None:
    output = tmp_path / "out"
    set_output("pr_number", 3, env={"GITHUB_OUTPUT": str(output)})
    set_output("pr_url", "https://x", env={"GITHUB_OUTPUT": str(output)})
    assert output.read_text(encoding="utf-8") == "pr_number=3\npr_url=https://x\n"


def test_set_output_without_actions(tmp_path: Path) -> None:
    set_output("pr_number", 3, env={})
    assert list(tmp_path.iterdir()) == []


def test_set_failed_escapes_newlines(capsys: pytest.CaptureFixture[str]) -> None:
    set_failed("boom\nsecond line 100%")
    assert capsys.readouterr().out == "::error::boom%0Asecond line 100%25\n"


def test_run_reports_pull_request(monkeypatch, action_env: Path) -> None:
    created = _fake_pipeline(
        monkeypatch,
        outcome=RunOutcome(
            status=RunStatus.CREATED,
            commit_count=2,
            pr_number=12,
            pr_url="https://github.com/octo/demo/pull/12",
        ),
    )

    assert main.run(["--commit-count", "5", "--branch", "develop"]) == 0

    assert created[0].commit_count == 5
    assert created[0].target_branch == "develop"
    assert action_env.read_text(encoding="utf-8") == (
        "pr_number=12\npr_url=https://github.com/octo/demo/pull/12\n"
    )


def test_skipped_run_succeeds_without_outputs(monkeypatch, action_env: Path) -> None:
    _fake_pipeline(monkeypatch, outcome=RunOutcome(status=RunStatus.SKIPPED_NO_COMMITS))

    assert main.run([]) == 0
    assert action_env.read_text(encoding="utf-8") == ""


def test_stage_failure_sets_failed(monkeypatch, action_env: Path, capsys) -> None:
    _fake_pipeline(monkeypatch, error=PublishError("Error creating PR: Validation Failed", 422))

    assert main.run([]) == 1
    assert "::error::Action failed with error: Error creating PR" in capsys.readouterr().out


def test_missing_token_fails_before_pipeline(monkeypatch, action_env: Path, capsys) -> None:
    monkeypatch.delenv("GITHUB_TOKEN")
    monkeypatch.delenv("GH_TOKEN", raising=False)
    created = _fake_pipeline(monkeypatch, outcome=None)

    assert main.run([]) == 1
    assert created == []
    assert "GITHUB_TOKEN is required" in capsys.readouterr().out


def test_main_exits_with_code(monkeypatch) -> None:
    monkeypatch.setattr(main, "run", lambda argv=None: 1)
    with pytest.raises(SystemExit) as exc:
        main.main([])
    assert exc.value.code == 1


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ConfigError, match="Unknown log level: VERBOSE"):
        configure_logging("verbose")


def test_unknown_log_level_sets_failed(monkeypatch, action_env: Path, capsys) -> None:
    monkeypatch.setattr(main, "_configure_logging", configure_logging)
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    created = _fake_pipeline(monkeypatch, outcome=None)

    assert main.run([]) == 1
    assert created == []
    assert (
        "::error::Action failed with error: Unknown log level: VERBOSE"
        in capsys.readouterr().out
    )


def test_unwritable_output_sets_failed(monkeypatch, action_env: Path, capsys) -> None:
    # a directory cannot be opened for appending
    monkeypatch.setenv("GITHUB_OUTPUT", str(action_env.parent))
    _fake_pipeline(
        monkeypatch,
        outcome=RunOutcome(
            status=RunStatus.CREATED,
            commit_count=2,
            pr_number=12,
            pr_url="https://github.com/octo/demo/pull/12",
        ),
    )

    assert main.run([]) == 1
    assert "::error::Action failed with error:" in capsys.readouterr().out
