import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from integrations.actions import set_failed, set_output
from integrations.errors import ChangelogError, ConfigError
from stages.base import RunStatus
from stages.config import load_config
from stages.pipeline import ChangelogPipeline


def _load_env() -> None:
    """Load environment variables from .env if present."""
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _configure_logging(level: str) -> None:
    level = level.upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigError(f"Unknown log level: {level}") from e
    logger.remove()
    logger.add(sys.stderr, level=level)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize recent commits into CHANGELOG.md and open a pull request"
    )
    parser.add_argument("--repository", help="Repository as owner/repo (default: GITHUB_REPOSITORY)")
    parser.add_argument("--branch", help="Target branch (default: INPUT_BRANCH, GITHUB_BASE_REF or main)")
    parser.add_argument("--commit-count", type=int, help="Number of commits to analyze (default: 10)")
    parser.add_argument(
        "--provider",
        choices=["gemini", "openai", "anthropic", "mock"],
        help="LLM provider (default: LLM_PROVIDER or gemini)",
    )
    parser.add_argument("--model", help="Model name (default: provider's default)")
    parser.add_argument("--language", help="Language of the changelog prose (default: English)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Merge the changelog but do not create a branch or pull request",
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    return parser


def run(argv: list[str] | None = None) -> int:
    """Run the changelog pipeline and report its outcome.

    Args:
        argv: Optional list of CLI arguments (for testing). If None, sys.argv is used.

    Returns:
        Process exit code: 0 on success (including skipped runs), 1 on failure.
    """
    _load_env()

    args = _build_parser().parse_args(argv)

    try:
        _configure_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"))
        config = load_config(
            overrides={
                "repository": args.repository,
                "branch": args.branch,
                "commit_count": args.commit_count,
                "provider": args.provider,
                "model": args.model,
                "language": args.language,
                "dry_run": args.dry_run,
            }
        )
        logger.info(
            "Changelog Assistant starting (LLM_PROVIDER={})", config.llm_provider
        )
        logger.debug("Configuration: {}", config.to_dict())

        outcome = asyncio.run(ChangelogPipeline(config).run())

        logger.debug("Run outcome: {}", outcome.to_json())
        if outcome.status is RunStatus.CREATED:
            set_output("pr_number", outcome.pr_number)
            set_output("pr_url", outcome.pr_url)
        else:
            logger.info("Run finished without a pull request ({})", outcome.status.value)
    except ChangelogError as e:
        logger.error("{}: {}", e.code.value, e.message)
        set_failed(f"Action failed with error: {e.message}")
        return 1
    except Exception as e:
        logger.exception("Unexpected failure: {}", e)
        set_failed(f"Action failed with error: {e}")
        return 1

    return 0


def main(argv: list[str] | None = None) -> None:
    """Console entry point."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
