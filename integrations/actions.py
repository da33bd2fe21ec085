"""GitHub Actions run outputs.

Outputs are appended to the file named by ``GITHUB_OUTPUT``; failures are
reported with an ``::error::`` workflow command.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

from loguru import logger


def set_output(name: str, value: object, env: Mapping[str, str] | None = None) -> None:
    """Publish a step output. Outside Actions the value is only logged."""
    env = os.environ if env is None else env
    logger.info("Output {}={}", name, value)

    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        return

    with Path(output_path).open("a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def set_failed(message: str) -> None:
    """Emit the workflow failure annotation."""
    # Workflow commands must escape newlines and percent signs
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped}", file=sys.stdout, flush=True)
