"""Changelog merger stage."""

from __future__ import annotations

import re

from loguru import logger

from .base import MergeResult

DATE_RANGE_PATTERN = re.compile(
    r"###\s+(\d{2}\.\d{2}\.\d{4}\s*-\s*\d{2}\.\d{2}\.\d{4})"
)


def changelog_header(repo_name: str) -> str:
    """Header line of the changelog document, followed by a blank line."""
    return f"## {repo_name} - Changelog\n\n"


def extract_date_range(entry: str) -> str | None:
    """Return the ``DD.MM.YYYY - DD.MM.YYYY`` range of the entry heading."""
    match = DATE_RANGE_PATTERN.search(entry)
    return match.group(1) if match else None


def merge_changelog(
    new_entry: str, repo_name: str, existing_content: str = ""
) -> MergeResult:
    """Insert ``new_entry`` as the first entry below the header.

    Args:
        new_entry: Normalized changelog entry.
        repo_name: Repository name used in the header.
        existing_content: Current document, empty if the file does not exist.

    Returns:
        The merged document and whether it differs from ``existing_content``.
    """
    header = changelog_header(repo_name)
    header_line = header.strip()

    # Plain substring test: any occurrence of the range counts as a duplicate
    date_range = extract_date_range(new_entry)
    if date_range and date_range in existing_content:
        logger.info("Changelog entry for {} already exists", date_range)
        return MergeResult(content=existing_content, has_changes=False)

    if not existing_content.strip() or header_line not in existing_content:
        return MergeResult(content=header + new_entry, has_changes=True)

    header_index = existing_content.find(header)
    if header_index != -1:
        after_header = existing_content[header_index + len(header) :]
    else:
        # Header line without the blank line after it
        line_index = existing_content.find(header_line)
        after_header = existing_content[line_index + len(header_line) :].lstrip("\n")

    return MergeResult(
        content=header + new_entry + "\n\n" + after_header, has_changes=True
    )
