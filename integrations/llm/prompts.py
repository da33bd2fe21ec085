"""
Prompt management system.

Manages template-based prompts for LLM requests.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class PromptTemplate:
    """
    Prompt template structure.

    Defines reusable prompt templates.
    """

    name: str  # Template name
    description: str  # Template description
    system_prompt: str  # System prompt
    user_prompt_template: str  # User prompt template
    version: str = "1.0.0"  # Template version
    variables: list[str] | None = None  # Template variables list

    def __post_init__(self) -> None:
        if self.variables is None:
            self.variables = []

    def render(self, **kwargs: Any) -> tuple[str, str]:
        """
        Render template into system prompt and user prompt.

        Args:
            **kwargs: Template variable values

        Returns:
            Tuple of (system_prompt, user_prompt)
        """
        try:
            system_prompt = self.system_prompt.format(**kwargs)
            user_prompt = self.user_prompt_template.format(**kwargs)
            return system_prompt, user_prompt
        except KeyError as e:
            raise ValueError(f"Missing template variable: {e}") from e


CHANGELOG_ENTRY_TEMPLATE = PromptTemplate(
    name="changelog_entry",
    description="Summarize a batch of commits into a single changelog entry",
    system_prompt="""You are a technical writer creating a changelog entry for a software project.
You write concise, professional changelog entries in {language}.""",
    user_prompt_template="""Analyze the following commits and create a changelog entry.

Commits to analyze:
{commits}

Requirements:
1. Create a changelog entry in the following format:
   ### {date_range}

   - Brief description of change 1
   - Brief description of change 2
   - Brief description of change 3

2. Group similar changes together
3. Use clear, concise language in {language}
4. Focus on user-visible changes and important technical improvements
5. Ignore trivial changes like typo fixes unless they are significant
6. Use bullet points starting with "- "
7. Each bullet point should be on a new line
8. Return ONLY the changelog entry (### date range and bullet points), nothing else
9. Do not include the repository name or any other headers

Example format:
### 07.04.2025 - 14.04.2025

- Fixed layout issues on the landing page
- Updated dependencies
- Migrated client-side code from jQuery to Svelte""",
    variables=["commits", "date_range", "language"],
)


class PromptManager:
    """
    Prompt template manager.

    Holds the templates available to the pipeline, keyed by name.
    """

    def __init__(self) -> None:
        self._templates: dict[str, PromptTemplate] = {}
        self.register_template(CHANGELOG_ENTRY_TEMPLATE)

    def register_template(self, template: PromptTemplate) -> None:
        """Register or replace a template."""
        self._templates[template.name] = template

    def get_template(self, name: str) -> PromptTemplate | None:
        """Get a template by name."""
        return self._templates.get(name)
