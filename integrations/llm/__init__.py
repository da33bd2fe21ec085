"""
LLM integration package.

This package wraps the language-model services used to turn a list of
commits into a changelog entry.
"""

from .base import LLMConfig, LLMMessage, LLMProvider, LLMResponse, LLMUsage
from .prompts import CHANGELOG_ENTRY_TEMPLATE, PromptManager, PromptTemplate
from .providers import (
    DEFAULT_MODELS,
    AnthropicProvider,
    GeminiProvider,
    MockProvider,
    OpenAIProvider,
    create_provider,
)

__all__ = [
    "LLMProvider",
    "LLMConfig",
    "LLMMessage",
    "LLMResponse",
    "LLMUsage",
    "GeminiProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "MockProvider",
    "create_provider",
    "DEFAULT_MODELS",
    "PromptTemplate",
    "PromptManager",
    "CHANGELOG_ENTRY_TEMPLATE",
]
