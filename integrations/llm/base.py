"""
LLM provider base interface and data structures.

This module defines the base interface and common data structures that all
LLM providers must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class LLMConfig:
    """
    LLM provider configuration structure.

    Contains API key, model settings, parameters for each provider.
    """

    api_key: str  # API key
    model: str  # Model name
    base_url: str | None = None  # Custom API endpoint
    timeout: int = 60  # Request timeout (seconds)
    max_tokens: int = 2048  # Maximum token count
    temperature: float = 0.2  # Generation temperature
    top_p: float = 1.0  # Nucleus sampling parameter

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, masking the API key."""
        result = asdict(self)
        result["api_key"] = "***" if self.api_key else ""
        return result


@dataclass
class LLMMessage:
    """
    LLM conversation message structure.
    """

    role: str  # 'system', 'user', 'assistant'
    content: str  # Message content

    def to_dict(self) -> dict[str, Any]:
        """Convert message to dictionary."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMUsage:
    """
    LLM API usage information.
    """

    prompt_tokens: int  # Number of prompt tokens
    completion_tokens: int  # Number of completion tokens
    total_tokens: int  # Total token count


@dataclass
class LLMResponse:
    """
    LLM API response structure.
    """

    content: str  # Generated content
    usage: LLMUsage  # Token usage
    model: str  # Model used
    finish_reason: str  # Generation completion reason
    metadata: dict[str, Any] | None = None  # Additional metadata


class LLMProvider(ABC):
    """
    Base interface for LLM providers.

    All LLM providers must implement this interface.
    """

    requires_api_key: bool = True

    def __init__(self, config: LLMConfig):
        self.config = config
        self.provider_name = self.__class__.__name__

    @abstractmethod
    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """
        Generate text using LLM.

        Args:
            messages: List of conversation messages
            **kwargs: Additional parameters

        Returns:
            LLM response
        """
        pass

    def has_credentials(self) -> bool:
        """Whether the provider can authenticate against its service."""
        return bool(self.config.api_key) or not self.requires_api_key

    def estimate_tokens(self, text: str) -> int:
        """
        Estimate token count for text.

        Args:
            text: Text to analyze

        Returns:
            Estimated token count
        """
        # Simple estimation: 1 token ~ 4 characters for English
        return len(text) // 4
