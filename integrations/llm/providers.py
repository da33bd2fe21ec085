"""
LLM provider implementations.

Contains specific implementations for Google Gemini, OpenAI and Anthropic,
plus a mock provider for dry runs and tests.
"""

from typing import Any

try:
    import google.generativeai as genai

    GEMINI_AVAILABLE = True
except ImportError:
    GEMINI_AVAILABLE = False

try:
    from openai import AsyncOpenAI

    OPENAI_AVAILABLE = True
except ImportError:
    OPENAI_AVAILABLE = False

try:
    from anthropic import AsyncAnthropic

    ANTHROPIC_AVAILABLE = True
except ImportError:
    ANTHROPIC_AVAILABLE = False

from .base import LLMConfig, LLMMessage, LLMProvider, LLMResponse, LLMUsage

DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
    "mock": "mock-model",
}


def _split_system(messages: list[LLMMessage]) -> tuple[str | None, list[LLMMessage]]:
    system_message = None
    rest = []
    for msg in messages:
        if msg.role == "system":
            system_message = msg.content
        else:
            rest.append(msg)
    return system_message, rest


class GeminiProvider(LLMProvider):
    """
    Google Gemini LLM provider implementation.

    Uses the google-generativeai SDK async API.
    """

    def __init__(self, config: LLMConfig):
        if not GEMINI_AVAILABLE:
            raise ImportError(
                "google-generativeai package not installed. "
                "Run: pip install google-generativeai"
            )

        super().__init__(config)
        if config.api_key:
            genai.configure(api_key=config.api_key)

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate text using Gemini API."""

        system_message, user_messages = _split_system(messages)

        generation_config = genai.GenerationConfig(
            temperature=kwargs.get("temperature", self.config.temperature),
            top_p=kwargs.get("top_p", self.config.top_p),
            max_output_tokens=kwargs.get("max_tokens", self.config.max_tokens),
            response_mime_type="text/plain",
        )

        model = genai.GenerativeModel(
            model_name=self.config.model,
            generation_config=generation_config,
            system_instruction=system_message,
        )

        try:
            response = await model.generate_content_async(
                "\n\n".join(msg.content for msg in user_messages),
                request_options={"timeout": self.config.timeout},
            )

            text = response.text or ""
            usage = response.usage_metadata
            finish_reason = (
                response.candidates[0].finish_reason.name
                if response.candidates
                else "unknown"
            )

            return LLMResponse(
                content=text,
                usage=LLMUsage(
                    prompt_tokens=usage.prompt_token_count,
                    completion_tokens=usage.candidates_token_count,
                    total_tokens=usage.total_token_count,
                ),
                model=self.config.model,
                finish_reason=finish_reason,
                metadata={"provider": "gemini"},
            )

        except Exception as e:
            raise RuntimeError(f"Gemini API call failed: {str(e)}") from e


class OpenAIProvider(LLMProvider):
    """
    OpenAI LLM provider implementation.

    Supports GPT-4o and other OpenAI chat models.
    """

    def __init__(self, config: LLMConfig):
        if not OPENAI_AVAILABLE:
            raise ImportError("OpenAI package not installed. Run: pip install openai")

        super().__init__(config)
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate text using OpenAI API."""

        request_params = {
            "model": self.config.model,
            "messages": [msg.to_dict() for msg in messages],
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
            "top_p": kwargs.get("top_p", self.config.top_p),
        }

        try:
            response = await self.client.chat.completions.create(**request_params)

            choice = response.choices[0]
            usage = response.usage

            return LLMResponse(
                content=choice.message.content or "",
                usage=LLMUsage(
                    prompt_tokens=usage.prompt_tokens,
                    completion_tokens=usage.completion_tokens,
                    total_tokens=usage.total_tokens,
                ),
                model=response.model,
                finish_reason=choice.finish_reason,
                metadata={"provider": "openai"},
            )

        except Exception as e:
            raise RuntimeError(f"OpenAI API call failed: {str(e)}") from e


class AnthropicProvider(LLMProvider):
    """
    Anthropic LLM provider implementation.

    Supports Claude models.
    """

    def __init__(self, config: LLMConfig):
        if not ANTHROPIC_AVAILABLE:
            raise ImportError(
                "Anthropic package not installed. Run: pip install anthropic"
            )

        super().__init__(config)
        self.client = AsyncAnthropic(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate text using Anthropic API."""

        system_message, user_messages = _split_system(messages)

        request_params = {
            "model": self.config.model,
            "messages": [msg.to_dict() for msg in user_messages],
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
        }

        if system_message:
            request_params["system"] = system_message

        try:
            response = await self.client.messages.create(**request_params)

            usage = response.usage

            return LLMResponse(
                content=response.content[0].text,
                usage=LLMUsage(
                    prompt_tokens=usage.input_tokens,
                    completion_tokens=usage.output_tokens,
                    total_tokens=usage.input_tokens + usage.output_tokens,
                ),
                model=response.model,
                finish_reason=response.stop_reason,
                metadata={"provider": "anthropic"},
            )

        except Exception as e:
            raise RuntimeError(f"Anthropic API call failed: {str(e)}") from e


class MockProvider(LLMProvider):
    """
    Mock LLM provider for dry runs and testing.

    Returns predefined responses without actual API calls.
    """

    requires_api_key = False

    def __init__(self, config: LLMConfig, mock_responses: list[str] | None = None):
        super().__init__(config)
        self.mock_responses = mock_responses or ["- Mock changelog entry"]
        self.response_index = 0
        self.calls: list[list[LLMMessage]] = []

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate mock response."""

        self.calls.append(messages)

        prompt_text = " ".join([msg.content for msg in messages])
        prompt_tokens = self.estimate_tokens(prompt_text)

        response_text = self.mock_responses[
            self.response_index % len(self.mock_responses)
        ]
        completion_tokens = self.estimate_tokens(response_text)

        self.response_index += 1

        return LLMResponse(
            content=response_text,
            usage=LLMUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
            model="mock-model",
            finish_reason="stop",
            metadata={"provider": "mock", "test_mode": True},
        )


def create_provider(provider_type: str, config: LLMConfig) -> LLMProvider:
    """
    Factory function to create an LLM provider.

    Args:
        provider_type: Type of provider ('gemini', 'openai', 'anthropic', 'mock')
        config: LLM provider configuration

    Returns:
        Configured provider instance
    """
    if provider_type == "gemini":
        return GeminiProvider(config)
    elif provider_type == "openai":
        return OpenAIProvider(config)
    elif provider_type == "anthropic":
        return AnthropicProvider(config)
    elif provider_type == "mock":
        return MockProvider(config)
    raise ValueError(f"Unsupported provider type: {provider_type}")
