"""LLM provider wrappers used by the AI relevance scorer."""
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from anthropic import Anthropic
from openai import OpenAI

DEFAULT_MODELS = {
    "claude": "claude-3-5-haiku-20241022",
    "openai": "gpt-4o",
}


def _resolve_api_key(api_key: Optional[str], env_var: str, vendor: str) -> str:
    key = api_key or os.getenv(env_var)
    if not key:
        raise ValueError(f"{vendor} API key must be provided or set in {env_var} environment variable")
    return key


class AIProvider(ABC):
    """Text generation backend."""

    model: str

    @abstractmethod
    def generate(
        self,
        prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        system: Optional[str] = None,
    ) -> str:
        """
        Send one prompt and return the model's text reply.

        Args:
            prompt: User message.
            max_tokens: Reply length limit.
            temperature: Sampling temperature (0.0 to 1.0).
            system: Optional system instruction.

        Raises:
            RuntimeError: If the API call fails.
        """
        pass


class ClaudeProvider(AIProvider):
    """Anthropic Messages API."""

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODELS["claude"]):
        """
        Args:
            api_key: Anthropic key; falls back to ANTHROPIC_API_KEY.
            model: Claude model id.

        Raises:
            ValueError: If no key is available.
        """
        self.api_key = _resolve_api_key(api_key, "ANTHROPIC_API_KEY", "Anthropic")
        self.model = model
        self.client = Anthropic(api_key=self.api_key)

    def generate(
        self,
        prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        system: Optional[str] = None,
    ) -> str:
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            response = self.client.messages.create(**request)
        except Exception as e:
            raise RuntimeError(f"Claude API error: {str(e)}") from e
        return response.content[0].text


class OpenAIProvider(AIProvider):
    """OpenAI Chat Completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODELS["openai"],
        json_mode: bool = True,
    ):
        """
        Args:
            api_key: OpenAI key; falls back to OPENAI_API_KEY.
            model: GPT model id.
            json_mode: Request a JSON object reply (response_format).

        Raises:
            ValueError: If no key is available.
        """
        self.api_key = _resolve_api_key(api_key, "OPENAI_API_KEY", "OpenAI")
        self.model = model
        self.json_mode = json_mode
        self.client = OpenAI(api_key=self.api_key)

    def generate(
        self,
        prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        system: Optional[str] = None,
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if self.json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**request)
        except Exception as e:
            raise RuntimeError(f"OpenAI API error: {str(e)}") from e
        return response.choices[0].message.content or ""


PROVIDERS = {
    "claude": ClaudeProvider,
    "openai": OpenAIProvider,
}


def create_provider(
    provider_type: str, api_key: Optional[str] = None, model: Optional[str] = None
) -> AIProvider:
    """
    Build a provider by name.

    Args:
        provider_type: "claude" or "openai" (case-insensitive).
        api_key: Explicit key; otherwise the provider's environment variable.
        model: Model id; otherwise the provider default.

    Raises:
        ValueError: Unknown provider name, or missing API key.
    """
    provider_cls = PROVIDERS.get(provider_type.lower())
    if provider_cls is None:
        raise ValueError(
            f"Unsupported AI provider: {provider_type}. "
            f"Supported providers: {', '.join(sorted(PROVIDERS))}"
        )
    return provider_cls(api_key=api_key, model=model or DEFAULT_MODELS[provider_type.lower()])
