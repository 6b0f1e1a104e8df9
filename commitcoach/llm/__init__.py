"""LLM Client Package"""

from commitcoach.llm.base import (
    LLMClient, LLMResponse, LLMError, UpstreamError, SYSTEM_PROMPT, message_or_fallback,
)
from commitcoach.llm.claude import ClaudeClient
from commitcoach.llm.openai_client import OpenAIClient

PROVIDERS = {
    "openai": OpenAIClient,
    "claude": ClaudeClient,
}


def get_client(provider: str = "openai", api_key: str | None = None, model: str | None = None) -> LLMClient:
    """Get an upstream LLM client. Provider can be 'openai' or 'claude'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](api_key=api_key, model=model)

    raise LLMError(f"Unknown provider: {provider}. Use 'openai' or 'claude'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "UpstreamError",
    "ClaudeClient",
    "OpenAIClient",
    "get_client",
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "message_or_fallback",
]
