"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from commitcoach import FALLBACK_MESSAGE


SYSTEM_PROMPT = "You write one-line commit messages (<=72 chars) in the requested style."

TEMPERATURE = 0.2
MAX_TOKENS = 200


def message_or_fallback(text: str | None) -> str:
    """Trim a completion, substituting the fallback when nothing usable is left."""
    if not isinstance(text, str):
        return FALLBACK_MESSAGE
    return text.strip() or FALLBACK_MESSAGE


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class UpstreamError(LLMError):
    """The provider answered with a non-success status, or could not be reached."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
