"""Claude (Anthropic) LLM Client"""

import logging

from commitcoach.llm.base import LLMClient, LLMResponse, LLMError, UpstreamError, SYSTEM_PROMPT, TEMPERATURE, MAX_TOKENS

logger = logging.getLogger(__name__)


class ClaudeClient(LLMClient):
    """Claude API client. The key comes from the proxy config."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    TIMEOUT = 60

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.model = model or self.DEFAULT_MODEL

        if not api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )
        self._client = Anthropic(api_key=api_key, max_retries=0, timeout=self.TIMEOUT)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIConnectionError, APIStatusError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            raise UpstreamError(f"Claude error {e.status_code}: {body}", status=e.status_code, body=body)
        except APIConnectionError as e:
            raise UpstreamError(f"Claude request failed: {e}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        tokens = response.usage.input_tokens + response.usage.output_tokens
        logger.debug("claude completion: model=%s tokens=%d", self.model, tokens)
        return LLMResponse(content=content, model=self.model, tokens_used=tokens)
