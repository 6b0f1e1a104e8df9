"""OpenAI Chat Completions Client"""

import logging

from commitcoach.llm.base import LLMClient, LLMResponse, LLMError, UpstreamError, SYSTEM_PROMPT, TEMPERATURE, MAX_TOKENS

logger = logging.getLogger(__name__)


class OpenAIClient(LLMClient):
    """OpenAI API client. The key comes from the proxy config."""

    DEFAULT_MODEL = "gpt-4o-mini"
    TIMEOUT = 60

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.model = model or self.DEFAULT_MODEL

        if not api_key:
            raise LLMError(
                "No API key found. Set OPENAI_API_KEY environment variable:\n"
                "  export OPENAI_API_KEY='your-key-here'"
            )

        try:
            from openai import OpenAI
        except ImportError:
            raise LLMError(
                "OpenAI SDK not installed. Run:\n"
                "  pip install openai"
            )
        # Retries are left to the caller
        self._client = OpenAI(api_key=api_key, max_retries=0, timeout=self.TIMEOUT)

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from openai import APIConnectionError, APIStatusError

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            raise UpstreamError(f"OpenAI error {e.status_code}: {body}", status=e.status_code, body=body)
        except APIConnectionError as e:
            raise UpstreamError(f"OpenAI request failed: {e}")

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        tokens = response.usage.total_tokens if response.usage else 0
        logger.debug("openai completion: model=%s tokens=%d", self.model, tokens)
        return LLMResponse(content=content.strip(), model=self.model, tokens_used=tokens)
