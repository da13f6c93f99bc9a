from __future__ import annotations

import logging

from anthropic import Anthropic, APIError

from prdescriber_core.config import DEFAULT_CONFIG
from prdescriber_core.errors import GenerationError
from prdescriber_core.providers.base import BaseDescriber

logger = logging.getLogger(__name__)


class AnthropicDescriber(BaseDescriber):
    MODEL = DEFAULT_CONFIG["model"]

    def __init__(self, api_key: str, model: str | None = None, max_tokens: int | None = None):
        # max_retries=0: one attempt only, errors surface to the caller.
        self.client = Anthropic(api_key=api_key, max_retries=0)
        self.model = model or self.MODEL
        self.max_tokens = max_tokens or self.MAX_TOKENS

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=[
                    {
                        "type": "text",
                        "text": system_prompt,
                        "cache_control": {"type": "ephemeral"},
                    }
                ],
                messages=[{"role": "user", "content": user_prompt}],
            )
        except APIError as e:
            raise GenerationError("api error", f"Failed to generate PR description: {e}", cause=e) from e

        self._log_usage(response.usage)
        return self._extract_text(response.content)

    @staticmethod
    def _extract_text(content) -> str:
        if not content:
            raise GenerationError("empty content", "Claude API returned empty content")

        block = content[0]
        block_type = getattr(block, "type", None)
        if block_type != "text":
            raise GenerationError(
                "non-text content",
                f"Claude API returned non-text content (type: {block_type})",
            )

        text = getattr(block, "text", None)
        if text is None:
            raise GenerationError("missing text", "Claude API returned a text block without text")
        return text

    @staticmethod
    def _log_usage(usage) -> None:
        if usage is None:
            return
        logger.info("Input tokens: %s", usage.input_tokens)
        logger.info("Output tokens: %s", usage.output_tokens)
        cache_read = getattr(usage, "cache_read_input_tokens", None) or 0
        if cache_read > 0:
            logger.info("Cache hit: %d input tokens read from the prompt cache", cache_read)
