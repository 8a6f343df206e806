"""
Anthropic Claude model client
"""

import logging
import os
import time

import anthropic
from anthropic import Anthropic

from sweep_gauge.domain.exceptions import ProviderError
from sweep_gauge.domain.value_objects import ModelResponse
from sweep_gauge.infrastructure.model_clients.base import (
    DEFAULT_MAX_TOKENS,
    ModelClient,
    elapsed_ms,
)

logger = logging.getLogger(__name__)


class ClaudeClient(ModelClient):
    """Claude client using the Anthropic API"""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Args:
            model_name: Model name (e.g. claude-haiku-4-5-20251001)
            api_key: Anthropic API key (falls back to environment variable if not specified)
            timeout_seconds: Request timeout in seconds (default: 30)
            max_tokens: Default completion token limit (default: 1024)
        """
        self.model_name = model_name
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.max_tokens = max_tokens

        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set")

        self.client = Anthropic(api_key=self.api_key, timeout=timeout_seconds, max_retries=0)

    def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        top_p: float,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> ModelResponse:
        model = model or self.model_name
        start_time = time.time()
        try:
            response = self.client.messages.create(
                model=model,
                max_tokens=max_tokens or self.max_tokens,
                temperature=temperature,
                top_p=top_p,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise ProviderError(f"Claude request failed: {e}", model) from e
        latency_ms = elapsed_ms(start_time)

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

        # Retrieve token usage
        input_tokens = getattr(response.usage, "input_tokens", 0) or 0
        output_tokens = getattr(response.usage, "output_tokens", 0) or 0

        logger.debug("Generated response in %dms", latency_ms)
        return ModelResponse(
            text=text,
            latency_ms=latency_ms,
            model_name=model,
            tokens_used=input_tokens + output_tokens,
        )
