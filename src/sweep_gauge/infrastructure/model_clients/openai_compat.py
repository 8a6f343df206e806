"""
OpenAI-compatible chat completions client

Shared by providers exposing the OpenAI chat completions API (Groq, LMStudio).
"""

import logging
import time

import openai
from openai import OpenAI

from sweep_gauge.domain.exceptions import ProviderError
from sweep_gauge.domain.value_objects import ModelResponse
from sweep_gauge.infrastructure.model_clients.base import (
    DEFAULT_MAX_TOKENS,
    ModelClient,
    elapsed_ms,
)

logger = logging.getLogger(__name__)


class OpenAICompatibleClient(ModelClient):
    """Client for any OpenAI-compatible chat completions endpoint"""

    provider_name = "openai-compatible"

    def __init__(
        self,
        model_name: str,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Args:
            model_name: Model name sent to the API
            base_url: API endpoint
            api_key: API key
            timeout_seconds: Request timeout in seconds (default: 30)
            max_tokens: Default completion token limit (default: 1024)
        """
        self.model_name = model_name
        self.base_url = base_url
        self.max_tokens = max_tokens
        # No SDK-level retries: one provider call per generate()
        self.client = OpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )

    def _api_model_name(self, model: str) -> str:
        return model

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
        logger.debug(
            "Generating with %s: model=%s temp=%s top_p=%s",
            self.provider_name, model, temperature, top_p,
        )

        start_time = time.time()
        try:
            response = self.client.chat.completions.create(
                model=self._api_model_name(model),
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                top_p=top_p,
                max_tokens=max_tokens or self.max_tokens,
            )
        except openai.APIError as e:
            raise ProviderError(f"{self.provider_name} request failed: {e}", model) from e
        latency_ms = elapsed_ms(start_time)

        text = ""
        if response.choices and response.choices[0].message.content:
            text = response.choices[0].message.content
        tokens_used = response.usage.total_tokens if response.usage else 0

        logger.debug("Generated response in %dms, tokens: %d", latency_ms, tokens_used or 0)
        return ModelResponse(
            text=text,
            latency_ms=latency_ms,
            model_name=model,
            tokens_used=tokens_used or 0,
        )
