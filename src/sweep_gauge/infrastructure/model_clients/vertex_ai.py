"""
Vertex AI (Google GenAI SDK) model client
"""

import logging
import os
import time

from google import genai
from google.genai import errors as genai_errors
from google.genai.types import GenerateContentConfig, HttpOptions

from sweep_gauge.domain.exceptions import ProviderError
from sweep_gauge.domain.value_objects import ModelResponse
from sweep_gauge.infrastructure.model_clients.base import (
    DEFAULT_MAX_TOKENS,
    ModelClient,
    elapsed_ms,
)

logger = logging.getLogger(__name__)


class VertexAIClient(ModelClient):
    """Model client using Google GenAI SDK (via Vertex AI)"""

    def __init__(
        self,
        model_name: str,
        project_id: str | None = None,
        location: str | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Args:
            model_name: Model name (e.g. gemini-2.5-flash)
            project_id: GCP project ID (falls back to environment variable if not specified)
            location: Region (default: global)
            timeout_seconds: Timeout in seconds (default: 30)
            max_tokens: Default completion token limit (default: 1024)
        """
        self.model_name = model_name
        self.project_id = project_id or os.environ.get("GCP_PROJECT_ID")
        self.location = location or "global"
        self.max_tokens = max_tokens

        if not self.project_id:
            raise ValueError("GCP_PROJECT_ID is not set")

        # Timeout is configured via HttpOptions (milliseconds)
        self.client = genai.Client(
            vertexai=True,
            project=self.project_id,
            location=self.location,
            http_options=HttpOptions(timeout=int(timeout_seconds * 1000)),
        )

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
        config = GenerateContentConfig(
            temperature=temperature,
            top_p=top_p,
            max_output_tokens=max_tokens or self.max_tokens,
        )

        start_time = time.time()
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            raise ProviderError(f"Vertex AI request failed: {e}", model) from e
        latency_ms = elapsed_ms(start_time)

        # Retrieve token usage
        tokens_used = 0
        if getattr(response, "usage_metadata", None):
            tokens_used = getattr(response.usage_metadata, "total_token_count", 0) or 0

        logger.debug("Generated response in %dms, tokens: %d", latency_ms, tokens_used)
        return ModelResponse(
            text=response.text or "",
            latency_ms=latency_ms,
            model_name=model,
            tokens_used=tokens_used,
        )
