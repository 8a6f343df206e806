"""
Groq model client (OpenAI-compatible endpoint)
"""

import os

from sweep_gauge.infrastructure.model_clients.base import DEFAULT_MAX_TOKENS
from sweep_gauge.infrastructure.model_clients.openai_compat import OpenAICompatibleClient

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqClient(OpenAICompatibleClient):
    """Client using the Groq API"""

    provider_name = "groq"

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Args:
            model_name: Model name (e.g. mixtral-8x7b-32768)
            api_key: Groq API key (falls back to GROQ_API_KEY if not specified)
            base_url: API endpoint (falls back to GROQ_BASE_URL, then the public endpoint)
            timeout_seconds: Request timeout in seconds (default: 30)
            max_tokens: Default completion token limit (default: 1024)
        """
        api_key = api_key or os.environ.get("GROQ_API_KEY")
        if not api_key:
            raise ValueError("GROQ_API_KEY is not set")

        super().__init__(
            model_name,
            base_url=base_url or os.environ.get("GROQ_BASE_URL", GROQ_BASE_URL),
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            max_tokens=max_tokens,
        )
