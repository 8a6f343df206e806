"""
LMStudio (OpenAI-compatible API) model client
"""

import os

from sweep_gauge.infrastructure.model_clients.base import DEFAULT_MAX_TOKENS
from sweep_gauge.infrastructure.model_clients.openai_compat import OpenAICompatibleClient

LMSTUDIO_PREFIX = "lmstudio/"


class LMStudioClient(OpenAICompatibleClient):
    """Client using LMStudio (OpenAI-compatible API)"""

    provider_name = "lmstudio"

    def __init__(
        self,
        model_name: str,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Args:
            model_name: Model name (e.g. lmstudio/qwen2.5-7b)
            base_url: LMStudio API endpoint (falls back to LMSTUDIO_BASE_URL env var if not specified)
            api_key: API key (falls back to LMSTUDIO_API_KEY env var if not specified; usually not required for LMStudio)
            timeout_seconds: Request timeout in seconds (default: 30)
            max_tokens: Default completion token limit (default: 1024)
        """
        # Configuration priority: argument > environment variable > default value
        base_url = base_url or os.environ.get("LMSTUDIO_BASE_URL", "http://localhost:1234/v1")
        api_key = api_key or os.environ.get("LMSTUDIO_API_KEY", "lm-studio")

        super().__init__(
            model_name,
            base_url=base_url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            max_tokens=max_tokens,
        )

    def _api_model_name(self, model: str) -> str:
        # Strip the lmstudio/ prefix to get the model name for the API
        return model.removeprefix(LMSTUDIO_PREFIX)
