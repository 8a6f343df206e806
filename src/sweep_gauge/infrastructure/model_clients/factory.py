"""
Model client factory

Creates the appropriate client instance based on the model name.
"""

from __future__ import annotations

from sweep_gauge.sweep_config import SweepConfig, load_config
from sweep_gauge.infrastructure.model_clients.base import ModelClient
from sweep_gauge.infrastructure.model_clients.claude import ClaudeClient
from sweep_gauge.infrastructure.model_clients.groq import GroqClient
from sweep_gauge.infrastructure.model_clients.lmstudio import LMSTUDIO_PREFIX, LMStudioClient
from sweep_gauge.infrastructure.model_clients.vertex_ai import VertexAIClient


def create_client(model_name: str, config: SweepConfig | None = None) -> ModelClient:
    """
    Create the appropriate client based on the model name

    - lmstudio/...: LMStudioClient
    - claude...: ClaudeClient
    - gemini...: VertexAIClient
    - anything else: GroqClient

    Args:
        model_name: Model name
        config: SweepConfig (loads from env if not provided)

    Returns:
        ModelClient: The appropriate client instance
    """
    if config is None:
        config = load_config()

    timeout = config.groq.timeout_seconds
    max_tokens = config.experiment.max_tokens

    if model_name.startswith(LMSTUDIO_PREFIX):
        return LMStudioClient(
            model_name,
            base_url=config.lmstudio.base_url,
            api_key=config.lmstudio.api_key,
            timeout_seconds=timeout,
            max_tokens=max_tokens,
        )
    elif model_name.startswith("claude"):
        return ClaudeClient(model_name, timeout_seconds=timeout, max_tokens=max_tokens)
    elif model_name.startswith("gemini"):
        return VertexAIClient(model_name, timeout_seconds=timeout, max_tokens=max_tokens)
    else:
        return GroqClient(
            model_name,
            api_key=config.groq.api_key,
            base_url=config.groq.base_url,
            timeout_seconds=timeout,
            max_tokens=max_tokens,
        )
