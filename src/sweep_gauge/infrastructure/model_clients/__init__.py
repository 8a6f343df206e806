"""
Model client package

Provides a unified interface to each LLM provider.
"""

from sweep_gauge.infrastructure.model_clients.base import ModelClient
from sweep_gauge.infrastructure.model_clients.factory import create_client
from sweep_gauge.domain.value_objects import ModelResponse

__all__ = ["ModelClient", "ModelResponse", "create_client"]
