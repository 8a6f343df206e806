"""
Model client base class

Defines the abstract base class inherited by all model clients.
Clients make exactly one provider call per generate(); failures are raised
as ProviderError and never retried.
"""

import time
from abc import ABC, abstractmethod

from sweep_gauge.domain.value_objects import ModelResponse

DEFAULT_MAX_TOKENS = 1024


class ModelClient(ABC):
    """Abstract base class for model clients"""

    model_name: str
    max_tokens: int = DEFAULT_MAX_TOKENS

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        top_p: float,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> ModelResponse:
        """
        Send a prompt with the given sampling parameters

        Args:
            prompt: Input prompt
            temperature: Sampling temperature (0 to 2)
            top_p: Nucleus sampling probability mass (0 to 1)
            model: Model override (defaults to the client's model)
            max_tokens: Completion token limit (defaults to the client's limit)

        Returns:
            ModelResponse

        Raises:
            ProviderError: On any transport or API failure
        """


def elapsed_ms(start_time: float) -> int:
    """Milliseconds since start_time (a time.time() value)"""
    return int((time.time() - start_time) * 1000)
