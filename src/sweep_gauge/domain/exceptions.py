"""
Domain Exceptions

Client-facing errors (validation, not found) carry their specific message.
Internal failures are surfaced as OrchestrationError with a generic message.
"""

from sweep_gauge.domain.constants import GENERIC_ERROR_MESSAGE


class SweepGaugeError(Exception):
    """Base class for all sweep-gauge errors"""


class ValidationError(SweepGaugeError, ValueError):
    """Invalid request: rejected before any work starts"""


class NotFoundError(SweepGaugeError):
    """Unknown experiment id"""

    def __init__(self, experiment_id: str):
        super().__init__(f"Experiment {experiment_id} not found")
        self.experiment_id = experiment_id


class ProviderError(SweepGaugeError):
    """A generation call to the model provider failed"""

    def __init__(self, message: str, model_name: str | None = None):
        super().__init__(message)
        self.model_name = model_name


class OrchestrationError(SweepGaugeError):
    """Fatal failure while running or querying an experiment"""

    def __init__(
        self,
        message: str = GENERIC_ERROR_MESSAGE,
        experiment_id: str | None = None,
    ):
        super().__init__(message)
        self.experiment_id = experiment_id
