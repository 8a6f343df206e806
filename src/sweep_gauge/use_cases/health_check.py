"""
Health Check

Performs connectivity checks for model providers.
"""

from typing import Callable

from sweep_gauge.domain.entities import HealthCheckResult
from sweep_gauge.infrastructure.model_clients.base import ModelClient


HEALTH_CHECK_PROMPT = "Hello"
HEALTH_CHECK_TEMPERATURE = 0.7
HEALTH_CHECK_TOP_P = 0.9
HEALTH_CHECK_MAX_TOKENS = 10


def health_check_model(
    model_name: str,
    create_client_fn: Callable[[str], ModelClient],
) -> HealthCheckResult:
    """
    Execute a health check for a single model.

    Args:
        model_name: Name of the model to check
        create_client_fn: Function to create a model client

    Returns:
        HealthCheckResult: Health check result
    """
    try:
        client = create_client_fn(model_name)
        response = client.generate(
            HEALTH_CHECK_PROMPT,
            temperature=HEALTH_CHECK_TEMPERATURE,
            top_p=HEALTH_CHECK_TOP_P,
            max_tokens=HEALTH_CHECK_MAX_TOKENS,
        )
        return HealthCheckResult(
            model_name=model_name,
            success=True,
            latency_ms=response.latency_ms,
            error=None,
        )
    except Exception as e:
        return HealthCheckResult(
            model_name=model_name,
            success=False,
            latency_ms=None,
            error=str(e),
        )


def run_health_check(
    models: list[str],
    create_client_fn: Callable[[str], ModelClient] | None = None,
) -> tuple[list[str], list[HealthCheckResult]]:
    """
    Execute health checks for all models and print the outcome of each.

    Uses sweep_gauge.infrastructure.model_clients.create_client if
    create_client_fn is not specified.

    Args:
        models: List of model names to check
        create_client_fn: Function to create a model client (optional)

    Returns:
        tuple: (list of available models, list of all check results)
    """
    if create_client_fn is None:
        from sweep_gauge.infrastructure.model_clients import create_client
        create_client_fn = create_client

    print("=== Model Health Check ===\n")
    results = []
    available_models = []

    for model_name in models:
        print(f"  {model_name}... ", end="", flush=True)
        result = health_check_model(model_name, create_client_fn)
        results.append(result)

        if result.success:
            print(f"OK ({result.latency_ms}ms)")
            available_models.append(model_name)
        else:
            # Only the first 100 characters of the error
            error_short = result.error[:100] if result.error else "Unknown error"
            print("FAILED")
            print(f"    Error: {error_short}")

    print()
    return available_models, results
