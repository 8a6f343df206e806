"""
Parameter Combinations

Expands temperature x top-p ranges into the ordered list of generation tasks.
"""

from sweep_gauge.domain.exceptions import ValidationError
from sweep_gauge.domain.value_objects import GenerationTask, ParameterRanges


def generate_parameter_combinations(
    ranges: ParameterRanges,
    model: str,
) -> list[GenerationTask]:
    """
    Build the cartesian product of the parameter ranges

    Temperature is the outer dimension and top-p the inner one, both in the
    order supplied.

    Args:
        ranges: Parameter ranges to sweep
        model: Model identifier for every task

    Returns:
        list[GenerationTask]: len(temperatures) * len(top_p) tasks
    """
    return [
        GenerationTask(temperature=temperature, top_p=top_p, model=model)
        for temperature in ranges.temperatures
        for top_p in ranges.top_p
    ]


def validate_combination_count(count: int, max_combinations: int) -> None:
    """
    Reject sweeps larger than the configured maximum

    Raises:
        ValidationError: If count exceeds max_combinations
    """
    if count > max_combinations:
        raise ValidationError(
            f"Too many parameter combinations ({count}). "
            f"Maximum allowed is {max_combinations}"
        )
