"""
Domain Constants

Centrally manages constants shared across the sweep engine.
"""

# Default generation model (overridden by DEFAULT_MODEL)
DEFAULT_MODEL = "mixtral-8x7b-32768"

# Upper bound on temperature x top-p combinations per experiment
DEFAULT_MAX_COMBINATIONS = 20

# Worker pool size for a sweep
DEFAULT_MAX_CONCURRENT_CALLS = 5

# Parameter ranges
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
TOP_P_MIN = 0.0
TOP_P_MAX = 1.0
MIN_RANGE_VALUES = 1
MAX_RANGE_VALUES = 5

# Prompt length (characters)
PROMPT_MIN_LENGTH = 1
PROMPT_MAX_LENGTH = 500

# Progress checkpoints: started, processing, responses_generated, complete
PROGRESS_TOTAL_STEPS = 4

# Score histogram buckets over [0, 1]
HISTOGRAM_BINS = 10

# Decimal places used to normalize parameter values into grouping keys
PARAMETER_KEY_PRECISION = 6

# Overall score weights (sum to 1.0)
SCORE_WEIGHTS = {
    "coherence": 0.25,
    "relevancy": 0.25,
    "completeness": 0.20,
    "repetition": 0.20,
    "length": 0.10,
}

# Preview lengths for listings and metric reports
LIST_PREVIEW_CHARS = 200
METRICS_PREVIEW_CHARS = 100

# Message returned to callers for unexpected internal failures
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."
