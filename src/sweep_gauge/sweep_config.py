"""
Sweep Configuration

Manages loading from environment variables and default values.
"""

import os
from dataclasses import dataclass, field, asdict

from sweep_gauge.domain.constants import (
    DEFAULT_MAX_COMBINATIONS,
    DEFAULT_MAX_CONCURRENT_CALLS,
    DEFAULT_MODEL,
)

STORAGE_BACKENDS = ("json", "memory")


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


def _env_optional_str(key: str) -> str | None:
    """Get an environment variable, treating empty values as unset"""
    val = os.environ.get(key)
    return val or None


@dataclass
class ExperimentConfig:
    """Sweep limits and generation defaults"""
    max_combinations: int = DEFAULT_MAX_COMBINATIONS
    max_concurrent_calls: int = DEFAULT_MAX_CONCURRENT_CALLS
    default_model: str = DEFAULT_MODEL
    max_tokens: int = 1024

    def __post_init__(self):
        if self.max_combinations < 1:
            raise ValueError("max_combinations must be at least 1.")
        if self.max_concurrent_calls < 1:
            raise ValueError("max_concurrent_calls must be at least 1.")


@dataclass
class GroqConfig:
    """Groq (OpenAI-compatible endpoint) configuration"""
    api_key: str | None = None
    base_url: str = "https://api.groq.com/openai/v1"
    request_timeout_ms: int = 30000

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000


@dataclass
class LMStudioConfig:
    """LMStudio (OpenAI-compatible local LLM) configuration"""
    base_url: str = "http://localhost:1234/v1"
    api_key: str = "lm-studio"


@dataclass
class StorageConfig:
    """Experiment store configuration"""
    backend: str = "json"  # json / memory
    data_dir: str = "data"

    def __post_init__(self):
        if self.backend not in STORAGE_BACKENDS:
            raise ValueError(f"Unknown storage backend: {self.backend} (available: {list(STORAGE_BACKENDS)})")


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class SweepConfig:
    """Overall sweep-gauge configuration"""
    experiment: ExperimentConfig = field(default_factory=ExperimentConfig)
    groq: GroqConfig = field(default_factory=GroqConfig)
    lmstudio: LMStudioConfig = field(default_factory=LMStudioConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"sweep_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "SweepConfig":
        """Create from dictionary (handles presence/absence of sweep_config key)"""
        config_data = data.get("sweep_config", data)
        return cls(
            experiment=ExperimentConfig(**config_data.get("experiment", {})),
            groq=GroqConfig(**config_data.get("groq", {})),
            lmstudio=LMStudioConfig(**config_data.get("lmstudio", {})),
            storage=StorageConfig(**config_data.get("storage", {})),
            logging=LoggingConfig(**config_data.get("logging", {})),
        )


def load_config() -> SweepConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        SweepConfig
    """
    experiment = ExperimentConfig(
        max_combinations=_env_int("MAX_PARAMETER_COMBINATIONS", DEFAULT_MAX_COMBINATIONS),
        max_concurrent_calls=_env_int("MAX_CONCURRENT_LLM_CALLS", DEFAULT_MAX_CONCURRENT_CALLS),
        default_model=_env_str("DEFAULT_MODEL", DEFAULT_MODEL),
        max_tokens=_env_int("MAX_TOKENS", 1024),
    )
    groq = GroqConfig(
        api_key=_env_optional_str("GROQ_API_KEY"),
        base_url=_env_str("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
        request_timeout_ms=_env_int("REQUEST_TIMEOUT_MS", 30000),
    )
    lmstudio = LMStudioConfig(
        base_url=_env_str("LMSTUDIO_BASE_URL", "http://localhost:1234/v1"),
        api_key=_env_str("LMSTUDIO_API_KEY", "lm-studio"),
    )
    storage = StorageConfig(
        backend=_env_str("SWEEP_STORAGE_BACKEND", "json"),
        data_dir=_env_str("SWEEP_DATA_DIR", "data"),
    )
    logging_config = LoggingConfig(level=_env_str("SWEEP_LOG_LEVEL", "INFO").upper())
    return SweepConfig(
        experiment=experiment,
        groq=groq,
        lmstudio=lmstudio,
        storage=storage,
        logging=logging_config,
    )
