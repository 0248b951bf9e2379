"""
Settings service for runtime configuration.

Values come from environment variables (optionally loaded from a .env file)
and are read on every call so tests can override them with monkeypatch.
"""

import os
import logging
from dotenv import load_dotenv

from team_roster.utils.constants import DEFAULT_STORE_LATENCY_SECONDS

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_bool_env(key: str, default: bool = True) -> bool:
    """
    Parse a boolean environment variable from a string value.

    Args:
        key: Environment variable name
        default: Default value if the variable is not set

    Returns:
        bool: Parsed boolean value
    """
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


def get_float_env(key: str, default: float) -> float:
    """
    Parse a float environment variable, falling back to the default on bad input.
    """
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid float for {key}={value!r}, using default {default}")
        return default


def get_store_latency_seconds() -> float:
    """Simulated latency applied before each store mutation."""
    latency = get_float_env("STORE_LATENCY_SECONDS", DEFAULT_STORE_LATENCY_SECONDS)
    if latency < 0:
        logger.warning(f"Negative STORE_LATENCY_SECONDS ({latency}), using 0")
        return 0.0
    return latency


def get_serialize_mutations() -> bool:
    """Whether store mutations queue behind one another instead of racing."""
    return get_bool_env("STORE_SERIALIZE_MUTATIONS", default=False)


def get_seed_sample_data() -> bool:
    """Whether a new store starts from the sample roster and schedule."""
    return get_bool_env("SEED_SAMPLE_DATA", default=True)


def get_log_level() -> str:
    """Log level name for the API server."""
    return os.getenv("LOG_LEVEL", "INFO").upper()
