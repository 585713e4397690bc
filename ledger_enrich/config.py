"""Runtime settings, from defaults, an optional YAML file and the environment."""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from ledger_enrich.collectors.coinbase_candles import DEFAULT_API_URL
from ledger_enrich.selector import SELECTORS
from ledger_enrich.utils.limiter import DEFAULT_REQUESTS_PER_SECOND
from ledger_enrich.utils.retry import DEFAULT_BACKOFF_SECONDS

logger = logging.getLogger(__name__)

ENV_PREFIX = "LEDGER_ENRICH_"

# Setting name -> environment variable, all read with ENV_PREFIX
ENV_VARIABLES = {
    "api_url": "API_URL",
    "requests_per_second": "REQUESTS_PER_SECOND",
    "retry_backoff_seconds": "RETRY_BACKOFF",
    "retry_max_attempts": "RETRY_MAX_ATTEMPTS",
    "candle_selection": "CANDLE_SELECTION",
    "granularity": "GRANULARITY",
    "request_timeout": "REQUEST_TIMEOUT",
}


@dataclass
class Settings:
    """Settings for one enrichment run."""
    api_url: str = DEFAULT_API_URL
    requests_per_second: int = DEFAULT_REQUESTS_PER_SECOND
    retry_backoff_seconds: float = DEFAULT_BACKOFF_SECONDS
    retry_max_attempts: Optional[int] = None  # None retries rate limits forever
    candle_selection: str = "first"
    granularity: Optional[int] = None  # Bar size in seconds, service default when None
    request_timeout: Optional[float] = None

    def __post_init__(self):
        if self.candle_selection not in SELECTORS:
            raise ValueError(
                f"Unknown candle selection '{self.candle_selection}', "
                f"expected one of: {', '.join(SELECTORS)}"
            )
        if self.requests_per_second < 1:
            raise ValueError("requests_per_second must be at least 1")


_CONVERTERS = {
    "api_url": str,
    "requests_per_second": int,
    "retry_backoff_seconds": float,
    "retry_max_attempts": int,
    "candle_selection": str,
    "granularity": int,
    "request_timeout": float,
}


def _coerce(name: str, value: Any) -> Any:
    if value is None or value == "":
        return None
    return _CONVERTERS[name](value)


def _load_yaml(config_path: str) -> Dict[str, Any]:
    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        return {}
    if not isinstance(loaded, dict):
        logger.error(f"Ignoring {config_path}: expected a mapping at the top level")
        return {}

    known = {f.name for f in fields(Settings)}
    for key in set(loaded) - known:
        logger.warning(f"Ignoring unknown setting '{key}' in {config_path}")
    return {key: value for key, value in loaded.items() if key in known}


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Builds Settings. Environment variables (a .env file is honored) take
    precedence over the YAML file, which takes precedence over defaults.

    Args:
        config_path: Optional path to a YAML file of settings.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: Dict[str, Any] = {}
    if config_path and os.path.exists(config_path):
        values.update(_load_yaml(config_path))
    elif config_path:
        logger.warning(f"Configuration file {config_path} not found, using defaults.")

    for name, variable in ENV_VARIABLES.items():
        raw = os.getenv(ENV_PREFIX + variable)
        if raw is not None:
            values[name] = raw

    coerced = {name: _coerce(name, value) for name, value in values.items()}
    # Empty values fall back to the defaults for non-optional settings
    for name in ("api_url", "requests_per_second", "retry_backoff_seconds", "candle_selection"):
        if name in coerced and coerced[name] is None:
            del coerced[name]
    return Settings(**coerced)
