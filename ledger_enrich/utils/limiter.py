"""Rate limiter shared by every candles request of a run."""

import logging

from pyrate_limiter import Limiter, Rate, Duration

logger = logging.getLogger(__name__)

# Key used for rate limiting candles requests
CANDLES_LIMIT_KEY = 'candles'

# The public candles endpoint allows a handful of calls per second, stay well under it
DEFAULT_REQUESTS_PER_SECOND = 2


class RequestLimiter:
    """
    Admits at most ``per_second`` requests per second.

    One instance is created per run and handed to every client, so the
    budget holds process-wide no matter which record issues the request.
    """

    def __init__(self, per_second: int = DEFAULT_REQUESTS_PER_SECOND, key: str = CANDLES_LIMIT_KEY):
        self.per_second = per_second
        self.key = key
        # raise_when_fail=False together with max_delay makes try_acquire wait
        # for a free slot instead of failing straight away.
        self._limiter = Limiter(
            Rate(per_second, Duration.SECOND),
            raise_when_fail=False,
            max_delay=2000,  # milliseconds
        )

    def acquire(self) -> None:
        """Blocks until one permit is available. Never fails."""
        while not self._limiter.try_acquire(self.key):
            logger.debug(f"No permit available for '{self.key}' yet, waiting again.")
