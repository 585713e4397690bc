"""Retry policy for candles lookups."""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

import backoff

from ledger_enrich.exceptions import RateLimited

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BACKOFF_SECONDS = 3.0


@dataclass(frozen=True)
class RetryPolicy:
    """
    Which errors are retried, how long to wait between attempts and how often.

    Attributes:
        backoff_seconds: Fixed wait before each retry.
        max_attempts: Total attempts before giving up, None retries forever.
        retry_on: Exception classes that trigger a retry, anything else propagates.
    """
    backoff_seconds: float = DEFAULT_BACKOFF_SECONDS
    max_attempts: Optional[int] = None
    retry_on: Tuple[Type[Exception], ...] = (RateLimited,)

    def wrap(self, func: Callable[..., T]) -> Callable[..., T]:
        # backoff logs the target by __name__, which callable objects and partials lack
        @functools.wraps(func)
        def attempt(*args: Any, **kwargs: Any) -> T:
            return func(*args, **kwargs)

        return backoff.on_exception(
            backoff.constant,
            self.retry_on,
            interval=self.backoff_seconds,
            max_tries=self.max_attempts,
            jitter=None,
            logger=logger,
        )(attempt)

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Calls ``func`` and retries it according to the policy."""
        return self.wrap(func)(*args, **kwargs)
