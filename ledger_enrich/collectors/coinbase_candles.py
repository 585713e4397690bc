"""Client for the Coinbase Exchange historical candles endpoint."""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import requests

from ledger_enrich.exceptions import LookupFailed, RateLimited
from ledger_enrich.models import Candle, CandleSeries
from ledger_enrich.utils.limiter import RequestLimiter
from ledger_enrich.utils.timeparse import format_timestamp

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.exchange.coinbase.com"
QUOTE_CURRENCY = "USD"

# Every lookup covers [instant, instant + LOOKUP_WINDOW)
LOOKUP_WINDOW = timedelta(hours=1)

# Candle rows are [time, low, high, open, close, volume]
TIME_INDEX = 0
CLOSE_INDEX = 4
VOLUME_INDEX = 5

RATE_LIMIT_MARKER = "rate limit"


def product_id(symbol: str) -> str:
    """Builds the pair identifier for a symbol, e.g. ``btc`` -> ``BTC-USD``."""
    return f"{symbol.upper()}-{QUOTE_CURRENCY}"


def is_rate_limited(status_code: int, body: str) -> bool:
    return status_code == 429 or RATE_LIMIT_MARKER in body.lower()


def _number(value: Any) -> Optional[float]:
    # JSON booleans decode to bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def rows_to_candles(raw: List[Any]) -> CandleSeries:
    """
    Converts decoded candle rows into Candles.

    Rows that are too short or whose time, close or volume is not a number
    are skipped.
    """
    candles: CandleSeries = []
    for row in raw:
        if not isinstance(row, list) or len(row) <= VOLUME_INDEX:
            logger.debug(f"Skipping malformed candle row: {row!r}")
            continue
        timestamp = _number(row[TIME_INDEX])
        volume = _number(row[VOLUME_INDEX])
        close = _number(row[CLOSE_INDEX])
        if timestamp is None or volume is None or close is None:
            logger.debug(f"Skipping candle row with non-numeric fields: {row!r}")
            continue
        candles.append(Candle(timestamp=int(timestamp), close=close, volume=volume))
    return candles


class CoinbaseCandlesClient:
    """
    Fetches the candles covering one hour from a given instant.

    Every request attempt takes one permit from the shared limiter right
    before it is sent. Failures are raised as LookupFailed, or RateLimited
    when the service reports its rate limit, so callers can retry those.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        limiter: Optional[RequestLimiter] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        granularity: Optional[int] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.limiter = limiter or RequestLimiter()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.granularity = granularity

    def candles_url(self, pair: str) -> str:
        return f"{self.base_url}/products/{pair}/candles"

    def window_params(self, start: datetime) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "start": format_timestamp(start),
            "end": format_timestamp(start + LOOKUP_WINDOW),
        }
        if self.granularity is not None:
            params["granularity"] = self.granularity
        return params

    def fetch_raw(self, pair: str, start: datetime) -> List[Any]:
        """Performs one request and returns the decoded JSON array."""
        url = self.candles_url(pair)
        params = self.window_params(start)

        self.limiter.acquire()
        logger.debug(f"GET {url} {params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise LookupFailed(f"Request for {pair} candles failed: {e}") from e

        if response.status_code != 200:
            body = response.text
            error_type = RateLimited if is_rate_limited(response.status_code, body) else LookupFailed
            raise error_type(
                f"Status code was not 200: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise LookupFailed(f"Could not decode {pair} candles: {e}", status_code=200, body=response.text) from e

        if not isinstance(payload, list):
            raise LookupFailed(
                f"Expected a JSON array of candles for {pair}, got {type(payload).__name__}",
                status_code=200,
                body=response.text,
            )
        return payload

    def fetch_bars(self, pair: str, start: datetime) -> CandleSeries:
        """Returns the usable candles for ``pair`` in the hour starting at ``start``."""
        candles = rows_to_candles(self.fetch_raw(pair, start))
        logger.debug(f"{pair} at {format_timestamp(start)}: {len(candles)} candles")
        return candles
