"""Shared fixtures: a fake HTTP session and a permit-counting limiter."""

import json

import pytest

from ledger_enrich.collectors import CoinbaseCandlesClient
from ledger_enrich.utils.retry import RetryPolicy

# 2021-01-02T03:00:00Z
BAR_TIME = 1609556400


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session, answering GETs from a queue."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class CountingLimiter:
    def __init__(self):
        self.permits = 0

    def acquire(self):
        self.permits += 1


def bar(timestamp=BAR_TIME, low=100, high=110, open_=90, close=105, volume=1000):
    return [timestamp, low, high, open_, close, volume]


@pytest.fixture
def limiter():
    return CountingLimiter()


@pytest.fixture
def make_client(limiter):
    """Builds a client whose session replays the given responses."""
    def _make(*responses, **kwargs):
        session = FakeSession(responses)
        client = CoinbaseCandlesClient(
            base_url="https://prices.test", limiter=limiter, session=session, **kwargs
        )
        return client, session
    return _make


@pytest.fixture
def no_wait_retry():
    return RetryPolicy(backoff_seconds=0)
