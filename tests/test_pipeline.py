"""Tests for the whole-ledger pipeline."""

import logging

import pytest

from conftest import FakeResponse, bar
from ledger_enrich.enricher import RecordEnricher
from ledger_enrich.exceptions import InvalidTimestamp, PipelineAborted
from ledger_enrich.models import HISTORY
from ledger_enrich.pipeline import Pipeline

HEADER = ["id", "time", "amount", "type", "symbol"]


def history_rows(count):
    return [HEADER] + [
        [f"id{i}", "2021-01-02T03:04:05Z", str(i + 1), "trade", "btc"] for i in range(count)
    ]


def make_pipeline(make_client, no_wait_retry, responses):
    client, session = make_client(*responses)
    return Pipeline(RecordEnricher(client, HISTORY, no_wait_retry)), session


def test_order_and_count_are_preserved(make_client, no_wait_retry):
    rows = history_rows(12)
    pipeline, _ = make_pipeline(make_client, no_wait_retry, [FakeResponse(payload=[bar()])] * 12)
    output = pipeline.run(rows)

    assert len(output) == len(rows)
    assert output[0] == HEADER + ["usd-amount", "usd-price", "price-date"]
    for source, enriched in zip(rows[1:], output[1:]):
        assert enriched[:5] == source
        assert enriched[5] == f"{float(source[2]) * 105:f}"


def test_header_only(make_client, no_wait_retry):
    pipeline, session = make_pipeline(make_client, no_wait_retry, [])
    assert pipeline.run([HEADER]) == [HEADER + ["usd-amount", "usd-price", "price-date"]]
    assert session.calls == []


def test_empty_input(make_client, no_wait_retry):
    pipeline, _ = make_pipeline(make_client, no_wait_retry, [])
    assert pipeline.run([]) == []


def test_fatal_row_aborts_the_run(make_client, no_wait_retry):
    """The failing row and everything after it are left out."""
    rows = history_rows(4)
    rows[2][1] = "not-a-date"
    pipeline, session = make_pipeline(make_client, no_wait_retry, [FakeResponse(payload=[bar()])] * 4)

    with pytest.raises(PipelineAborted) as excinfo:
        pipeline.run(rows)

    aborted = excinfo.value
    assert aborted.row_index == 2
    assert isinstance(aborted.reason, InvalidTimestamp)
    assert isinstance(aborted.__cause__, InvalidTimestamp)
    assert [row[0] for row in aborted.completed] == ["id", "id0"]
    assert len(session.calls) == 1


def test_progress_every_ten_rows(make_client, no_wait_retry, caplog):
    rows = history_rows(20)
    pipeline, _ = make_pipeline(make_client, no_wait_retry, [FakeResponse(payload=[bar()])] * 20)
    with caplog.at_level(logging.INFO, logger="ledger_enrich.pipeline"):
        pipeline.run(rows)
    progress = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Completed")]
    assert progress == ["Completed 0/21", "Completed 10/21", "Completed 20/21"]
