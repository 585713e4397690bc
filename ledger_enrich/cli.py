"""Command line entry point: ``ledger-enrich fills`` and ``ledger-enrich history``."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ledger_enrich.collectors.coinbase_candles import CoinbaseCandlesClient
from ledger_enrich.config import Settings, load_settings
from ledger_enrich.enricher import RecordEnricher
from ledger_enrich.exceptions import PipelineAborted
from ledger_enrich.models import FILLS, HISTORY, SchemaVariant
from ledger_enrich.pipeline import Pipeline
from ledger_enrich.selector import get_selector
from ledger_enrich.storage import read_rows, remove_existing, write_rows
from ledger_enrich.utils.limiter import RequestLimiter
from ledger_enrich.utils.logging_config import setup_logging
from ledger_enrich.utils.retry import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("modified.csv")

app = typer.Typer(add_completion=False, help="Attach historical USD prices to trade ledgers.")


def build_client(settings: Settings) -> CoinbaseCandlesClient:
    """Creates the candles client for a run, with its own shared limiter."""
    return CoinbaseCandlesClient(
        base_url=settings.api_url,
        limiter=RequestLimiter(settings.requests_per_second),
        timeout=settings.request_timeout,
        granularity=settings.granularity,
    )


def build_enricher(schema: SchemaVariant, settings: Settings) -> RecordEnricher:
    return RecordEnricher(
        client=build_client(settings),
        schema=schema,
        retry_policy=RetryPolicy(
            backoff_seconds=settings.retry_backoff_seconds,
            max_attempts=settings.retry_max_attempts,
        ),
        selector=get_selector(settings.candle_selection),
    )


def run(schema: SchemaVariant, source: Path, target: Path, config: Optional[Path], log_level: str) -> None:
    setup_logging(log_level)
    settings = load_settings(str(config) if config else None)

    remove_existing(str(target))
    rows = read_rows(str(source))
    logger.info(
        f"Pricing {max(len(rows) - 1, 0)} {schema.name} rows at "
        f"{settings.requests_per_second} requests per second, this takes a while."
    )

    try:
        output = Pipeline(build_enricher(schema, settings)).run(rows)
    except PipelineAborted as e:
        # Keep what was finished, never the failing row or anything after it
        write_rows(str(target), e.completed)
        logger.error(f"Stopped at row {e.row_index} of {source}: {e.reason}")
        raise typer.Exit(code=1)

    write_rows(str(target), output)


SOURCE_HELP = "CSV ledger to read from."
TARGET_HELP = "CSV to write to, replaced if it exists."
CONFIG_HELP = "Optional YAML settings file."


@app.command()
def fills(
    source: Path = typer.Option(Path(FILLS.default_input), "--from", "-f", help=SOURCE_HELP),
    target: Path = typer.Option(DEFAULT_OUTPUT, "--to", "-t", help=TARGET_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    log_level: str = typer.Option("INFO", "--log-level", help="Root logging level."),
) -> None:
    """Price a fills export: USD columns after the symbol plus size-normalized totals."""
    run(FILLS, source, target, config, log_level)


@app.command()
def history(
    source: Path = typer.Option(Path(HISTORY.default_input), "--from", "-f", help=SOURCE_HELP),
    target: Path = typer.Option(DEFAULT_OUTPUT, "--to", "-t", help=TARGET_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    log_level: str = typer.Option("INFO", "--log-level", help="Root logging level."),
) -> None:
    """Price an account history export: USD amount, price and bar time appended."""
    run(HISTORY, source, target, config, log_level)
