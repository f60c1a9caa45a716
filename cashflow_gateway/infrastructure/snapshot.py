"""Load the ledger reads a dashboard needs, concurrently"""

import asyncio
import logging
from cashflow_gateway.domain.exceptions import DomainException
from cashflow_gateway.domain.models import LedgerSnapshot
from cashflow_gateway.infrastructure.observability.metrics import ledger_fetch_failures_counter

logger = logging.getLogger(__name__)


async def load_snapshot(reader, year: int) -> LedgerSnapshot:
    """
    Read current year, previous year, active categories and settings.

    The four reads are independent, so they are issued together and joined.
    Any failure aborts the whole snapshot: partial ledgers are never aggregated.

    Args:
        reader: Any ledger reader (SqlLedgerReader, LedgerClient) exposing
            fetch_year, fetch_categories and fetch_settings coroutines
        year: Year being viewed
    """
    try:
        current, previous, categories, ledger_settings = await asyncio.gather(
            reader.fetch_year(year),
            reader.fetch_year(year - 1),
            reader.fetch_categories(active_only=True),
            reader.fetch_settings(),
        )
    except DomainException:
        ledger_fetch_failures_counter.labels(source=getattr(reader, "source", "unknown")).inc()
        raise

    logger.debug(
        "Ledger snapshot loaded",
        extra={
            "year": year,
            "actuals": len(current.actuals),
            "previous_actuals": len(previous.actuals),
            "categories": len(categories),
        },
    )

    return LedgerSnapshot(
        year=year,
        current=current,
        previous=previous,
        categories=categories,
        settings=ledger_settings,
    )
